"""
Quiz engine core logic for the trivia game.
Handles answer shuffling, decoding of provider questions and scoring.
"""
import logging
import random
from typing import List, Optional, Sequence

from .models import PresentedQuestion, QuestionItem
from .text_decoder import decode

logger = logging.getLogger(__name__)


class AnswerRandomizer:
    """Builds the shuffled option set for a multiple-choice question."""

    def __init__(self, rng: Optional[random.Random] = None):
        """
        Initialize the randomizer.

        Args:
            rng: Random source, an unseeded random.Random is used if omitted
        """
        self._rng = rng if rng is not None else random.Random()

    def build_options(self, correct_answer: str, incorrect_answers: Sequence[str]) -> List[str]:
        """
        Merge the answers into one list in uniformly random order.

        Args:
            correct_answer: The single correct answer
            incorrect_answers: The wrong answers

        Returns:
            New list holding every incorrect answer and the correct answer once
        """
        options = list(incorrect_answers)
        options.append(correct_answer)
        self._rng.shuffle(options)
        return options


class QuizEngine:
    """Core quiz engine that prepares questions and scores answers."""

    def __init__(self, randomizer: Optional[AnswerRandomizer] = None):
        """Initialize the quiz engine."""
        self.randomizer = randomizer if randomizer is not None else AnswerRandomizer()

    def present(self, question: QuestionItem) -> PresentedQuestion:
        """
        Decode a provider question and shuffle its options.

        Args:
            question: Question with url3986-encoded text fields

        Returns:
            PresentedQuestion with decoded text and shuffled decoded options

        Raises:
            TriviaDecodeError: If any text field is malformed
        """
        correct_answer = decode(question.correct_answer)
        incorrect_answers = [decode(answer) for answer in question.incorrect_answers]

        presented = PresentedQuestion(
            text=decode(question.question),
            options=self.randomizer.build_options(correct_answer, incorrect_answers),
            correct_answer=correct_answer
        )
        logger.debug(f"Prepared question with {len(presented.options)} options")
        return presented

    def is_correct(self, presented: PresentedQuestion, answer: str) -> bool:
        return answer == presented.correct_answer

    def success_rate(self, correct_count: int, requested_count: int) -> float:
        """
        Percentage of correct answers relative to the number of questions requested.

        Args:
            correct_count: Number of correct answers
            requested_count: Number of questions the player asked for

        Returns:
            Rate in percent
        """
        if requested_count <= 0:
            raise ValueError("Requested question count must be positive")
        return correct_count / requested_count * 100

    @staticmethod
    def format_rate(rate: float) -> str:
        return f"{rate:.2f} %"

    @staticmethod
    def format_summary(correct_count: int, requested_count: int) -> str:
        return f"{correct_count} from {requested_count} correct answers"
