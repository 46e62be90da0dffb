"""
Trivia game session orchestration.
Drives the main menu and the difficulty, category, count, question and score steps of a round.
"""
import logging
from enum import Enum
from typing import Optional

from .config_manager import ConfigManager
from .errors import PromptAbortedError
from .models import Difficulty, GameSession, PresentedQuestion
from .quiz_engine import QuizEngine
from .terminal import TerminalController
from .trivia_client import TriviaClient

START_GAME = "Start game"
END_GAME = "End game"


class GameState(Enum):
    """States of the game loop."""
    MAIN_MENU = "main_menu"
    DIFFICULTY_SELECT = "difficulty_select"
    CATEGORY_SELECT = "category_select"
    COUNT_ENTRY = "count_entry"
    QUESTION_LOOP = "question_loop"
    SCORE_REPORT = "score_report"
    TERMINATED = "terminated"


class TriviaGame:
    """
    Orchestrates trivia rounds in the terminal.

    Each round asks for a difficulty, a category and a number of questions,
    fetches a question batch from the provider, asks every question and
    reports the success rate before returning to the main menu.

    Provider and decode errors are not handled here: they propagate to the
    caller, which treats them as fatal.
    """

    def __init__(
        self,
        client: TriviaClient,
        terminal: TerminalController,
        config_manager: ConfigManager,
        quiz_engine: Optional[QuizEngine] = None
    ):
        """
        Initialize the game.

        Args:
            client: Trivia provider client
            terminal: Terminal used for every prompt
            config_manager: Question-count limits and validator
            quiz_engine: Question preparation and scoring, a default engine is used if omitted
        """
        self.logger = logging.getLogger(__name__)
        self.client = client
        self.terminal = terminal
        self.config_manager = config_manager
        self.quiz_engine = quiz_engine if quiz_engine is not None else QuizEngine()
        self.state = GameState.MAIN_MENU

    def run(self) -> int:
        """
        Run the main menu loop until the player ends the game.

        Returns:
            Process exit code
        """
        self.logger.info("Trivia game started")
        while True:
            self._transition(GameState.MAIN_MENU)
            try:
                choice = self.terminal.select("Welcome to Trivia app", [START_GAME, END_GAME])
            except PromptAbortedError as e:
                self.logger.info(f"Main menu interrupted, ending game: {e}")
                choice = END_GAME

            if choice == END_GAME:
                self._transition(GameState.TERMINATED)
                self.logger.info("Trivia game ended by player")
                return 0

            try:
                session = self.play_round()
            except PromptAbortedError as e:
                self.logger.warning(f"Round abandoned after interrupted prompt: {e}")
                continue

            self.logger.info(
                f"Round finished: {session.correct_count}/{session.requested_count} correct "
                f"({session.difficulty.value}, {session.category})"
            )

    def play_round(self) -> GameSession:
        """
        Play one round from difficulty selection to score report.

        Returns:
            The finished GameSession

        Raises:
            PromptAbortedError: If the player interrupts a prompt
            TriviaError: If the provider cannot be reached or its data cannot be decoded
        """
        self._transition(GameState.DIFFICULTY_SELECT)
        difficulty = Difficulty(self.terminal.select("Select difficulty", Difficulty.labels()))

        self._transition(GameState.CATEGORY_SELECT)
        categories = self.client.fetch_categories()
        category = self.terminal.select("Select category", categories.menu_options())

        self._transition(GameState.COUNT_ENTRY)
        requested_count = int(self.terminal.prompt(
            "Enter number of questions",
            self.config_manager.validate_question_count
        ))

        questions = self.client.fetch_questions(difficulty, requested_count, category, categories)
        session = GameSession(
            difficulty=difficulty,
            category=category,
            requested_count=requested_count,
            questions=questions
        )

        if len(questions.results) < requested_count:
            # The rate below still divides by the requested count
            self.logger.warning(
                f"Provider returned {len(questions.results)} of {requested_count} requested questions "
                f"(response code {questions.response_code})"
            )

        self._transition(GameState.QUESTION_LOOP)
        for question in questions.results:
            presented = self.quiz_engine.present(question)
            self.ask_question(session, presented)

        self._transition(GameState.SCORE_REPORT)
        self.report_score(session)
        return session

    def ask_question(self, session: GameSession, presented: PresentedQuestion) -> bool:
        """
        Ask a single question and give feedback.

        Args:
            session: Session whose counters are updated
            presented: Decoded question with shuffled options

        Returns:
            True if the player answered correctly
        """
        answer = self.terminal.select(presented.text, presented.options)
        correct = self.quiz_engine.is_correct(presented, answer)
        session.answered_count += 1

        self.terminal.clear_screen()
        self.terminal.show(f"Your answer:  {answer}")
        if correct:
            session.correct_count += 1
            self.terminal.show("You are right!\n")
        else:
            self.terminal.show(f"You are wrong, correct answer is: {presented.correct_answer}\n")
        self.terminal.wait_for_enter()

        self.logger.debug(f"Question {session.answered_count}: {'correct' if correct else 'incorrect'}")
        return correct

    def report_score(self, session: GameSession) -> float:
        """
        Show the success rate for a finished session.

        Returns:
            The success rate in percent
        """
        rate = self.quiz_engine.success_rate(session.correct_count, session.requested_count)

        self.terminal.clear_screen()
        self.terminal.show(f"Success rate is {self.quiz_engine.format_rate(rate)}")
        self.terminal.show(self.quiz_engine.format_summary(session.correct_count, session.requested_count))
        self.terminal.wait_for_enter()
        return rate

    def _transition(self, new_state: GameState) -> None:
        self.logger.debug(f"Game state: {self.state.value} -> {new_state.value}")
        self.state = new_state
