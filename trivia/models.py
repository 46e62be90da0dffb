"""
Core data models for the terminal trivia game.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


RANDOM_CHOICE = "Random"


class Difficulty(Enum):
    """Difficulty levels offered in the difficulty menu."""
    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"
    RANDOM = RANDOM_CHOICE

    @property
    def query_value(self) -> Optional[str]:
        """Value for the provider's difficulty filter, None when it must be omitted."""
        if self is Difficulty.RANDOM:
            return None
        return self.value.lower()

    @classmethod
    def labels(cls) -> List[str]:
        return [member.value for member in cls]


@dataclass(frozen=True)
class CategoryItem:
    """A single question category as listed by the provider."""
    id: int
    name: str


@dataclass(frozen=True)
class CategoryList:
    """Ordered provider categories."""
    items: List[CategoryItem] = field(default_factory=list)

    def menu_options(self) -> List[str]:
        """Category names for the menu, with the Random pseudo-category first."""
        return [RANDOM_CHOICE] + [item.name for item in self.items]

    def find_id(self, name: str) -> int:
        """
        Resolve a category name to its provider id.

        Args:
            name: Category name selected in the menu

        Returns:
            Matching category id, or 0 when no category has that name
        """
        category_id = 0
        for item in self.items:
            if item.name == name:
                category_id = item.id
        return category_id

    def __len__(self) -> int:
        return len(self.items)


@dataclass(frozen=True)
class QuestionItem:
    """A question as returned by the provider, text fields still encoded."""
    category: str
    type: str
    difficulty: str
    question: str
    correct_answer: str
    incorrect_answers: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class QuestionBatch:
    """Provider response for a question request."""
    response_code: int
    results: List[QuestionItem] = field(default_factory=list)

    @property
    def is_success(self) -> bool:
        return self.response_code == 0


@dataclass(frozen=True)
class PresentedQuestion:
    """A decoded question ready to be shown, with its options already shuffled."""
    text: str
    options: List[str]
    correct_answer: str


@dataclass
class GameSession:
    """State of a single play-through, from difficulty selection to score report."""
    difficulty: Difficulty
    category: str
    requested_count: int
    questions: QuestionBatch
    correct_count: int = 0
    answered_count: int = 0
