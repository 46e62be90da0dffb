"""
Client for the remote trivia provider (Open Trivia DB).
Builds category and question requests and validates the JSON payloads.
"""
import logging
from typing import Dict, List, Optional

import requests

from .config_manager import ConfigManager
from .errors import TriviaDecodeError, TriviaTransportError
from .models import CategoryItem, CategoryList, Difficulty, QuestionBatch, QuestionItem, RANDOM_CHOICE

CATEGORY_ENDPOINT = "api_category.php"
QUESTION_ENDPOINT = "api.php"

RESPONSE_CODE_MEANINGS = {
    0: "success",
    1: "no results, not enough questions for the query",
    2: "invalid parameter",
    3: "session token not found",
    4: "session token exhausted",
    5: "rate limit exceeded",
}


class TriviaClient:
    """Fetches categories and question batches from the trivia provider."""

    def __init__(self, config_manager: ConfigManager, session: Optional[requests.Session] = None):
        """
        Initialize the client.

        Args:
            config_manager: Source of the provider URL, timeout and fixed parameters
            session: Optional requests session, a new one is created if omitted
        """
        self.logger = logging.getLogger(__name__)
        self.config_manager = config_manager
        self.session = session if session is not None else requests.Session()

    def close(self) -> None:
        self.session.close()

    def fetch_categories(self) -> CategoryList:
        """
        Fetch the list of question categories.

        Returns:
            CategoryList in provider order

        Raises:
            TriviaTransportError: If the request fails
            TriviaDecodeError: If the payload is not a valid category listing
        """
        data = self._get_json(CATEGORY_ENDPOINT)
        categories = self._parse_categories(data)
        self.logger.info(f"Fetched {len(categories)} categories")
        return categories

    def build_question_params(
        self,
        difficulty: Difficulty,
        count: int,
        category: str,
        categories: CategoryList
    ) -> Dict[str, str]:
        """
        Build the query parameters for a question request.

        Random difficulty and the Random category leave their filter out
        entirely so the provider picks from every pool.

        Args:
            difficulty: Selected difficulty
            count: Validated number of questions
            category: Selected category name, or "Random"
            categories: Category list the menu was built from

        Returns:
            Query parameter mapping
        """
        params = {
            "amount": str(count),
            "type": self.config_manager.QUESTION_TYPE,
            "encode": self.config_manager.ENCODE_TYPE,
        }

        if difficulty.query_value is not None:
            params["difficulty"] = difficulty.query_value

        if category != RANDOM_CHOICE:
            category_id = categories.find_id(category)
            if category_id == 0:
                self.logger.warning(f"No category id found for {category!r}, sending 0")
            params["category"] = str(category_id)

        return params

    def fetch_questions(
        self,
        difficulty: Difficulty,
        count: int,
        category: str,
        categories: CategoryList
    ) -> QuestionBatch:
        """
        Fetch a batch of multiple-choice questions.

        Returns:
            QuestionBatch with the provider's response code and still-encoded questions

        Raises:
            TriviaTransportError: If the request fails
            TriviaDecodeError: If the payload is not a valid question batch
        """
        params = self.build_question_params(difficulty, count, category, categories)
        data = self._get_json(QUESTION_ENDPOINT, params)
        batch = self._parse_questions(data)

        if not batch.is_success:
            meaning = RESPONSE_CODE_MEANINGS.get(batch.response_code, "unknown")
            self.logger.warning(
                f"Provider returned response code {batch.response_code} ({meaning}) "
                f"with {len(batch.results)} questions"
            )
        else:
            self.logger.info(f"Fetched {len(batch.results)} questions with params {params}")

        return batch

    def _get_json(self, endpoint: str, params: Optional[Dict[str, str]] = None) -> dict:
        url = f"{self.config_manager.get_api_url()}/{endpoint}"
        self.logger.debug(f"GET {url} params={params}")

        try:
            response = self.session.get(
                url,
                params=params,
                timeout=self.config_manager.get_request_timeout()
            )
            response.raise_for_status()
        except requests.RequestException as e:
            raise TriviaTransportError(f"Request to {url} failed: {e}") from e

        try:
            return response.json()
        except ValueError as e:
            raise TriviaDecodeError(f"Invalid JSON from {url}: {e}") from e

    def _parse_categories(self, data: dict) -> CategoryList:
        """
        Validate and parse a category listing.

        Expected structure:
        {
            "trivia_categories": [
                {"id": int, "name": str}
            ]
        }
        """
        if not isinstance(data, dict):
            raise TriviaDecodeError("Category payload must be a JSON object")

        raw_categories = data.get("trivia_categories")
        if not isinstance(raw_categories, list):
            raise TriviaDecodeError("Category payload must contain a 'trivia_categories' array")

        items = []
        for i, raw in enumerate(raw_categories):
            if not isinstance(raw, dict):
                raise TriviaDecodeError(f"Category {i} must be an object")
            if not isinstance(raw.get("id"), int) or isinstance(raw.get("id"), bool):
                raise TriviaDecodeError(f"Category {i} 'id' field must be an integer")
            if not isinstance(raw.get("name"), str):
                raise TriviaDecodeError(f"Category {i} 'name' field must be a string")
            items.append(CategoryItem(id=raw["id"], name=raw["name"]))

        return CategoryList(items=items)

    def _parse_questions(self, data: dict) -> QuestionBatch:
        """
        Validate and parse a question batch.

        Expected structure:
        {
            "response_code": int,
            "results": [
                {
                    "category": str,
                    "type": str,
                    "difficulty": str,
                    "question": str,
                    "correct_answer": str,
                    "incorrect_answers": [str]
                }
            ]
        }
        """
        if not isinstance(data, dict):
            raise TriviaDecodeError("Question payload must be a JSON object")

        response_code = data.get("response_code")
        if not isinstance(response_code, int) or isinstance(response_code, bool):
            raise TriviaDecodeError("Question payload must contain an integer 'response_code'")

        raw_results = data.get("results", [])
        if not isinstance(raw_results, list):
            raise TriviaDecodeError("'results' value must be an array")

        results: List[QuestionItem] = []
        for i, raw in enumerate(raw_results):
            if not isinstance(raw, dict):
                raise TriviaDecodeError(f"Question {i} must be an object")

            for key in ("category", "type", "difficulty", "question", "correct_answer"):
                if not isinstance(raw.get(key), str):
                    raise TriviaDecodeError(f"Question {i} '{key}' field must be a string")

            incorrect = raw.get("incorrect_answers")
            if not isinstance(incorrect, list) or not all(isinstance(a, str) for a in incorrect):
                raise TriviaDecodeError(f"Question {i} 'incorrect_answers' field must be an array of strings")

            results.append(QuestionItem(
                category=raw["category"],
                type=raw["type"],
                difficulty=raw["difficulty"],
                question=raw["question"],
                correct_answer=raw["correct_answer"],
                incorrect_answers=list(incorrect)
            ))

        return QuestionBatch(response_code=response_code, results=results)
