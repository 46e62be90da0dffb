"""
Configuration manager for the trivia game settings and limits.
"""
import logging
import re
from typing import Optional, Dict, Any

_INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")

# Counts are parsed as signed 64-bit integers
_INT64_MIN = -2 ** 63
_INT64_MAX = 2 ** 63 - 1


class ConfigManager:
    """Manages provider settings and question-count validation."""

    # Default configuration values
    DEFAULT_API_URL = "https://opentdb.com"
    DEFAULT_REQUEST_TIMEOUT = None  # Block until the provider answers

    # Fixed provider parameters
    QUESTION_TYPE = "multiple"
    ENCODE_TYPE = "url3986"

    # Validation limits
    MIN_QUESTION_COUNT = 1
    MAX_QUESTION_COUNT = 10

    # Visible rows in selection menus
    SELECT_SIZE = 10

    def __init__(self):
        """Initialize ConfigManager with default settings."""
        self.logger = logging.getLogger(__name__)
        self._api_url = self.DEFAULT_API_URL
        self._request_timeout: Optional[float] = self.DEFAULT_REQUEST_TIMEOUT

    def validate_question_count(self, text: str) -> Optional[str]:
        """
        Validate the free-text number of questions.

        Args:
            text: Raw text typed by the player

        Returns:
            None when the value is accepted, otherwise the message to show
        """
        if not isinstance(text, str) or not _INTEGER_PATTERN.fullmatch(text):
            return "invalid number"

        count = int(text)
        if count < _INT64_MIN or count > _INT64_MAX:
            return "invalid number"

        if count < self.MIN_QUESTION_COUNT or count > self.MAX_QUESTION_COUNT:
            return f"number should be between {self.MIN_QUESTION_COUNT} and {self.MAX_QUESTION_COUNT}"

        return None

    def get_api_url(self) -> str:
        return self._api_url

    def set_api_url(self, url: str) -> Dict[str, Any]:
        """
        Set the provider base URL.

        Args:
            url: Base URL such as https://opentdb.com

        Returns:
            Dictionary with success status and message or error
        """
        if not isinstance(url, str) or not url.strip():
            error_msg = f"API URL must be a non-empty string, got {url!r}"
            self.logger.error(error_msg)
            return {'success': False, 'error': error_msg}

        if not url.startswith(("http://", "https://")):
            error_msg = f"API URL must start with http:// or https://, got {url}"
            self.logger.error(error_msg)
            return {'success': False, 'error': error_msg}

        self._api_url = url.rstrip("/")
        self.logger.info(f"API URL set to {self._api_url}")
        return {'success': True, 'message': f"API URL set to {self._api_url}"}

    def get_request_timeout(self) -> Optional[float]:
        return self._request_timeout

    def set_request_timeout(self, timeout: Optional[float]) -> Dict[str, Any]:
        """
        Set the HTTP request timeout in seconds, or None to wait indefinitely.

        Returns:
            Dictionary with success status and message or error
        """
        if timeout is None:
            self._request_timeout = None
            self.logger.info("Request timeout disabled")
            return {'success': True, 'message': "Request timeout disabled"}

        if isinstance(timeout, bool) or not isinstance(timeout, (int, float)):
            error_msg = f"Request timeout must be a number, got {type(timeout).__name__}"
            self.logger.error(error_msg)
            return {'success': False, 'error': error_msg}

        if timeout <= 0:
            error_msg = "Request timeout must be positive"
            self.logger.error(error_msg)
            return {'success': False, 'error': error_msg}

        self._request_timeout = float(timeout)
        self.logger.info(f"Request timeout set to {self._request_timeout} seconds")
        return {'success': True, 'message': f"Request timeout set to {self._request_timeout} seconds"}

    def apply_config(self, config: Dict[str, Any]) -> Dict[str, Any]:
        """
        Apply the 'api' section of a loaded configuration dictionary.

        Args:
            config: Parsed configuration, e.g. {"api": {"url": ..., "timeout": ...}}

        Returns:
            Dictionary with overall success and the list of errors encountered
        """
        errors = []
        api_config = config.get('api', {}) or {}

        if 'url' in api_config:
            result = self.set_api_url(api_config['url'])
            if not result['success']:
                errors.append(result['error'])

        if 'timeout' in api_config:
            result = self.set_request_timeout(api_config['timeout'])
            if not result['success']:
                errors.append(result['error'])

        return {'success': not errors, 'errors': errors}

    def get_settings_summary(self) -> str:
        """
        Get a formatted summary of current settings.

        Returns:
            Human-readable string describing current settings
        """
        timeout_str = (
            f"{self._request_timeout} seconds"
            if self._request_timeout is not None
            else "none"
        )

        return (
            f"Trivia Settings:\n"
            f"• Provider: {self._api_url}\n"
            f"• Request timeout: {timeout_str}\n"
            f"• Questions per game: {self.MIN_QUESTION_COUNT}-{self.MAX_QUESTION_COUNT}\n"
            f"• Question type: {self.QUESTION_TYPE}, encoding {self.ENCODE_TYPE}"
        )
