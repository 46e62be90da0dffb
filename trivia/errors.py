"""
Exceptions raised by the trivia game.
"""


class TriviaError(Exception):
    """Base exception for unrecoverable trivia game errors."""
    pass


class TriviaTransportError(TriviaError):
    """Raised when the trivia provider cannot be reached or answers with an HTTP error."""
    pass


class TriviaDecodeError(TriviaError):
    """Raised when a provider payload or an encoded text field cannot be decoded."""
    pass


class PromptAbortedError(Exception):
    """Raised when the player interrupts a terminal prompt."""
    pass
