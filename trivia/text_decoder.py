"""
Decoding of the provider's url3986 text encoding.
"""
import re
from urllib.parse import unquote_plus

from .errors import TriviaDecodeError

# A '%' must always introduce two hex digits
_MALFORMED_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def decode(text: str) -> str:
    """
    Reverse the url3986 percent-encoding of a question or answer string.

    Args:
        text: Encoded text as received from the provider

    Returns:
        Displayable text

    Raises:
        TriviaDecodeError: If the text holds a malformed escape sequence
            or the escapes do not form valid UTF-8
    """
    match = _MALFORMED_ESCAPE.search(text)
    if match:
        snippet = text[match.start():match.start() + 3]
        raise TriviaDecodeError(f"invalid URL escape {snippet!r} in {text!r}")

    try:
        return unquote_plus(text, encoding="utf-8", errors="strict")
    except UnicodeDecodeError as e:
        raise TriviaDecodeError(f"invalid UTF-8 in encoded text {text!r}: {e}") from e
