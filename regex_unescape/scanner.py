"""
Regex escape decoder.

Reverses the backslash escaping applied to text before it is embedded in a
regular expression pattern. The input is scanned once, left to right, and
every backslash-led sequence is resolved into the literal character it
stands for:

- \\\\ -> backslash (the character after it is scanned on its own)
- \\n \\r \\t \\f \\v \\b \\a \\e -> control characters
- \\xHH -> character U+00HH
- \\uHHHH -> character U+HHHH
- \\<anything else> -> that character, backslash dropped

Malformed hex and unicode tails fall back to the escaped letter alone, and a
trailing backslash is dropped. Neither is an error.
"""

import logging
from enum import Enum
from typing import Iterator, NamedTuple

from .exceptions import InvalidArgumentError

logger = logging.getLogger(__name__)

BACKSLASH = "\\"
HEX_DIGITS = frozenset("0123456789abcdefABCDEF")

CONTROL_ESCAPES = {
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "f": "\f",
    "v": "\v",
    "b": "\b",
    "a": "\x07",
    "e": "\x1b",
}

# Number of hex digits following the escape letter
HEX_WIDTH = 2
UNICODE_WIDTH = 4


def _require_text(text) -> None:
    if not isinstance(text, str):
        raise InvalidArgumentError()


class EscapeKind(str, Enum):
    """How the scanner resolved the character at one position."""

    LITERAL = "literal"
    DANGLING = "dangling"
    BACKSLASH = "backslash"
    CONTROL = "control"
    HEX = "hex"
    UNICODE = "unicode"
    GENERIC = "generic"


class EscapeToken(NamedTuple):
    """One scanner step: input span [start, end) decoded to value."""
    kind: EscapeKind
    start: int
    end: int
    value: str


def _is_hex_run(text: str, start: int, width: int) -> bool:
    """Check that text[start:start + width] exists and is all hex digits."""
    if start + width > len(text):
        return False
    return all(ch in HEX_DIGITS for ch in text[start:start + width])


def classify(text: str, index: int) -> EscapeKind:
    """
    Classify the sequence starting at text[index].

    Args:
        text: Escaped input text.
        index: Position of the scan cursor, 0 <= index < len(text).

    Returns:
        The EscapeKind the scanner commits to at this position.

    Raises:
        InvalidArgumentError: If text is not a str.
        IndexError: If index is outside the text.
    """
    _require_text(text)
    if not 0 <= index < len(text):
        raise IndexError(f"index {index} out of range for text of length {len(text)}")
    return _classify(text, index)


def _classify(text: str, index: int) -> EscapeKind:
    if text[index] != BACKSLASH:
        return EscapeKind.LITERAL
    if index + 1 >= len(text):
        return EscapeKind.DANGLING

    next_char = text[index + 1]
    if next_char == BACKSLASH:
        return EscapeKind.BACKSLASH
    if next_char in CONTROL_ESCAPES:
        return EscapeKind.CONTROL
    if next_char == "x" and _is_hex_run(text, index + 2, HEX_WIDTH):
        return EscapeKind.HEX
    if next_char == "u" and _is_hex_run(text, index + 2, UNICODE_WIDTH):
        return EscapeKind.UNICODE
    return EscapeKind.GENERIC


def _decode_at(text: str, index: int) -> EscapeToken:
    """Resolve the sequence at text[index] into a single token."""
    kind = _classify(text, index)

    if kind is EscapeKind.LITERAL:
        return EscapeToken(kind, index, index + 1, text[index])

    if kind is EscapeKind.DANGLING:
        logger.debug(f"Dropping dangling backslash at offset {index}")
        return EscapeToken(kind, index, index + 1, "")

    next_char = text[index + 1]

    if kind is EscapeKind.BACKSLASH:
        return EscapeToken(kind, index, index + 2, BACKSLASH)

    if kind is EscapeKind.CONTROL:
        return EscapeToken(kind, index, index + 2, CONTROL_ESCAPES[next_char])

    if kind is EscapeKind.HEX:
        end = index + 2 + HEX_WIDTH
        return EscapeToken(kind, index, end, chr(int(text[index + 2:end], 16)))

    if kind is EscapeKind.UNICODE:
        end = index + 2 + UNICODE_WIDTH
        return EscapeToken(kind, index, end, chr(int(text[index + 2:end], 16)))

    if next_char in ("x", "u"):
        logger.debug(
            f"Malformed \\{next_char} escape at offset {index}, "
            f"keeping literal '{next_char}'"
        )
    return EscapeToken(kind, index, index + 2, next_char)


def iter_escapes(text: str) -> Iterator[EscapeToken]:
    """
    Walk text and yield one EscapeToken per scanner step.

    Joining the token values gives the same result as unescape(text).

    Raises:
        InvalidArgumentError: If text is not a str.
    """
    _require_text(text)
    return _iter_tokens(text)


def _iter_tokens(text: str) -> Iterator[EscapeToken]:
    i = 0
    while i < len(text):
        token = _decode_at(text, i)
        yield token
        i = token.end


def unescape(text: str) -> str:
    """
    Decode regex-escaped text back to its literal form.

    Args:
        text: Text produced by a regex escaping routine.

    Returns:
        The literal text.

    Raises:
        InvalidArgumentError: If text is not a str.
    """
    _require_text(text)

    if not text:
        return ""

    # Plain runs are copied in slices; only backslash sequences go through the scanner
    result = []
    i = 0
    length = len(text)
    while i < length:
        backslash = text.find(BACKSLASH, i)
        if backslash < 0:
            result.append(text[i:])
            break
        if backslash > i:
            result.append(text[i:backslash])
        token = _decode_at(text, backslash)
        result.append(token.value)
        i = token.end

    return "".join(result)
