import io
import os
from unittest import mock

import pytest

from regex_unescape.config import reset_settings

SYNTAX_CHARACTERS = frozenset("^$\\.*+?()[]{}|/")
OTHER_PUNCTUATORS = frozenset(",-=<>#&!%:;@~'`\"")
CONTROL_LETTERS = {"\t": "t", "\n": "n", "\v": "v", "\f": "f", "\r": "r"}
EXTRA_WHITESPACE = frozenset(
    "\u00a0\u1680\u2000\u2001\u2002\u2003\u2004\u2005\u2006\u2007\u2008\u2009\u200a"
    "\u2028\u2029\u202f\u205f\u3000\ufeff\x20"
)


def regexp_escape(text: str) -> str:
    """Escape text the way ECMAScript RegExp.escape formats its output."""
    out = []
    for index, ch in enumerate(text):
        if index == 0 and ch.isascii() and ch.isalnum():
            out.append(f"\\x{ord(ch):02x}")
        elif ch in SYNTAX_CHARACTERS:
            out.append("\\" + ch)
        elif ch in CONTROL_LETTERS:
            out.append("\\" + CONTROL_LETTERS[ch])
        elif ch in OTHER_PUNCTUATORS or ch in EXTRA_WHITESPACE:
            if ord(ch) <= 0xFF:
                out.append(f"\\x{ord(ch):02x}")
            else:
                out.append(f"\\u{ord(ch):04x}")
        else:
            out.append(ch)
    return "".join(out)


@pytest.fixture(autouse=True)
def clean_settings():
    """Isolate each test from REGEX_UNESCAPE_* variables and cached settings."""
    with mock.patch.dict(os.environ):
        for key in [k for k in os.environ if k.startswith("REGEX_UNESCAPE_")]:
            del os.environ[key]
        reset_settings()
        yield
    reset_settings()


@pytest.fixture
def feed_stdin(monkeypatch):
    """Replace stdin with a byte stream holding data."""
    def feed(data):
        if isinstance(data, str):
            data = data.encode("utf-8")
        monkeypatch.setattr("sys.stdin", io.TextIOWrapper(io.BytesIO(data)))
    return feed
