"""
Reader for instance `.conf` files.

The files are shell-style assignment lists, as written by operators:

    # General
    PORT=27015
    TITLE="My CS2 Server"
    MAPS=( de_dust2 de_mirage de_inferno )
    export GSLT=ABCDEF

Values follow POSIX shell word quoting. An empty assignment (`KEY=`) marks
the key as explicitly absent, which is different from not mentioning it.
"""

from __future__ import annotations
import re
import shlex
from pathlib import Path
from typing import Dict, List, Optional, Union

from ..errors import ConfigParseError
from ..logging_setup import get_logger

log = get_logger("cs2.launcher.config")

ConfValue = Union[str, List[str]]

_ASSIGNMENT = re.compile(r"^(?:export\s+)?([A-Za-z_][A-Za-z0-9_]*)=(.*)$")


def parse_conf(text: str, source: str = "<string>") -> Dict[str, ConfValue]:
    values: Dict[str, ConfValue] = {}
    lines = iter(enumerate(text.splitlines(), start=1))
    for lineno, raw in lines:
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        m = _ASSIGNMENT.match(line)
        if not m:
            raise ConfigParseError(f"{source}:{lineno}: expected KEY=value, got {raw!r}")
        key, rhs = m.group(1), m.group(2).strip()

        if rhs.startswith("("):
            # arrays may span several lines until the closing parenthesis
            body = rhs[1:]
            words = _array_words(body, source, lineno)
            while words is None:
                try:
                    _, cont = next(lines)
                except StopIteration:
                    raise ConfigParseError(f"{source}:{lineno}: unterminated array for {key}")
                body += "\n" + cont
                words = _array_words(body, source, lineno)
            values[key] = words
            continue

        words = _words(rhs, source, lineno)
        values[key] = " ".join(words)
    return values


def load_conf(path: Path) -> Dict[str, ConfValue]:
    log.debug("Reading %s", path)
    return parse_conf(path.read_text(encoding="utf-8"), source=str(path))


def load_optional_conf(path: Path) -> Optional[Dict[str, ConfValue]]:
    if not path.is_file():
        return None
    return load_conf(path)


def _array_words(body: str, source: str, lineno: int) -> Optional[List[str]]:
    """
    Words of an array body up to its first unquoted `)`.

    None means the body is not complete yet (no `)` or an open quote).
    """
    lex = shlex.shlex(body, posix=True, punctuation_chars=")")
    lex.whitespace_split = True
    words: List[str] = []
    closed = False
    try:
        for tok in lex:
            if closed or (tok.startswith(")") and tok != ")"):
                raise ConfigParseError(f"{source}:{lineno}: unexpected text after array: {tok!r}")
            if tok == ")":
                closed = True
                continue
            words.append(tok)
    except ValueError:
        return None
    return words if closed else None


def _words(s: str, source: str, lineno: int) -> List[str]:
    try:
        return shlex.split(s, comments=True)
    except ValueError as e:
        raise ConfigParseError(f"{source}:{lineno}: {e}")
