"""Call site extraction from source text.

Finds `receiver.method(...)` expressions with a regular expression instead of
a language parser. Handles Java and Kotlin call syntax well enough for
navigation: qualified receivers (`this.userStub`), safe calls (`stub?.get(`),
explicit type arguments (`stub.<T>get(` is not supported, `stub.get<T>(` is)
and Kotlin trailing lambdas (`stub.stream { ... }`).
"""

import re
from typing import Optional

from ..models import CallSite

_IDENT = r"[A-Za-z_$][\w$]*"
_DOT = r"\s*(?:\?|!!)?\.\s*"

_RE_CALL = re.compile(
    rf"(?<![\w$.])(?P<receiver>{_IDENT}(?:{_DOT}{_IDENT})*)"
    rf"{_DOT}(?P<method>{_IDENT})\s*(?:<[^<>()]*>\s*)?(?P<open>[({{])"
)
_RE_DOT = re.compile(_DOT)

_OPENERS = "([{"
_CLOSERS = ")]}"


def _call_end(source: str, open_pos: int) -> int:
    """Return the offset just past the bracket matching the one at open_pos.

    String and char literals and `//` / `/* */` comments are skipped. An
    unbalanced call extends to the end of the source.
    """
    depth = 0
    quote = None
    i = open_pos
    while i < len(source):
        char = source[i]
        if quote:
            if char == "\\":
                i += 1
            elif char == quote:
                quote = None
        elif source.startswith("//", i):
            newline = source.find("\n", i)
            if newline == -1:
                return len(source)
            i = newline
        elif source.startswith("/*", i):
            close = source.find("*/", i + 2)
            if close == -1:
                return len(source)
            i = close + 1
        elif char in "\"'":
            quote = char
        elif char in _OPENERS:
            depth += 1
        elif char in _CLOSERS:
            depth -= 1
            if depth == 0:
                return i + 1
        i += 1
    return len(source)


def find_call_sites(source: str) -> list[CallSite]:
    """Find every dot-qualified call in source, in order of appearance."""
    sites = []
    for m in _RE_CALL.finditer(source):
        receiver_text = _RE_DOT.sub(".", m.group("receiver"))
        sites.append(CallSite(
            receiver_name=receiver_text.rsplit(".", 1)[-1],
            method_name=m.group("method"),
            receiver_text=receiver_text,
            start=m.start(),
            end=_call_end(source, m.start("open")),
        ))
    return sites


def extract_call_site(source: str, offset: int) -> Optional[CallSite]:
    """Return the innermost call whose extent contains offset.

    The extent runs from the first character of the receiver to the closing
    bracket of the argument list, so the cursor may sit on the receiver, the
    method name or inside the arguments.
    """
    enclosing = [s for s in find_call_sites(source) if s.start <= offset < s.end]
    if not enclosing:
        return None
    return min(enclosing, key=lambda s: s.end - s.start)


def offset_for(source: str, line: int, col: int) -> int:
    """Convert a 1-based line/column position into a string offset.

    Raises:
        ValueError: If the position lies outside the source.
    """
    lines = source.splitlines(keepends=True)
    if line < 1 or line > len(lines):
        raise ValueError(f"Line {line} out of range (1-{len(lines)})")
    text = lines[line - 1].rstrip("\r\n")
    if col < 1 or col > len(text) + 1:
        raise ValueError(f"Column {col} out of range for line {line} (1-{len(text) + 1})")
    return sum(len(l) for l in lines[: line - 1]) + col - 1
