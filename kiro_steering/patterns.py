"""Glob matching for steering ``fileMatchPattern`` values and hook patterns.

Paths and patterns are compared segment by segment on ``/``:

- ``*`` matches any run of characters inside one segment,
- ``?`` matches one character inside one segment,
- ``**`` as a whole segment matches zero or more segments,
- ``[abc]`` / ``[!abc]`` match one character from (or outside) a class,
- ``{a,b}`` matches any of the comma-separated alternatives.

A pattern without ``/`` is matched against the file name at any depth, so
``*.cs`` matches ``src/App/Program.cs``. Patterns containing or starting
with ``/`` are anchored at the workspace root. Backslashes in either side
are read as separators.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Sequence

from kiro_steering.errors import PatternSyntaxError

_SEPARATORS_RE = re.compile(r"/{2,}")
_ANY_SEGMENTS = "(?:[^/]+/)*"
_ANY_PATH = "(?:[^/]+(?:/[^/]+)*)?"


def normalize_path(path: str) -> str:
    text = str(path).replace("\\", "/")
    text = _SEPARATORS_RE.sub("/", text)
    while text.startswith("./"):
        text = text[2:]
    return text.lstrip("/")


def split_pattern_list(raw: object) -> list[str]:
    """Tokenize a ``fileMatchPattern`` value into individual globs.

    Accepts a YAML list, a single glob, or several quoted/bare globs joined
    by commas in one scalar (``"*.cs", "*.csproj"``).
    """
    if raw is None:
        return []
    if isinstance(raw, (list, tuple)):
        items: list[str] = []
        for item in raw:
            items.extend(split_pattern_list(item))
        return items

    text = str(raw).strip()
    if not text:
        return []
    if text.startswith("[") and text.endswith("]"):
        text = text[1:-1]

    tokens: list[str] = []
    current = ""
    quote = ""
    depth = 0
    for char in text:
        if quote:
            if char == quote:
                quote = ""
            else:
                current += char
            continue
        if char in "'\"" and not current.strip():
            quote = char
            current = ""
            continue
        if char == "{":
            depth += 1
        elif char == "}":
            depth = max(depth - 1, 0)
        elif char == "," and depth == 0:
            tokens.append(current.strip())
            current = ""
            continue
        current += char
    tokens.append(current.strip())
    return [token for token in tokens if token]


def _translate_class(segment: str, start: int, pattern: str) -> tuple[str, int]:
    index = start + 1
    negate = False
    if index < len(segment) and segment[index] in "!^":
        negate = True
        index += 1
    body_start = index
    if index < len(segment) and segment[index] == "]":
        index += 1
    while index < len(segment) and segment[index] != "]":
        index += 1
    if index >= len(segment):
        raise PatternSyntaxError(pattern, "unterminated character class")

    body = segment[body_start:index]
    body = body.replace("\\", "\\\\").replace("[", "\\[").replace("]", "\\]")
    if not body:
        raise PatternSyntaxError(pattern, "empty character class")
    if negate:
        return f"[^/{body}]", index + 1
    return f"[{body}]", index + 1


def _find_brace_end(segment: str, start: int) -> int:
    depth = 0
    for index in range(start, len(segment)):
        char = segment[index]
        if char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return index
    return -1


def _split_alternatives(body: str) -> list[str]:
    parts: list[str] = []
    depth = 0
    current = ""
    for char in body:
        if char == "," and depth == 0:
            parts.append(current)
            current = ""
            continue
        if char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
        current += char
    parts.append(current)
    return parts


def _translate_segment(segment: str, pattern: str) -> str:
    out: list[str] = []
    index = 0
    while index < len(segment):
        char = segment[index]
        if char == "*":
            while index < len(segment) and segment[index] == "*":
                index += 1
            out.append("[^/]*")
            continue
        if char == "?":
            out.append("[^/]")
        elif char == "[":
            translated, index = _translate_class(segment, index, pattern)
            out.append(translated)
            continue
        elif char == "{":
            end = _find_brace_end(segment, index)
            if end == -1:
                raise PatternSyntaxError(pattern, "unterminated brace group")
            alternatives = [
                _translate_segment(option, pattern)
                for option in _split_alternatives(segment[index + 1 : end])
            ]
            out.append("(?:" + "|".join(alternatives) + ")")
            index = end + 1
            continue
        else:
            out.append(re.escape(char))
        index += 1
    return "".join(out)


def _check_braces(pattern: str) -> None:
    depth = 0
    for char in pattern:
        if char == "{":
            depth += 1
        elif char == "}":
            depth = max(depth - 1, 0)
        elif char == "/" and depth > 0:
            raise PatternSyntaxError(pattern, "path separator inside brace group")
    if depth > 0:
        raise PatternSyntaxError(pattern, "unterminated brace group")


def translate(pattern: str) -> str:
    """Translate a glob into an anchored regular expression string."""
    anchored = pattern.strip().replace("\\", "/").startswith("/")
    normalized = normalize_path(pattern.strip())
    if not normalized:
        raise PatternSyntaxError(pattern, "empty pattern")
    _check_braces(normalized)

    if normalized.endswith("/"):
        normalized = normalized + "**"
    if "/" not in normalized and not anchored:
        normalized = "**/" + normalized

    segments = normalized.split("/")
    out = ""
    for index, segment in enumerate(segments):
        last = index == len(segments) - 1
        if segment == "**":
            if not last:
                out += _ANY_SEGMENTS
            elif out.endswith("/"):
                out = out[:-1] + "(?:/[^/]+)*"
            else:
                out += _ANY_PATH
            continue
        out += _translate_segment(segment, pattern)
        if not last:
            out += "/"
    return rf"^{out}\Z"


@dataclass(frozen=True)
class GlobPattern:
    source: str
    regex: re.Pattern

    def matches(self, path: str) -> bool:
        return self.regex.fullmatch(normalize_path(path)) is not None


def compile_pattern(pattern: str, case_sensitive: bool = True) -> GlobPattern:
    flags = 0 if case_sensitive else re.IGNORECASE
    expression = translate(pattern)
    try:
        regex = re.compile(expression, flags)
    except re.error as exc:
        raise PatternSyntaxError(pattern, str(exc)) from exc
    return GlobPattern(source=pattern, regex=regex)


@dataclass(frozen=True)
class PatternSet:
    patterns: tuple[GlobPattern, ...] = ()

    @classmethod
    def compile(cls, patterns: Iterable[str], case_sensitive: bool = True) -> "PatternSet":
        return cls(tuple(compile_pattern(item, case_sensitive) for item in patterns))

    @property
    def sources(self) -> tuple[str, ...]:
        return tuple(item.source for item in self.patterns)

    def __bool__(self) -> bool:
        return bool(self.patterns)

    def matches(self, path: str) -> bool:
        normalized = normalize_path(path)
        return any(item.regex.fullmatch(normalized) for item in self.patterns)


def match(path: str, patterns: Sequence[str], case_sensitive: bool = True) -> bool:
    """Return True if ``path`` matches any glob in ``patterns``.

    An empty pattern list never matches.
    """
    if not patterns:
        return False
    return PatternSet.compile(patterns, case_sensitive).matches(path)
