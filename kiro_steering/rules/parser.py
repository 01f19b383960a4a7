"""Parse steering files with YAML front matter."""

from __future__ import annotations

import json
import re
from pathlib import Path

import yaml

from kiro_steering.constants import FILE_MATCH_PATTERN_KEY, STEERING_SUFFIX
from kiro_steering.errors import (
    MalformedFrontMatterError,
    PatternSyntaxError,
    UnreadableFileError,
)
from kiro_steering.patterns import PatternSet, split_pattern_list
from kiro_steering.rules.models import Inclusion, SteeringRule
from kiro_steering.utils import relative_id

_FRONTMATTER_RE = re.compile(r"^---[ \t]*\n(.*?)\n---[ \t]*(?:\n|$)", re.DOTALL)
_PATTERN_LINE_RE = re.compile(rf"^({FILE_MATCH_PATTERN_KEY}\s*:)\s*(.*)$")
_LIST_ITEM_RE = re.compile(r"^(\s*-\s+)(.+)$")


def split_front_matter(text: str) -> tuple[str | None, str]:
    text = text.lstrip("\ufeff").replace("\r\n", "\n")
    match = _FRONTMATTER_RE.match(text)
    if not match:
        return None, text
    return match.group(1), text[match.end() :]


def _strip_comment(value: str) -> str:
    """Drop a trailing ``# comment`` that sits outside quotes and braces."""
    quote = ""
    depth = 0
    token_start = True
    for index, char in enumerate(value):
        if quote:
            if char == quote:
                quote = ""
                token_start = False
            continue
        if char in "'\"" and token_start:
            quote = char
        elif char == "#" and depth == 0 and (index == 0 or value[index - 1].isspace()):
            return value[:index].rstrip()
        elif char == "{":
            depth += 1
        elif char == "}":
            depth = max(depth - 1, 0)
        if char == "," and depth == 0:
            token_start = True
        elif not char.isspace():
            token_start = False
    return value


def _quote_patterns(block: str) -> str:
    # Bare globs start with "*" (a YAML alias) and comma-joined quoted
    # scalars are not valid YAML, so the pattern value is rewritten as JSON.
    lines = block.split("\n")
    in_list = False
    for index, line in enumerate(lines):
        match = _PATTERN_LINE_RE.match(line)
        if match:
            value = _strip_comment(match.group(2)).strip()
            if value:
                lines[index] = f"{match.group(1)} {json.dumps(split_pattern_list(value))}"
                in_list = False
            else:
                in_list = True
            continue
        if in_list:
            item = _LIST_ITEM_RE.match(line)
            if item:
                tokens = split_pattern_list(_strip_comment(item.group(2)))
                value = tokens[0] if len(tokens) == 1 else tokens
                lines[index] = f"{item.group(1)}{json.dumps(value)}"
                continue
            if line.strip():
                in_list = False
    return "\n".join(lines)


def load_front_matter(path: Path, block: str) -> dict:
    try:
        raw = yaml.safe_load(_quote_patterns(block))
    except yaml.YAMLError as exc:
        raise MalformedFrontMatterError(path, f"invalid YAML: {exc}") from exc
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise MalformedFrontMatterError(path, "front matter must be a mapping")
    return raw


def parse_steering_text(
    text: str, path: Path, rule_id: str, case_sensitive: bool = True
) -> SteeringRule:
    block, content = split_front_matter(text)
    if block is None:
        raise MalformedFrontMatterError(path, "missing front matter block")
    raw = load_front_matter(path, block)

    description = raw.get("description")
    if description is None:
        raise MalformedFrontMatterError(path, "missing 'description'")
    if "inclusion" not in raw or raw["inclusion"] is None:
        raise MalformedFrontMatterError(path, "missing 'inclusion'")
    try:
        inclusion = Inclusion.parse(raw["inclusion"])
    except ValueError as exc:
        raise MalformedFrontMatterError(path, str(exc)) from exc

    patterns = PatternSet()
    if inclusion == Inclusion.FILE_MATCH:
        globs = split_pattern_list(raw.get(FILE_MATCH_PATTERN_KEY))
        if not globs:
            raise MalformedFrontMatterError(
                path, f"'{FILE_MATCH_PATTERN_KEY}' is required for fileMatch inclusion"
            )
        try:
            patterns = PatternSet.compile(globs, case_sensitive=case_sensitive)
        except PatternSyntaxError as exc:
            raise exc.with_path(path) from exc

    return SteeringRule(
        id=rule_id,
        description=str(description),
        inclusion=inclusion,
        source_path=path,
        patterns=patterns,
        content=content,
    )


def parse_steering_file(path: Path, root: Path, case_sensitive: bool = True) -> SteeringRule:
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise UnreadableFileError(path, str(exc)) from exc
    return parse_steering_text(
        text,
        path=path,
        rule_id=relative_id(path, root, STEERING_SUFFIX),
        case_sensitive=case_sensitive,
    )
