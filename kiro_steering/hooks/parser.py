"""Parse ``*.kiro.hook`` JSON documents into hooks."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from kiro_steering.constants import HOOK_SUFFIX
from kiro_steering.errors import (
    InvalidJsonFormatError,
    PatternSyntaxError,
    SchemaValidationError,
    UnreadableFileError,
)
from kiro_steering.hooks.models import (
    TRIGGER_ALIASES,
    ActionType,
    Hook,
    HookAction,
    HookTrigger,
    TriggerType,
)
from kiro_steering.hooks.schema import hook_validator
from kiro_steering.patterns import PatternSet
from kiro_steering.utils import relative_id, schema_error_message


def validate_hook_payload(payload: Any, path: Path) -> None:
    if not isinstance(payload, dict):
        raise SchemaValidationError(path, "must be a JSON object")
    error = next(iter(hook_validator().iter_errors(payload)), None)
    if error is not None:
        raise SchemaValidationError(path, schema_error_message(error))


def _trigger_type(value: str) -> TriggerType:
    if value in TRIGGER_ALIASES:
        return TRIGGER_ALIASES[value]
    return TriggerType(value)


def build_hook(
    payload: dict[str, Any], path: Path, hook_id: str, case_sensitive: bool = True
) -> Hook:
    validate_hook_payload(payload, path)

    when = payload["when"]
    trigger_type = _trigger_type(when["type"])
    patterns = PatternSet()
    if trigger_type.is_file_trigger:
        try:
            patterns = PatternSet.compile(when["patterns"], case_sensitive=case_sensitive)
        except PatternSyntaxError as exc:
            raise exc.with_path(path) from exc

    then = payload["then"]
    action_type = ActionType(then["type"])
    if action_type == ActionType.RUN_COMMAND:
        template = then.get("command", then.get("prompt", ""))
    else:
        template = then["prompt"]

    return Hook(
        id=hook_id,
        name=payload["name"],
        description=payload["description"],
        version=str(payload["version"]),
        enabled=payload["enabled"],
        trigger=HookTrigger(type=trigger_type, patterns=patterns),
        action=HookAction(type=action_type, template=template),
        source_path=path,
    )


def parse_hook_file(path: Path, root: Path, case_sensitive: bool = True) -> Hook:
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise UnreadableFileError(path, str(exc)) from exc
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise InvalidJsonFormatError(path, str(exc)) from exc
    return build_hook(
        payload,
        path=path,
        hook_id=relative_id(path, root, HOOK_SUFFIX),
        case_sensitive=case_sensitive,
    )
