import json
from dataclasses import dataclass, replace
from functools import lru_cache
from pathlib import Path
from typing import Any, Optional

from jsonschema import Draft202012Validator

from kiro_steering.constants import (
    CONFIG_FILENAME,
    DEFAULT_WALK_TIMEOUT,
    HOOKS_DIRNAME,
    KIRO_DIRNAME,
    SETTINGS_DIRNAME,
    STEERING_DIRNAME,
)
from kiro_steering.errors import InvalidConfigSchemaError, InvalidJsonFormatError
from kiro_steering.utils import read_json, schema_error_message

CONFIG_SCHEMA = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "properties": {
        "steeringDir": {"type": "string", "minLength": 1},
        "hooksDir": {"type": "string", "minLength": 1},
        "caseSensitive": {"type": "boolean"},
        "walkTimeout": {"type": "number", "exclusiveMinimum": 0},
    },
    "additionalProperties": False,
}


@lru_cache(maxsize=1)
def _config_validator() -> Draft202012Validator:
    return Draft202012Validator(CONFIG_SCHEMA)


@dataclass(frozen=True)
class EngineConfig:
    workspace_root: Path
    steering_dir: Path = Path(KIRO_DIRNAME) / STEERING_DIRNAME
    hooks_dir: Path = Path(KIRO_DIRNAME) / HOOKS_DIRNAME
    case_sensitive: bool = True
    walk_timeout: Optional[float] = DEFAULT_WALK_TIMEOUT

    @property
    def steering_root(self) -> Path:
        return self.workspace_root / self.steering_dir

    @property
    def hooks_root(self) -> Path:
        return self.workspace_root / self.hooks_dir


def config_path(workspace_root: Path) -> Path:
    return workspace_root / KIRO_DIRNAME / SETTINGS_DIRNAME / CONFIG_FILENAME


def validate_config_payload(payload: Any, path: Path) -> None:
    if not isinstance(payload, dict):
        raise InvalidConfigSchemaError(path, "must be a JSON object")
    error = next(iter(_config_validator().iter_errors(payload)), None)
    if error is not None:
        raise InvalidConfigSchemaError(path, schema_error_message(error))


def load_config(workspace_root: Path, **overrides: Any) -> EngineConfig:
    """Build an :class:`EngineConfig` for ``workspace_root``.

    Values come from ``.kiro/settings/steering.json`` when present; keyword
    overrides that are not ``None`` take precedence over the file.
    """
    root = workspace_root.expanduser().resolve()
    config = EngineConfig(workspace_root=root)

    path = config_path(root)
    if path.exists() and path.stat().st_size > 0:
        try:
            payload = read_json(path)
        except json.JSONDecodeError as exc:
            raise InvalidJsonFormatError(path, str(exc)) from exc
        validate_config_payload(payload, path)
        config = replace(
            config,
            steering_dir=Path(payload.get("steeringDir", config.steering_dir)),
            hooks_dir=Path(payload.get("hooksDir", config.hooks_dir)),
            case_sensitive=payload.get("caseSensitive", config.case_sensitive),
            walk_timeout=float(payload.get("walkTimeout", config.walk_timeout)),
        )

    explicit = {key: value for key, value in overrides.items() if value is not None}
    if explicit:
        config = replace(config, **explicit)
    return config
