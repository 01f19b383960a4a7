from functools import lru_cache

from jsonschema import Draft202012Validator

from kiro_steering.hooks.models import TRIGGER_ALIASES, ActionType, TriggerType

FILE_TRIGGER_TYPES = [item.value for item in TriggerType if item.is_file_trigger]
TRIGGER_TYPES = [item.value for item in TriggerType] + sorted(TRIGGER_ALIASES)

HOOK_SCHEMA = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "required": ["enabled", "name", "description", "version", "when", "then"],
    "properties": {
        "enabled": {"type": "boolean"},
        "name": {"type": "string"},
        "description": {"type": "string"},
        "version": {"type": ["string", "number"]},
        "when": {
            "type": "object",
            "required": ["type"],
            "properties": {
                "type": {"enum": TRIGGER_TYPES},
                "patterns": {"type": "array", "items": {"type": "string"}},
            },
            "if": {
                "required": ["type"],
                "properties": {"type": {"enum": FILE_TRIGGER_TYPES}},
            },
            "then": {
                "required": ["patterns"],
                "properties": {"patterns": {"minItems": 1}},
            },
        },
        "then": {
            "type": "object",
            "required": ["type"],
            "properties": {
                "type": {"enum": [item.value for item in ActionType]},
                "prompt": {"type": "string"},
                "command": {"type": "string"},
            },
            "allOf": [
                {
                    "if": {
                        "required": ["type"],
                        "properties": {"type": {"const": ActionType.ASK_AGENT.value}},
                    },
                    "then": {"required": ["prompt"]},
                },
                {
                    "if": {
                        "required": ["type"],
                        "properties": {"type": {"const": ActionType.RUN_COMMAND.value}},
                    },
                    "then": {"anyOf": [{"required": ["command"]}, {"required": ["prompt"]}]},
                },
            ],
        },
    },
    "additionalProperties": True,
}


@lru_cache(maxsize=1)
def hook_validator() -> Draft202012Validator:
    return Draft202012Validator(HOOK_SCHEMA)
