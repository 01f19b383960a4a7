from typing import Final


KIRO_DIRNAME: Final[str] = ".kiro"
STEERING_DIRNAME: Final[str] = "steering"
HOOKS_DIRNAME: Final[str] = "hooks"
SETTINGS_DIRNAME: Final[str] = "settings"
CONFIG_FILENAME: Final[str] = "steering.json"

STEERING_SUFFIX: Final[str] = ".md"
HOOK_SUFFIX: Final[str] = ".kiro.hook"

FILE_MATCH_PATTERN_KEY: Final[str] = "fileMatchPattern"

DEFAULT_WALK_TIMEOUT: Final[float] = 5.0
