import sys
import json
from pathlib import Path
from typing import Any, Optional

from click.testing import CliRunner
import pytest


def _ensure_repo_on_path() -> None:
    repo_root = Path(__file__).resolve().parent.parent
    if str(repo_root) not in sys.path:
        sys.path.insert(0, str(repo_root))


_ensure_repo_on_path()


def steering_text(
    description: Optional[str] = "Test rule",
    inclusion: Optional[str] = "always",
    patterns: Optional[str] = None,
    body: str = "Rule body.\n",
) -> str:
    lines = ["---"]
    if description is not None:
        lines.append(f"description: {description}")
    if patterns is not None:
        lines.append(f"fileMatchPattern: {patterns}")
    if inclusion is not None:
        lines.append(f"inclusion: {inclusion}")
    lines.append("---")
    lines.append("")
    return "\n".join(lines) + body


def hook_payload(
    trigger: str = "fileEdited",
    patterns: Optional[list[str]] = None,
    enabled: bool = True,
    action: str = "askAgent",
    prompt: str = "Review the change.",
    name: str = "Test hook",
) -> dict[str, Any]:
    when: dict[str, Any] = {"type": trigger}
    if patterns is not None:
        when["patterns"] = patterns
    elif trigger != "manual":
        when["patterns"] = ["*.cs"]
    then: dict[str, Any] = {"type": action}
    if action == "runCommand":
        then["command"] = prompt
    else:
        then["prompt"] = prompt
    return {
        "enabled": enabled,
        "name": name,
        "description": f"{name} description",
        "version": "1",
        "when": when,
        "then": then,
    }


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    root = tmp_path / "workspace"
    (root / ".kiro" / "steering").mkdir(parents=True)
    (root / ".kiro" / "hooks").mkdir(parents=True)
    return root


@pytest.fixture
def steering_root(workspace: Path) -> Path:
    return workspace / ".kiro" / "steering"


@pytest.fixture
def hooks_root(workspace: Path) -> Path:
    return workspace / ".kiro" / "hooks"


@pytest.fixture
def write_steering(steering_root: Path):
    def _write(name: str, text: str) -> Path:
        path = steering_root / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def write_hook(hooks_root: Path):
    def _write(name: str, payload: Any) -> Path:
        path = hooks_root / f"{name}.kiro.hook"
        path.parent.mkdir(parents=True, exist_ok=True)
        text = payload if isinstance(payload, str) else json.dumps(payload)
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def cli_runner() -> CliRunner:
    return CliRunner()
