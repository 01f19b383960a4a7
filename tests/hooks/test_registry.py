"""Tests for HookRegistry."""

from pathlib import Path

from kiro_steering.errors import SchemaValidationError
from kiro_steering.hooks.registry import HookRegistry
from kiro_steering.models import EventKind
from tests.conftest import hook_payload


def test_load_missing_directory(tmp_path: Path) -> None:
    registry = HookRegistry.load_all(tmp_path / "nope")
    assert len(registry) == 0


def test_only_hook_files_are_loaded(hooks_root: Path, write_hook) -> None:
    write_hook("docs", hook_payload())
    (hooks_root / "notes.json").write_text("{}", encoding="utf-8")

    registry = HookRegistry.load_all(hooks_root)
    assert [hook.id for hook in registry] == ["docs"]


def test_disabled_hook_never_matches(hooks_root: Path, write_hook) -> None:
    write_hook("off", hook_payload(trigger="fileEdited", patterns=["*.cs"], enabled=False))
    registry = HookRegistry.load_all(hooks_root)

    assert len(registry) == 1
    for event in EventKind:
        assert registry.hooks_for("Foo.cs", event) == []


def test_hooks_match_event_kind(hooks_root: Path, write_hook) -> None:
    write_hook("on-edit", hook_payload(trigger="fileEdited"))
    write_hook("on-save", hook_payload(trigger="fileSaved"))
    write_hook("on-create", hook_payload(trigger="fileCreated"))
    write_hook("on-delete", hook_payload(trigger="fileDeleted"))
    registry = HookRegistry.load_all(hooks_root)

    assert [h.id for h in registry.hooks_for("Foo.cs", EventKind.EDITED)] == ["on-edit"]
    assert [h.id for h in registry.hooks_for("Foo.cs", EventKind.SAVED)] == ["on-save"]
    assert [h.id for h in registry.hooks_for("Foo.cs", EventKind.CREATED)] == ["on-create"]
    assert [h.id for h in registry.hooks_for("Foo.cs", EventKind.DELETED)] == ["on-delete"]


def test_hooks_match_patterns(hooks_root: Path, write_hook) -> None:
    write_hook("cs", hook_payload(patterns=["*.cs"]))
    registry = HookRegistry.load_all(hooks_root)

    assert registry.hooks_for("Foo.ts", EventKind.EDITED) == []


def test_all_matching_hooks_are_returned_in_load_order(hooks_root: Path, write_hook) -> None:
    write_hook("b-lint", hook_payload(patterns=["*.cs"]))
    write_hook("a-docs", hook_payload(patterns=["**/*.cs"]))
    registry = HookRegistry.load_all(hooks_root)

    assert [h.id for h in registry.hooks_for("Foo.cs", EventKind.EDITED)] == [
        "a-docs",
        "b-lint",
    ]


def test_manual_hooks(hooks_root: Path, write_hook) -> None:
    write_hook("manual-on", hook_payload(trigger="manual"))
    write_hook("manual-off", hook_payload(trigger="manual", enabled=False))
    write_hook("edit", hook_payload())
    registry = HookRegistry.load_all(hooks_root)

    assert [h.id for h in registry.manual_hooks()] == ["manual-on"]
    for event in EventKind:
        assert "manual-on" not in [h.id for h in registry.hooks_for("Foo.cs", event)]


def test_malformed_hook_is_collected_not_raised(hooks_root: Path, write_hook) -> None:
    for index in range(5):
        write_hook(f"valid-{index}", hook_payload())
    broken = hook_payload()
    broken.pop("when")
    write_hook("missing-when", broken)

    registry = HookRegistry.load_all(hooks_root)

    assert len(registry) == 5
    assert len(registry.diagnostics) == 1
    assert isinstance(registry.diagnostics[0], SchemaValidationError)


def test_get_by_id(hooks_root: Path, write_hook) -> None:
    write_hook("docs", hook_payload(name="Docs"))
    registry = HookRegistry.load_all(hooks_root)

    hook = registry.get("docs")
    assert hook is not None
    assert hook.name == "Docs"
    assert registry.get("missing") is None
