import logging
from pathlib import Path
from typing import Any, Dict, Optional

import click
from rich.console import Console
from rich.logging import RichHandler

from kiro_steering.config import load_config
from kiro_steering.engine import ResolutionEngine
from kiro_steering.errors import ResolverError
from kiro_steering.models import ActivationRequest, EventKind
from kiro_steering.tui import ResolverConsoleUI


EVENT_VALUES = [event.value for event in EventKind]


def _configure_logging(verbose: bool) -> None:
    root = logging.getLogger("kiro_steering")
    root.handlers = [
        RichHandler(console=Console(stderr=True), show_path=False, show_time=False)
    ]
    root.setLevel(logging.DEBUG if verbose else logging.WARNING)


def _engine_from_obj(obj: Dict[str, Any]) -> ResolutionEngine:
    try:
        config = load_config(
            obj["root"],
            case_sensitive=obj.get("case_sensitive"),
            walk_timeout=obj.get("timeout"),
        )
        return ResolutionEngine.load(config)
    except ResolverError as exc:
        raise click.ClickException(str(exc))


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--root",
    type=click.Path(path_type=Path, file_okay=False),
    default=Path("."),
    show_default=True,
    help="Workspace root containing the .kiro directory.",
)
@click.option(
    "--case-insensitive",
    "case_insensitive",
    is_flag=True,
    default=False,
    help="Match patterns without regard to case.",
)
@click.option(
    "--timeout",
    type=click.FloatRange(min=0, min_open=True),
    default=None,
    help="Seconds allowed for each directory walk.",
)
@click.option("-v", "--verbose", is_flag=True, default=False, help="Debug logging.")
@click.pass_context
def cli(
    ctx: click.Context,
    root: Path,
    case_insensitive: bool,
    timeout: Optional[float],
    verbose: bool,
) -> None:
    """Resolve Kiro steering rules and hooks for file events."""
    _configure_logging(verbose)
    ctx.obj = {
        "root": root,
        "case_sensitive": False if case_insensitive else None,
        "timeout": timeout,
    }


@cli.command(help="Show the rules and hooks that apply to a file event.")
@click.argument("path")
@click.option(
    "--event",
    type=click.Choice(EVENT_VALUES, case_sensitive=False),
    default=EventKind.EDITED.value,
    show_default=True,
)
@click.pass_obj
def resolve(obj: Dict[str, Any], path: str, event: str) -> None:
    ui = ResolverConsoleUI(Console())
    engine = _engine_from_obj(obj)
    request = ActivationRequest.of(path, event.lower())
    ui.render_resolution(request, engine.resolve(request))


@cli.command(help="List loaded steering rules.")
@click.option("--manual", is_flag=True, default=False, help="Only manual rules.")
@click.pass_obj
def rules(obj: Dict[str, Any], manual: bool) -> None:
    ui = ResolverConsoleUI(Console())
    engine = _engine_from_obj(obj)
    if manual:
        ui.render_rules(engine.manual_rules(), title="manual rules")
        return
    snapshot = engine.snapshot
    ui.render_rules(list(snapshot.rules) if snapshot is not None else [])


@cli.command(help="List loaded hooks.")
@click.option("--manual", is_flag=True, default=False, help="Only manual hooks.")
@click.pass_obj
def hooks(obj: Dict[str, Any], manual: bool) -> None:
    ui = ResolverConsoleUI(Console())
    engine = _engine_from_obj(obj)
    if manual:
        ui.render_hooks(engine.manual_hooks(), title="manual hooks")
        return
    snapshot = engine.snapshot
    ui.render_hooks(list(snapshot.hooks) if snapshot is not None else [])


@cli.command(help="Report steering and hook files that failed to load.")
@click.pass_obj
def check(obj: Dict[str, Any]) -> None:
    ui = ResolverConsoleUI(Console())
    engine = _engine_from_obj(obj)
    diagnostics = engine.diagnostics()
    ui.render_diagnostics(diagnostics)
    if diagnostics:
        raise click.exceptions.Exit(1)


def main() -> int:
    try:
        # Outside standalone mode click returns the code of an Exit raised in a command.
        result = cli(standalone_mode=False)
    except click.exceptions.Exit as exc:
        code = exc.exit_code
        return code if isinstance(code, int) else 1
    except click.ClickException as exc:
        exc.show()
        return 2
    return result if isinstance(result, int) else 0


if __name__ == "__main__":
    raise SystemExit(main())
