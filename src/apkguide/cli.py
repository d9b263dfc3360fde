"""apkguide CLI: AI-generated guide for turning a web project into an Android APK."""

import asyncio
import json
import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.live import Live

from apkguide import __version__

from .config import ApkGuideConfig, get_config_path, load_config, write_config_template
from .constants import ANDROID_VERSIONS
from .core.details import format_details
from .core.lifecycle import ControllerSnapshot, GenerationController, LifecycleState
from .errors import ConfigError
from .logging import configure_logging
from .models import OperatingSystem, dump_steps
from .output import OutputContext, get_output_context, set_output_context
from .services.actions import CopyFeedback
from .services.gemini import GenerationClient, create_generation_client
from .ui.navigator import StepNavigator
from .ui.render import render_details, render_status, render_step, render_summary
from .ui.wizard import Wizard

logger = logging.getLogger(__name__)

# Exit codes
EXIT_INVALID_INPUT = 1
EXIT_CONFIG = 2
EXIT_GENERATION_FAILED = 12


def _version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"apkguide {__version__}")
        raise typer.Exit()


app = typer.Typer(
    name="apkguide",
    help="Interactive AI guide for packaging a web project as an Android APK",
    no_args_is_help=True,
)


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Increase verbosity (-v, -vv)",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Suppress non-error output",
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output in JSON format for automation",
    ),
    no_color: bool = typer.Option(
        False,
        "--no-color",
        help="Disable colored output",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Enable debug logging",
    ),
) -> None:
    """apkguide - step-by-step web to APK conversion guide."""
    console = configure_logging(verbosity=verbose, quiet=quiet, no_color=no_color, debug=debug)
    set_output_context(OutputContext(console=console, json_mode=json_output))


def _load_config_or_exit(ctx: OutputContext) -> ApkGuideConfig:
    try:
        return load_config()
    except ConfigError as e:
        ctx.error(str(e))
        raise typer.Exit(EXIT_CONFIG) from None


def _create_client_or_exit(ctx: OutputContext, config: ApkGuideConfig) -> GenerationClient:
    try:
        return create_generation_client(config)
    except ConfigError as e:
        ctx.error(str(e))
        raise typer.Exit(EXIT_CONFIG) from None


# ============================================================================
# apkguide wizard
# ============================================================================


@app.command()
def wizard() -> None:
    """Start the interactive guide."""
    ctx = get_output_context()
    if ctx.json_mode:
        ctx.error("The interactive wizard does not support --json; use 'generate'")
        raise typer.Exit(EXIT_INVALID_INPUT)

    config = _load_config_or_exit(ctx)
    client = _create_client_or_exit(ctx, config)
    controller = GenerationController(client, tick_interval=config.wizard.status_interval)

    Wizard(
        controller,
        ctx,
        default_version=config.wizard.default_platform_version,
        feedback=CopyFeedback(duration=config.wizard.copied_feedback_seconds),
    ).run()
    ctx.print("Bye!")


# ============================================================================
# apkguide generate
# ============================================================================


async def _run_generation(
    controller: GenerationController,
    console: Console,
    repo: str,
    android_version: str,
    show_progress: bool,
) -> ControllerSnapshot:
    if not controller.submit(repo, android_version):
        return controller.snapshot()
    if not show_progress:
        return await controller.wait()
    with Live(render_status(controller.snapshot()), console=console, transient=True) as live:
        controller.listener = lambda snap: live.update(render_status(snap))
        return await controller.wait()


@app.command()
def generate(
    repo: str = typer.Option(..., "--repo", "-r", help="GitHub repository URL"),
    android_version: str | None = typer.Option(
        None, "--android-version", "-a", help="Target Android version"
    ),
    os_choice: OperatingSystem | None = typer.Option(
        None, "--os", help="Operating system for environment setup steps"
    ),
    output: Path | None = typer.Option(
        None, "--output", "-o", help="Also write the steps as JSON to this file"
    ),
) -> None:
    """Generate the full guide without the interactive pager."""
    ctx = get_output_context()
    config = _load_config_or_exit(ctx)
    version = android_version or config.wizard.default_platform_version

    client = _create_client_or_exit(ctx, config)
    controller = GenerationController(client, tick_interval=config.wizard.status_interval)
    controller.select_operating_system(os_choice)

    snapshot = asyncio.run(
        _run_generation(controller, ctx.console, repo, version, show_progress=not ctx.json_mode)
    )

    if snapshot.state is LifecycleState.INPUT_INVALID:
        ctx.error(snapshot.error or "Invalid input")
        raise typer.Exit(EXIT_INVALID_INPUT)
    if snapshot.state is LifecycleState.FAILED:
        ctx.error(snapshot.error or "Generation failed")
        raise typer.Exit(EXIT_GENERATION_FAILED)

    steps = list(snapshot.steps)
    payload = dump_steps(steps)
    if output is not None:
        output.write_text(json.dumps(payload, indent=2, ensure_ascii=False))
        logger.info(f"Wrote {len(steps)} steps to {output}")

    if ctx.json_mode:
        ctx.print_json(payload)
        return
    if not steps:
        ctx.warning("The AI returned an empty guide.")
        return

    navigator = StepNavigator(steps, snapshot.operating_system)
    ctx.print(render_summary(navigator))
    for _ in steps:
        ctx.print(render_step(navigator))
        navigator.next()


# ============================================================================
# apkguide versions / init-config / show-details
# ============================================================================


@app.command()
def versions() -> None:
    """List the supported target Android versions."""
    ctx = get_output_context()
    if ctx.json_mode:
        ctx.print_json({"versions": list(ANDROID_VERSIONS)})
        return
    for version in ANDROID_VERSIONS:
        ctx.print(version)


@app.command("init-config")
def init_config(
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite an existing config"),
) -> None:
    """Write a config template to the user config path."""
    ctx = get_output_context()
    config_path = get_config_path()
    if config_path.exists() and not force:
        ctx.warning(f"Config already exists: {config_path}")
        raise typer.Exit(0)
    write_config_template(config_path)
    ctx.success(f"Created config template: {config_path}", data={"path": str(config_path)})


@app.command("show-details")
def show_details(
    source: typer.FileText = typer.Argument(..., help="File with details text ('-' for stdin)"),
) -> None:
    """Format outline-style details text the way the guide shows it."""
    ctx = get_output_context()
    blocks = list(format_details(source.read()))
    if ctx.json_mode:
        ctx.print_json([{"type": type(block).__name__, **vars(block)} for block in blocks])
        return
    rendered = render_details(blocks)
    if rendered is not None:
        ctx.print(rendered)
