"""cibot CLI — Typer application with check and plugins commands."""

from __future__ import annotations

import logging
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from cibot import __version__

app = typer.Typer(
    name="cibot",
    help="Validate plugin and job configuration for the GitHub automation bot.",
    add_completion=False,
    no_args_is_help=True,
)

console = Console(stderr=True)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False, show_time=False)],
        force=True,
    )


# ── check ─────────────────────────────────────────────────────────────────────


@app.command()
def check(
    plugin_config: Optional[str] = typer.Option(
        None, "--plugin-config", "-p", envvar="CIBOT_PLUGIN_CONFIG",
        help="Path to the plugin config (plugins.yaml)",
    ),
    config_path: Optional[str] = typer.Option(
        None, "--config-path", "-c", envvar="CIBOT_CONFIG_PATH",
        help="Path to the main config file",
    ),
    job_config_path: Optional[str] = typer.Option(
        None, "--job-config-path", "-j", envvar="CIBOT_JOB_CONFIG_PATH",
        help="Job config file or directory of .yaml/.yml fragments",
    ),
    strict: bool = typer.Option(
        False, "--strict", help="Also run the size, blunderbuss, config-updater and require-matching-label checks",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
) -> None:
    """Load and validate config files. Exit 1 on invalid config, 2 if a file cannot be loaded."""
    from cibot.config.errors import ConfigError
    from cibot.config.loader import load
    from cibot.output import terminal
    from cibot.plugins.agent import load_plugin_config
    from cibot.plugins.errors import InvalidPluginConfigError, PluginConfigError
    from cibot.plugins.registry import build_registry
    from cibot.plugins.validation import validate, validate_optional

    _configure_logging(verbose)

    if not plugin_config and not config_path:
        console.print("[bold red]Error:[/bold red] nothing to check; pass --plugin-config and/or --config-path")
        raise typer.Exit(code=2)
    if job_config_path and not config_path:
        console.print("[bold red]Error:[/bold red] --job-config-path requires --config-path")
        raise typer.Exit(code=2)

    # --- Main + job config ---
    if config_path:
        try:
            cfg = load(config_path, job_config_path)
        except ConfigError as exc:
            console.print(f"[bold red]Config error:[/bold red] {escape(str(exc))}")
            raise typer.Exit(code=2) from exc
        terminal.render_config(console, config_path, cfg)

    # --- Plugin config ---
    if plugin_config:
        try:
            configuration = load_plugin_config(plugin_config)
        except ConfigError as exc:
            console.print(f"[bold red]Config error:[/bold red] {escape(str(exc))}")
            raise typer.Exit(code=2) from exc

        registry = build_registry()
        try:
            validate(configuration, registry)
            if strict:
                validate_optional(configuration)
        except InvalidPluginConfigError as exc:
            terminal.render_problems(console, "Invalid plugin configuration", exc.errors)
            raise typer.Exit(code=1) from exc
        except PluginConfigError as exc:
            terminal.render_problems(console, "Invalid plugin configuration", [str(exc)])
            raise typer.Exit(code=1) from exc

        terminal.render_plugins(console, plugin_config, configuration)

    console.print()
    console.print("[bold green]✅ Configuration is valid.[/bold green]")


# ── plugins ───────────────────────────────────────────────────────────────────


@app.command()
def plugins() -> None:
    """List the plugins that may be enabled in the plugin config."""
    from cibot.output import terminal
    from cibot.plugins.registry import build_registry

    terminal.render_registry(build_registry())


# ── version ───────────────────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        print(f"cibot {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", "-V", callback=_version_callback,
        is_eager=True, help="Show version and exit",
    ),
) -> None:
    """cibot — validate GitHub automation bot configuration."""
