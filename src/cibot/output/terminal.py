"""Rich terminal reporter — plugin scopes, registry listing, validation problems."""

from __future__ import annotations

from typing import List, Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from cibot.config.schema import Config
from cibot.plugins.registry import PluginRegistry
from cibot.plugins.schema import Configuration


def render_problems(console: Console, title: str, problems: List[str]) -> None:
    console.print()
    console.print(f"[bold red]❌ {escape(title)}[/bold red]")
    for problem in problems:
        console.print(f"  [red]✗[/red] {escape(problem)}")


def render_config(console: Console, path: str, config: Config) -> None:
    console.print(f"[green]✓[/green] {escape(path)}")
    console.print(f"[dim]Presets:[/dim]           {len(config.presets)}")
    console.print(f"[dim]ProwJob namespace:[/dim] {escape(config.prowjob_namespace)}")
    console.print(f"[dim]Pod namespace:[/dim]     {escape(config.pod_namespace)}")


def render_plugins(console: Console, path: str, configuration: Configuration) -> None:
    """Print the enabled plugins per scope."""
    console.print(f"[green]✓[/green] {escape(path)}")

    scopes = sorted(set(configuration.plugins) | set(configuration.external_plugins))
    if not scopes:
        console.print("[yellow]⚠️  No plugins are enabled.[/yellow]")
        return

    table = Table(
        title="Enabled Plugins",
        show_lines=True,
        title_style="bold",
        border_style="dim",
    )
    table.add_column("Scope", style="cyan", min_width=20)
    table.add_column("Plugins", style="green")
    table.add_column("External", style="magenta")

    for scope in scopes:
        external = [
            f"{p.name} ({p.endpoint})" for p in configuration.external_plugins.get(scope, [])
        ]
        table.add_row(
            escape(scope),
            escape(", ".join(configuration.plugins.get(scope, []))) or "-",
            escape(", ".join(external)) or "-",
        )
    console.print(table)


def render_registry(registry: PluginRegistry, console: Optional[Console] = None) -> None:
    console = console or Console()
    table = Table(title="Known Plugins", title_style="bold", border_style="dim")
    table.add_column("Plugin", style="cyan")
    table.add_column("Description")
    table.add_column("Events", style="dim")
    for plugin in registry.all_plugins:
        table.add_row(plugin.name, plugin.description, ", ".join(plugin.events))
    console.print(table)
