"""
Display utilities for diagnostics on the stderr console.

Standard output carries SSH config only, so everything here prints to stderr.
Values coming from the user or from instance tags are escaped before they
reach rich markup.
"""

from typing import List

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..models import InstanceInfo, RunConfig

console = Console(stderr=True)


def display_bastion(bastion: InstanceInfo) -> None:
    """Display the selected bastion."""
    console.print(
        f"[bold blue]Bastion:[/bold blue] {escape(bastion.display_name)} "
        f"([cyan]{escape(bastion.public_dns_name or 'N/A')}[/cyan], "
        f"{escape(bastion.instance_id)})"
    )


def display_hosts(config: RunConfig, instances: List[InstanceInfo]) -> None:
    """Display the rendered hosts in a formatted table."""
    if not instances:
        console.print(f"[dim]No hosts found in {escape(config.environment)}[/dim]")
        return

    table = Table(title=f"SSH Hosts - {escape(config.environment)} ({escape(config.region)})")
    table.add_column("Host", style="cyan")
    table.add_column("Private IP", style="green")
    table.add_column("Role", style="magenta")
    table.add_column("Key", style="yellow")
    table.add_column("Instance", style="blue")

    for instance in instances:
        table.add_row(
            escape(f"{instance.display_name}{config.suffix}"),
            escape(instance.private_ip or "N/A"),
            escape(instance.role or "N/A"),
            escape(instance.key_name or "N/A"),
            escape(instance.instance_id),
        )

    console.print(table)


def display_warning(message: str) -> None:
    """Display a plain-text warning message."""
    console.print(f"[yellow]{escape(message)}[/yellow]")
