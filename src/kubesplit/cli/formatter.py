# src/kubesplit/cli/formatter.py
from pathlib import Path
from typing import List, Tuple

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from kubesplit.core.engine import generate_summary
from kubesplit.core.models import Document, Resource, RunResult

# Initialize the Rich console for high-quality terminal output
console = Console()
err_console = Console(stderr=True)


class KubeFormatter:
    """
    KubeFormatter: user-facing output of the CLI.
    Per-file confirmations, the dry-run plan and the closing summary go to
    stdout; diagnostics stay on the logging stream.
    """

    def __init__(self):
        self.planned: List[Tuple[int, str, str, str]] = []

    def print_header(self, subtitle: str, version: str):
        console.print(Panel.fit(
            f"[bold cyan]KubeSplit {version}[/bold cyan]\n"
            "══════════════════════════════════════════════════════════════════",
            title=f"[bold white]{subtitle}[/bold white]",
            border_style="cyan"
        ))

    def saved(self, path: Path):
        console.print(f"Saved document to {escape(str(path))}", soft_wrap=True, highlight=False)

    def plan(self, document: Document, resource: Resource, path: Path):
        self.planned.append((document.ordinal, resource.kind, resource.name, str(path)))

    def print_plan(self):
        """Dry-run table of the files a real run would write."""
        table = Table(title="KubeSplit Dry Run", show_header=True, header_style="bold magenta")
        table.add_column("#", justify="right")
        table.add_column("Kind")
        table.add_column("Name")
        table.add_column("Path", style="cyan", overflow="fold")

        for ordinal, kind, name, path in self.planned:
            table.add_row(str(ordinal), escape(kind), escape(name), escape(path))

        console.print(table)

    def print_summary(self, result: RunResult, dry_run: bool = False):
        summary = generate_summary(result)

        if dry_run:
            console.print(f"Dry run complete! Would save {summary['planned']} manifests.",
                          soft_wrap=True, highlight=False)
        else:
            console.print(f"Parsing complete! Saved {summary['written']} manifests.",
                          soft_wrap=True, highlight=False)

        if summary["skipped"]:
            stages = ", ".join(f"{stage}: {count}" for stage, count in summary["skipped_by_stage"].items())
            console.print(f"[dim]Skipped {summary['skipped']} documents ({stages})[/dim]", soft_wrap=True)
        if summary["overwritten"]:
            console.print(f"[yellow]{summary['overwritten']} files were overwritten by later documents.[/yellow]",
                          soft_wrap=True)

    def fatal(self, message: str):
        err_console.print(f"[bold red]Error:[/bold red] {escape(message)}", soft_wrap=True)
