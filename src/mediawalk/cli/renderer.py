"""Renderer for CLI output.

Results are printed one line at a time as they arrive from the walk, followed
by a summary once the stream is exhausted.
- Outcome styles: matched in green, no match dimmed, failed in red.
- Paths are printed as plain text so brackets in file names are never read as
  Rich markup.
"""

import json
import sys
from dataclasses import dataclass
from typing import Dict, TextIO

from rich.console import Console
from rich.table import Table
from rich.text import Text

from mediawalk.models.core import MediaCategory, WalkOutcome, WalkResult

OUTCOME_STYLES: Dict[WalkOutcome, str] = {
    WalkOutcome.MATCHED: "green",
    WalkOutcome.NO_MATCH: "dim",
    WalkOutcome.FAILED: "red bold",
}

OUTCOME_LABELS: Dict[WalkOutcome, str] = {
    WalkOutcome.MATCHED: "media",
    WalkOutcome.NO_MATCH: "unknown",
    WalkOutcome.FAILED: "error",
}


@dataclass
class WalkSummary:
    """Running totals over the results of one walk."""

    total: int = 0
    matched: int = 0
    no_match: int = 0
    failed: int = 0

    def add(self, result: WalkResult) -> None:
        self.total += 1
        if result.outcome is WalkOutcome.MATCHED:
            self.matched += 1
        elif result.outcome is WalkOutcome.NO_MATCH:
            self.no_match += 1
        else:
            self.failed += 1


def render_result(result: WalkResult, console: Console) -> None:
    """Print a single result as one styled line."""
    label = OUTCOME_LABELS[result.outcome]
    if result.outcome is WalkOutcome.MATCHED:
        detail = result.mime
    elif result.outcome is WalkOutcome.FAILED:
        detail = f"{type(result.error).__name__}: {result.error}"
    else:
        detail = ""

    line = Text.assemble(
        (f"{label:<8}", OUTCOME_STYLES[result.outcome]),
        result.path,
    )
    if detail:
        line.append(f"  ({detail})", style="yellow" if result.is_media else "red")
    console.print(line, soft_wrap=True)


def render_json_line(result: WalkResult, stream: TextIO | None = None) -> None:
    """Write a result as a single JSON object followed by a newline."""
    out = stream or sys.stdout
    out.write(json.dumps(result.to_dict()) + "\n")
    out.flush()


def render_summary(
    summary: WalkSummary,
    console: Console,
    by_category: Dict[MediaCategory, int] | None = None,
) -> None:
    """Print the end-of-walk totals.

    Args:
        summary: Totals collected while consuming the stream.
        console: Console to print to.
        by_category: Optional count of matched files per media category,
            rendered as a small table when non-empty.
    """
    if by_category:
        table = Table(title="Media by category")
        table.add_column("Category", style="cyan")
        table.add_column("Files", justify="right")
        for category in MediaCategory:
            table.add_row(category.value, str(by_category.get(category, 0)))
        console.print(table)

    console.print(
        f"Total: {summary.total} | Matched: {summary.matched} | "
        f"No match: {summary.no_match} | Failed: {summary.failed}"
    )
    if summary.failed > 0:
        console.print(f"Failed files: {summary.failed}", style="red bold")
