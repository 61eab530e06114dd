"""Rich display of the run report.

Printed at the end of verbose runs, on stderr like every other line
scrub produces.
"""

import os

from rich.markup import escape
from rich.table import Table

from scrub.collapse.models import Outcome
from scrub.collapse.runner import RunReport
from scrub.utils.formatting import err_console, print_success, print_warning


def create_roots_table(report: RunReport) -> Table:
    """Create a Rich table with one row per processed root.

    Args:
        report: Finished run report.

    Returns:
        Rich Table with Root and Status columns.
    """
    table = Table(
        title="Roots",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Root", no_wrap=True)
    table.add_column("Status", width=10, justify="center")
    table.add_column("Details")

    dirty = set(report.dirty_roots)
    for root in report.roots:
        if root in report.root_errors:
            code = report.root_errors[root]
            status = "[error]error[/]"
            details = f"[Errno {code}] {os.strerror(code)}"
        elif root in report.node_roots:
            status = "[muted]node[/]"
            details = _describe_node(report.node_roots[root])
        elif root in dirty:
            status = "[warning]dirty[/]"
            details = "not empty"
        else:
            status = "[success]clean[/]"
            details = ""
        table.add_row(escape(root), status, f"[muted]{escape(details)}[/muted]")

    return table


def _describe_node(outcome: Outcome) -> str:
    if outcome.failed:
        return outcome.describe_error()
    if outcome.removed:
        return "removed"
    if outcome.dry_run:
        return "would be removed"
    return "no rule matched"


def print_run_summary(report: RunReport) -> None:
    """Print the roots table followed by removal counts."""
    err_console.print(create_roots_table(report))

    parts: list[str] = []
    if report.removed_count:
        parts.append(f"[removed]{report.removed_count} removed[/removed]")
    if report.simulated_count:
        parts.append(f"[simulated]{report.simulated_count} would be removed[/simulated]")
    if report.failed_count:
        parts.append(f"[error]{report.failed_count} failed[/error]")
    if parts:
        err_console.print(f"\nSummary: {', '.join(parts)}")

    if report.dirty:
        print_warning(f"{len(report.dirty_roots)} root(s) left non-empty.")
    elif not report.root_errors:
        print_success("All roots collapsed.")
