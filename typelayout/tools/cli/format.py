from rich import box
from rich.console import Group
from rich.table import Table
from rich.text import Text
from rich.markup import escape

from typelayout.core import TypeSystemError
from typelayout.layout import LayoutReport, REPORT_ORDER


def rich_report(report: LayoutReport) -> Group:
    table = Table(
        title=f"[bold]{escape(report.name)}[/] [magenta]({report.kind})[/]",
        box=box.SIMPLE_HEAD,
        title_justify="left",
    )
    table.add_column("Packing")
    table.add_column("Size", justify="right")
    table.add_column("Alignment", justify="right")
    table.add_column("Loss", justify="right")

    for mode in REPORT_ORDER:
        layout = report[mode]
        loss = f"[bold red]{layout.loss}[/]" if layout.loss else str(layout.loss)
        table.add_row(mode.label, str(layout.size), str(layout.alignment), loss)

    if report.ordering is None:
        return Group(table)
    return Group(table, Text("Optimized ordering: " + ", ".join(report.ordering), style="italic"))


def rich_error(error: Exception) -> Text:
    label = "[TYPE ERROR]" if isinstance(error, TypeSystemError) else "[ERROR]"
    return Text.assemble((label, "bold red"), " ", str(error))
