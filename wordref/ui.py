"""Terminal renderer.

Draws one frame from a ``StateSnapshot``: the active table, a progress bar
while a lookup runs, the last error and the input line. Rendering never
touches the shared state directly.
"""
from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.progress_bar import ProgressBar
from rich.table import Table
from rich.text import Text

from wordref.engines.state import StateSnapshot
from wordref.models import TableData

PLACEHOLDER = "Type 'help' and press Enter to see the available commands"


def render_table(data: TableData, page: int = 0, pages: int = 0) -> Table:
    title = data.title
    if pages > 1:
        title = f"{title} ({page}/{pages})"

    # Site text may contain square brackets, so nothing here is parsed as markup
    table = Table(title=Text(title, style="bold"), expand=True)
    for i, column in enumerate(data.header):
        table.add_column(Text(column), style="cyan" if i == 0 else "green")
    width = len(data.header)
    for row in data.items:
        # Pad or cut rows so they always fit the header
        cells = (list(row) + [""] * width)[:width] if width else list(row)
        table.add_row(*(Text(cell) for cell in cells))
    return table


def render_input(snapshot: StateSnapshot) -> Panel:
    text = Text(snapshot.input) if snapshot.input else Text(PLACEHOLDER, style="dim")
    return Panel(text, title=f"[bold]{snapshot.language}[/]", title_align="left")


def render(snapshot: StateSnapshot) -> RenderableType:
    """Build the renderable for one frame."""
    parts: list[RenderableType] = []

    if snapshot.table is not None:
        parts.append(render_table(snapshot.table, snapshot.page, snapshot.pages))
    else:
        parts.append(Text("wordref", style="bold magenta", justify="center"))

    if snapshot.loading:
        parts.append(ProgressBar(total=1.0, completed=snapshot.progress))

    if snapshot.error:
        parts.append(Panel(Text(snapshot.error, style="red"), title="Error", border_style="red"))

    parts.append(render_input(snapshot))
    if snapshot.pages > 1:
        parts.append(Text("<- / -> to change table, Esc to quit", style="dim", justify="right"))
    return Group(*parts)
