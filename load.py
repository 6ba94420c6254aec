import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, List

from rich import box
from rich.align import Align
from rich.columns import Columns
from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from extract import Quote
from transform import ChangeDirection, classify_change

if TYPE_CHECKING:
    from pipeline import MarketSnapshot

logger = logging.getLogger(__name__)

TITLE = "Oikonomia"
SUBTITLE = "A Financial Market Analysis Tool"

DETAIL_COLUMNS = 3
SECTOR_LABEL_WIDTH = 24


@dataclass(frozen=True)
class Theme:
    """Colours and borders used by the Renderer."""
    positive_color: str = "#00FF00"
    negative_color: str = "#FF0000"
    neutral_color: str = "#454545"
    header_color: str = "blue"
    border: box.Box = box.ROUNDED

    def color_for(self, value: float) -> str:
        direction = classify_change(value)
        if direction is ChangeDirection.POSITIVE:
            return self.positive_color
        if direction is ChangeDirection.NEGATIVE:
            return self.negative_color
        return self.neutral_color


def format_price(value: float) -> str:
    return f"${value:,.2f}"


def format_count(value: float) -> str:
    return f"{int(value):,}"


def format_market_cap(value: float) -> str:
    if value > 0:
        return "$" + format_count(value)
    return "n/a"


def column_major_rows(cells: List[Text], columns: int) -> List[List[Text]]:
    """Lay cells out top-to-bottom, then left-to-right, padding with blanks."""
    rows = (len(cells) + columns - 1) // columns
    grid = []
    for r in range(rows):
        row = []
        for c in range(columns):
            idx = c * rows + r
            row.append(cells[idx] if idx < len(cells) else Text(""))
        grid.append(row)
    return grid


class Renderer:
    """Writes the market overview and ticker detail views to a rich Console."""

    def __init__(self, theme: Theme | None = None, console: Console | None = None):
        self.theme = theme or Theme()
        self.console = console or Console()

    def _change(self, value: float) -> Text:
        return Text(f"{value:.2f}%", style=self.theme.color_for(value))

    def render_header(self):
        self.console.print()
        self.console.print(
            Align.center(Text(TITLE, style=f"bold {self.theme.header_color}"))
        )
        self.console.print()
        self.console.print(
            Align.center(Text(SUBTITLE, style=f"bold italic {self.theme.header_color}"))
        )
        self.console.print()

    def render_overview(self, snapshot: "MarketSnapshot"):
        logger.debug(
            f"Rendering {len(snapshot.indicators)} indicators and {len(snapshot.sectors)} sectors"
        )
        boxes = []
        for quote in snapshot.indicators:
            content = Text.assemble(
                f"{quote.ticker}\n{format_price(quote.regular_market_price)} ",
                self._change(quote.regular_market_change_percent),
                justify="center",
            )
            boxes.append(Panel(content, box=self.theme.border, expand=False, padding=(0, 1)))

        # Sorted for a stable display only
        sector_lines = [
            Text.assemble(
                f"{name + ':':<{SECTOR_LABEL_WIDTH}} ",
                self._change(snapshot.sectors[name].average_change_percent),
            )
            for name in sorted(snapshot.sectors)
        ]

        self.console.print(Align.center(Columns(boxes)))
        self.console.print()
        self.console.print(Align.center(Group(*sector_lines)))
        self.console.print()

    def render_ticker(self, quote: Quote):
        top_row = Text.assemble(
            f"{quote.ticker}   {format_price(quote.regular_market_price)}   ",
            self._change(quote.regular_market_change_percent),
            style="bold",
        )

        entries = [
            ("Open Price", Text(format_price(quote.regular_market_open))),
            ("High Price", Text(format_price(quote.regular_market_day_high))),
            ("Low Price", Text(format_price(quote.regular_market_day_low))),
            ("52wk High", Text(format_price(quote.fifty_two_week_high))),
            ("52wk Low", Text(format_price(quote.fifty_two_week_low))),
            ("52wk Change", self._change(quote.fifty_two_week_change_percent)),
            ("Market Cap", Text(format_market_cap(quote.market_cap))),
            ("Volume", Text(format_count(quote.regular_market_volume))),
            ("Avg Volume", Text(format_count(quote.average_daily_volume_3month))),
        ]
        cells = [Text.assemble(f"{label:<6}: ", value) for label, value in entries]

        table = Table(box=self.theme.border, show_header=False, padding=(1, 2))
        for _ in range(DETAIL_COLUMNS):
            table.add_column(justify="left")
        for row in column_major_rows(cells, DETAIL_COLUMNS):
            table.add_row(*row)

        self.console.print(Align.center(top_row))
        self.console.print(Align.center(table))
