"""Rich rendering of a scored hand."""

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from souzu.core.tile import tiles_to_string
from souzu.rules.agari import StandardDecomposition, SevenPairsDecomposition
from souzu.rules.scoring import ScoreResult

MSG_YAKUMAN = "役滿 {points}点"
MSG_FALSE_DECLARATION = "詐和 (チョンボ): 支付 {points}点"


def render_hand(result: ScoreResult) -> Text:
    """Hand tiles with the winning tile highlighted after a gap."""
    text = Text()
    tiles = list(result.tiles)
    if result.win_tile is not None and result.win_tile in tiles:
        tiles.remove(result.win_tile)
    text.append(tiles_to_string(tiles), style="green")
    if result.win_tile is not None:
        text.append("  ")
        text.append(f"{result.win_tile}s", style="bold yellow")
    return text


def describe_decomposition(result: ScoreResult) -> str:
    d = result.decomposition
    if isinstance(d, StandardDecomposition):
        groups = [str(m) for m in d.melds] + [f"{d.pair}{d.pair}s"]
        return " ".join(groups)
    if isinstance(d, SevenPairsDecomposition):
        return " ".join(f"{r}{r}s" for r in d.pairs)
    return "九蓮寶燈"


def render_win_screen(console: Console, result: ScoreResult, is_tsumo: bool):
    """Render winning screen with yaku and score details."""
    console.print()
    title = "自摸" if is_tsumo else "榮和"
    console.print(Panel(render_hand(result), title=f"[bold green]{title}[/bold green]",
                        border_style="green"))
    console.print(f"  [dim]{describe_decomposition(result)}[/dim]")

    # Yaku list
    table = Table(title="役種", show_header=True, border_style="cyan")
    table.add_column("役名", style="bold")
    table.add_column("翻數", justify="right")

    for yaku in result.yaku:
        if yaku.is_yakuman:
            value = "役滿" if yaku.yakuman == 1 else f"{yaku.yakuman}倍役滿"
        else:
            value = f"{yaku.han}翻"
        table.add_row(yaku.label, value)

    console.print(table)

    # Score summary
    if result.is_yakuman:
        console.print(f"  [bold red]{MSG_YAKUMAN.format(points=result.final_points)}[/bold red]")
    else:
        console.print(f"  {result.han_total}翻 {result.fu_total}符  "
                      f"{result.limit_tier.value} {result.final_points}点")
    console.print()


def render_false_declaration(console: Console, penalty: int, reason: str = ""):
    console.print(Panel(
        f"[bold red]{MSG_FALSE_DECLARATION.format(points=penalty)}[/bold red]"
        + (f"\n[dim]{reason}[/dim]" if reason else ""),
        border_style="red",
    ))
