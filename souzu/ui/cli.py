"""Command-line hand checker."""

import argparse
import sys
from typing import List, Optional

from rich.console import Console

from souzu.core.context import WinContext, WinType
from souzu.core.errors import NoDecompositionFound, ValidationError
from souzu.core.log import configure_logging
from souzu.core.tile import make_tiles_from_string
from souzu.rules.scoring import false_declaration_penalty, win_check
from souzu.ui.result_view import render_false_declaration, render_win_screen


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Score a single-suit (souzu) mahjong hand.")
    parser.add_argument("hand", help="live hand, e.g. 1112345678999 (13 or 14 tiles, 3 fewer per kan)")
    parser.add_argument("--win", type=int, required=True, help="winning tile rank (1-9)")
    parser.add_argument("--tsumo", action="store_true", help="won by self-draw")
    parser.add_argument("--dealer", action="store_true", help="winner holds the dealer seat")
    parser.add_argument("--riichi", action="store_true")
    parser.add_argument("--double-riichi", action="store_true")
    parser.add_argument("--ippatsu", action="store_true")
    parser.add_argument("--last-tile", action="store_true", help="won on the last tile of the wall")
    parser.add_argument("--rinshan", action="store_true", help="won on a kan replacement draw")
    parser.add_argument("--first-turn", action="store_true", help="won on the first turn")
    parser.add_argument("--kan", type=int, action="append", default=[],
                        help="rank of a declared concealed kan (repeatable)")
    return parser


def context_from_args(args: argparse.Namespace) -> WinContext:
    is_tsumo = args.tsumo
    return WinContext(
        win_type=WinType.SELF_DRAW if is_tsumo else WinType.DISCARD,
        riichi=args.riichi,
        double_riichi=args.double_riichi,
        ippatsu=args.ippatsu,
        is_dealer=args.dealer,
        first_turn_self_draw=args.first_turn and is_tsumo,
        first_turn_discard=args.first_turn and not is_tsumo,
        after_replacement_draw=args.rinshan,
        last_tile=args.last_tile,
        concealed_kan_ranks=tuple(args.kan),
    )


def main(argv: Optional[List[str]] = None, console: Optional[Console] = None) -> int:
    args = build_parser().parse_args(argv)
    console = console or Console()
    configure_logging()

    try:
        tiles = make_tiles_from_string(args.hand)
        ctx = context_from_args(args)
        result = win_check(tiles, args.win, ctx)
    except NoDecompositionFound:
        render_false_declaration(console, false_declaration_penalty(args.dealer))
        return 1
    except ValidationError as e:
        console.print(f"  [red]{e}[/red]")
        return 1

    render_win_screen(console, result, ctx.is_self_draw)
    return 0


if __name__ == "__main__":
    sys.exit(main())
