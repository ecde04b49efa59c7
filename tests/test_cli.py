"""Tests for the command-line hand checker"""

import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import logging

import pytest
from rich.console import Console

from souzu.ui.cli import build_parser, context_from_args, main


@pytest.fixture(autouse=True)
def _cleanup_root_logger():
    yield
    root = logging.getLogger()
    for handler in root.handlers[:]:
        handler.close()
        root.removeHandler(handler)


def run(*argv):
    console = Console(record=True, width=100)
    code = main(list(argv), console=console)
    return code, console.export_text()


class TestMain:
    def test_pure_nine_gates(self):
        code, out = run("11123456789999", "--win", "9")
        assert code == 0
        assert "純正九蓮寶燈" in out
        assert "64000" in out

    def test_normal_hand(self):
        code, out = run("1222344556789", "--win", "4", "--tsumo", "--riichi")
        assert code == 0
        assert "自摸" in out
        assert "平和" in out
        assert "符" in out

    def test_kan(self):
        code, out = run("2345677899", "--win", "9", "--tsumo", "--rinshan", "--kan", "1")
        assert code == 0
        assert "嶺上開花" in out

    def test_false_declaration(self):
        code, out = run("1357913579246", "--win", "8")
        assert code == 1
        assert "32000" in out

    def test_false_declaration_dealer(self):
        code, out = run("1357913579246", "--win", "8", "--dealer")
        assert code == 1
        assert "48000" in out

    def test_invalid_tiles(self):
        code, _ = run("123", "--win", "4")
        assert code == 1
        code, _ = run("1112345678999", "--win", "10")
        assert code == 1
        code, _ = run("111234567899x", "--win", "9")
        assert code == 1

    def test_win_required(self):
        with pytest.raises(SystemExit):
            main(["1112345678999"], console=Console(record=True))


class TestContextFromArgs:
    def test_first_turn_follows_win_type(self):
        args = build_parser().parse_args(["1112345678999", "--win", "9", "--first-turn", "--tsumo"])
        ctx = context_from_args(args)
        assert ctx.first_turn_self_draw
        assert not ctx.first_turn_discard

        args = build_parser().parse_args(["1112345678999", "--win", "9", "--first-turn"])
        ctx = context_from_args(args)
        assert ctx.first_turn_discard
        assert not ctx.first_turn_self_draw

    def test_kans(self):
        args = build_parser().parse_args(["9", "--win", "9", "--kan", "1", "--kan", "3"])
        assert context_from_args(args).concealed_kan_ranks == (1, 3)
