"""Tests for the text-prompt front end."""

import itertools

from tictac.__main__ import parse_args
from tictac.cli import play_game, prompt, read_move, render_board
from tictac.game import Board, Player

X, O = Player.X, Player.O


def scripted(*lines):
    replies = iter(lines)
    return lambda _prompt: next(replies)


def test_render_uses_keypad_layout():
    board = Board(X)
    board.play(0)  # X bottom-left
    board.play(8)  # O top-right

    assert render_board(board) == (
        "   |   | O \n"
        "---+---+---\n"
        "   |   |   \n"
        "---+---+---\n"
        " X |   |   "
    )


def test_read_move_converts_to_zero_based():
    assert read_move(" 1\n") == 0
    assert read_move("9") == 8


def test_read_move_reports_bad_input(capsys):
    assert read_move("abc\n") is None
    assert "Received: 'abc'" in capsys.readouterr().out

    assert read_move("0") is None
    assert read_move("10") is None
    out = capsys.readouterr().out
    assert "between 1 and 9" in out
    assert "Received" not in out


def test_prompt_plays_move():
    board = Board(X)
    seen = []

    def read(text):
        seen.append(text)
        return "5"

    assert prompt(board, read)
    assert seen == ["Player X -- enter your move: "]
    assert board.cells[4].owner is X
    assert board.current_player is O


def test_prompt_rejects_occupied_cell(capsys):
    board = Board(X)
    board.play(4)
    before = board.clone()

    assert not prompt(board, scripted("5"))
    assert "Cell already occupied!" in capsys.readouterr().out
    assert board == before


def test_game_against_ai_never_lost(capsys):
    # Human cycles through cell numbers 1-9; taken cells are re-prompted.
    numbers = itertools.cycle(str(n) for n in range(1, 10))
    winner = play_game(human=X, read=lambda _prompt: next(numbers))

    out = capsys.readouterr().out
    assert winner is not X
    assert "Computer plays" in out
    assert "Cell already occupied!" in out
    assert out.rstrip().endswith(("It's a draw!", "Player O won!"))


def test_command_line_defaults(monkeypatch):
    monkeypatch.delenv("TICTAC_HOST", raising=False)
    monkeypatch.delenv("TICTAC_PORT", raising=False)
    assert parse_args([]).command is None
    assert parse_args(["play", "--human", "O"]).human is O
    serve = parse_args(["serve"])
    assert (serve.host, serve.port) == ("127.0.0.1", 8000)


def test_ai_opens_when_human_plays_o(capsys):
    numbers = itertools.cycle(str(n) for n in range(9, 0, -1))
    winner = play_game(human=O, read=lambda _prompt: next(numbers))

    out = capsys.readouterr().out
    assert winner is not O
    assert out.splitlines()[5] == "Computer plays 1"
    assert out.rstrip().endswith(("It's a draw!", "Player X won!"))
