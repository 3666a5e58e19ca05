import io
import pytest
from pathlib import Path

from ataxx.arguments import (
    AI_PLAYER,
    MANUAL_PLAYER,
    Arguments,
    PlayerArguments,
    SearchArguments,
)
from ataxx.game.board import BLOCKED, BLUE, EMPTY, RED, Board
from ataxx.game.move import Move
from ataxx.player.ai import AIPlayer
from ataxx.player.manual import ManualPlayer
from ataxx.session.game import Game, State
from ataxx.session.reporter import Reporter
from ataxx.session.source import CommandSource, CommandSources

JUMP_CYCLE = ["a7-c7", "a1-c1", "c7-a7", "c1-a1"]


class Session:
    def __init__(
        self, script: str, red: str = MANUAL_PLAYER, blue: str = MANUAL_PLAYER
    ) -> None:
        self.out = io.StringIO()
        self.err = io.StringIO()

        inputs = CommandSources()
        inputs.add_source(CommandSource(io.StringIO(script), interactive=False))

        args = Arguments(PlayerArguments(red, blue), SearchArguments(1, False))
        self.game = Game(Board(), inputs, args, Reporter(self.out, self.err))

    def run(self) -> None:
        self.game.process()

    def output(self) -> list[str]:
        return self.out.getvalue().splitlines()

    def errors(self) -> list[str]:
        return self.err.getvalue().splitlines()


def lines(*commands: str) -> str:
    return "".join(command + "\n" for command in commands)


def test_setup_and_manual_moves() -> None:
    session = Session(lines("start", "a7-b7", "a1-a2", "quit"))
    session.run()

    board = session.game.board
    assert board.moves == [Move.parse("a7-b7"), Move.parse("a1-a2")]
    assert board.turn == RED
    assert session.game.state == State.PLAYING
    assert session.errors() == []


def test_setup_moves() -> None:
    session = Session(lines("a7-b7", "a1-a2", "quit"))
    session.run()

    assert session.game.state == State.SETUP
    assert session.game.board.undo_depth() == 2


def test_blocks_and_dump() -> None:
    session = Session(lines("block b2", "dump", "quit"))
    session.run()

    board = session.game.board
    for field in ["b2", "f2", "b6", "f6"]:
        assert board.get_field(field) == BLOCKED

    assert session.output() == str(board).split("\n")


def test_block_occupied() -> None:
    session = Session(lines("block b2", "block a1", "quit"))
    session.run()

    assert session.errors() == ['Cannot place block on occupied square "a1"']
    assert session.game.board.count(BLOCKED) == 4


def test_block_after_setup_move() -> None:
    session = Session(lines("a7-b7", "block d4", "quit"))
    session.run()

    assert session.errors() == ["Cannot place blocks after moves were made"]


@pytest.mark.parametrize(
    ["command", "error"],
    [
        pytest.param("block c3", "'block' command is not allowed now.", id="block"),
        pytest.param("start", "'start' command is not allowed now.", id="start"),
        pytest.param("flip", "Command not understood", id="unknown"),
        pytest.param("a1-a2", 'Illegal move "a1-a2"', id="illegal-move"),
        pytest.param("a7-d7", 'Illegal move "a7-d7"', id="too-far"),
        pytest.param("-", "Illegal pass: Red can move", id="illegal-pass"),
    ],
)
def test_errors_while_playing(command: str, error: str) -> None:
    session = Session(lines("start", command, "a7-b7", "quit"))
    session.run()

    assert session.errors() == [error]

    # The player is asked again and the next legal move is played
    assert session.game.board.moves == [Move.parse("a7-b7")]


def test_unknown_command_in_setup() -> None:
    session = Session(lines("seed 3", "quit"))
    session.run()

    assert session.errors() == ["Command not understood"]


def test_comments_and_blank_lines() -> None:
    session = Session(lines("# a comment", "", "   ", "a7-b7", "quit"))
    session.run()

    assert session.errors() == []
    assert session.game.board.undo_depth() == 1


def test_draw_by_jump_limit() -> None:
    moves = (JUMP_CYCLE * 7)[:25]
    session = Session(lines("start", *moves, "a7-b7", "quit"))
    session.run()

    assert session.output() == ["Draw."]
    assert session.game.state == State.FINISHED
    assert session.errors() == ["'move' command is not allowed now."]


def test_clear_restarts() -> None:
    session = Session(lines("start", "a7-b7", "clear", "dump", "quit"))
    session.run()

    assert session.game.state == State.SETUP
    assert session.game.board == Board()
    assert session.output() == str(Board()).split("\n")


def test_clear_after_game_over() -> None:
    moves = (JUMP_CYCLE * 7)[:25]
    session = Session(lines("start", *moves, "clear", "start", "a7-b7", "quit"))
    session.run()

    assert session.output() == ["Draw."]
    assert session.game.state == State.PLAYING
    assert session.game.board.moves == [Move.parse("a7-b7")]


def test_end_of_input_ends_session() -> None:
    session = Session(lines("start", "a7-b7"))
    session.run()

    assert session.game.board.undo_depth() == 1
    assert session.errors() == []


def test_help() -> None:
    session = Session(lines("help", "quit"))
    session.run()

    assert session.output()[0] == "Commands:"


def test_load(tmp_path: Path) -> None:
    script = tmp_path / "setup.txt"
    script.write_text(lines("block b2", "a7-b7"))

    session = Session(lines(f"load {script}", "a1-a2", "quit"))
    session.run()

    board = session.game.board
    assert board.get_field("b2") == BLOCKED
    assert board.moves == [Move.parse("a7-b7"), Move.parse("a1-a2")]
    assert session.errors() == []


def test_load_missing_file(tmp_path: Path) -> None:
    missing = tmp_path / "missing.txt"

    session = Session(lines(f"load {missing}", "quit"))
    session.run()

    assert session.errors() == [f"Cannot open file {missing}"]


def test_auto_player() -> None:
    session = Session(lines("auto red", "start", "quit"))
    session.run()

    assert isinstance(session.game.players[RED], AIPlayer)
    assert isinstance(session.game.players[BLUE], ManualPlayer)
    assert session.output() == ["Red moves g1-f1."]
    assert session.game.board.moves == [Move.parse("g1-f1")]


def test_manual_player() -> None:
    session = Session(lines("manual blue", "quit"), blue=AI_PLAYER)
    assert isinstance(session.game.players[BLUE], AIPlayer)

    session.run()
    assert isinstance(session.game.players[BLUE], ManualPlayer)


def test_ai_player_takes_win() -> None:
    session = Session(lines("quit"), red=AI_PLAYER)
    session.game.board = Board.from_fields(["a1"], ["b2", "g7"])

    move = session.game.players[RED].my_move()

    assert move == Move.parse("a1-b1")
    assert session.output() == ["Red moves a1-b1."]

    # The search runs on a copy
    assert session.game.board.undo_depth() == 0
    assert session.game.board.get_field("b2") == BLUE


def test_ai_passes() -> None:
    session = Session(lines("quit"), red=AI_PLAYER)
    blue = ["a2", "a3", "b1", "b2", "b3", "c1", "c2", "c3"]
    session.game.board = Board.from_fields(["a1"], blue)

    move = session.game.players[RED].my_move()

    assert move.is_pass()
    assert session.output() == ["Red passes."]
    assert session.game.board.undo_depth() == 0


@pytest.mark.parametrize(
    ["red", "blue", "expected"],
    [
        pytest.param(["a1", "a2"], ["g7"], "Red wins.", id="red"),
        pytest.param(["a1"], ["g7", "g6"], "Blue wins.", id="blue"),
        pytest.param(["a1"], ["g7"], "Draw.", id="draw"),
    ],
)
def test_report_winner(red: list[str], blue: list[str], expected: str) -> None:
    session = Session("")
    session.game.board = Board.from_fields(red, blue)
    session.game.report_winner()

    assert session.output() == [expected]


def test_start_finished_position() -> None:
    moves = (JUMP_CYCLE * 7)[:25]
    session = Session(lines(*moves, "start", "quit"))
    session.run()

    assert session.output() == ["Draw."]
    assert session.game.state == State.FINISHED
    assert session.game.board.get_field("c3") == EMPTY


def test_auto_while_playing() -> None:
    session = Session(lines("start", "auto red", "quit"))
    session.run()

    assert isinstance(session.game.players[RED], AIPlayer)
    assert session.output() == ["Red moves g1-f1."]
    assert session.game.board.moves == [Move.parse("g1-f1")]
    assert session.errors() == []


def test_manual_while_playing() -> None:
    script = lines("start", "manual blue", "a7-b7", "a1-a2", "quit")
    session = Session(script, blue=AI_PLAYER)
    session.run()

    assert isinstance(session.game.players[BLUE], ManualPlayer)
    assert session.game.board.moves == [Move.parse("a7-b7"), Move.parse("a1-a2")]
    assert session.output() == []


def test_quit_from_loaded_script(tmp_path: Path) -> None:
    script = tmp_path / "quit.txt"
    script.write_text(lines("a7-b7", "quit", "a1-a2"))

    session = Session(lines(f"load {script}", "dump"))
    session.run()

    assert session.game.inputs.sources == []
    assert session.game.board.moves == [Move.parse("a7-b7")]
    assert session.output() == []


def test_sources_closed_on_quit() -> None:
    session = Session(lines("dump"))
    stream = io.StringIO(lines("quit", "dump"))
    session.game.inputs.add_source(CommandSource(stream, interactive=False, owned=True))

    session.run()

    assert stream.closed
    assert session.output() == []
