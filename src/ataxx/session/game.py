from __future__ import annotations

from pathlib import Path
from typing import Callable, Optional

from ataxx.ai.search import Search
from ataxx.arguments import AI_PLAYER, Arguments
from ataxx.game.board import BLUE, RED, Board, GameError
from ataxx.game.move import Move
from ataxx.player.ai import AIPlayer
from ataxx.player.base import Player
from ataxx.player.manual import ManualPlayer
from ataxx.session.command import HELP_TEXT, Command, CommandType
from ataxx.session.reporter import Reporter
from ataxx.session.source import CommandSource, CommandSources

COLORS_BY_NAME = {"red": RED, "blue": BLUE}


class State:
    SETUP = "setup"
    PLAYING = "playing"
    FINISHED = "finished"


class SessionEnded(Exception):
    pass


class Game:
    """
    Runs a session of Ataxx games: reads commands during setup, asks the
    players for moves while playing and reports the outcome of each game.
    """

    def __init__(
        self,
        board: Board,
        inputs: CommandSources,
        args: Arguments,
        reporter: Reporter,
    ) -> None:
        self.board = board
        self.inputs = inputs
        self.args = args
        self.reporter = reporter
        self.state = State.SETUP

        self.players: dict[int, Player] = {
            RED: self.build_player(RED, args.players.red),
            BLUE: self.build_player(BLUE, args.players.blue),
        }

        self.handlers: dict[str, Callable[[list[str]], None]] = {
            CommandType.AUTO: self.do_auto,
            CommandType.BLOCK: self.do_block,
            CommandType.CLEAR: self.do_clear,
            CommandType.DUMP: self.do_dump,
            CommandType.HELP: self.do_help,
            CommandType.LOAD: self.do_load,
            CommandType.MANUAL: self.do_manual,
            CommandType.PASS: self.do_move,
            CommandType.PIECE_MOVE: self.do_move,
            CommandType.QUIT: self.do_quit,
            CommandType.START: self.do_start,
            CommandType.ERROR: self.do_error,
        }

    def build_player(self, color: int, kind: str) -> Player:
        if kind == AI_PLAYER:
            search = Search(
                self.args.search.depth, verbose=self.args.search.verbose
            )
            return AIPlayer(self, color, search)
        return ManualPlayer(self, color)

    def process(self) -> None:
        try:
            while True:
                self.play_game()
        except SessionEnded:
            return
        finally:
            self.inputs.close_all()

    def play_game(self) -> None:
        self.do_clear([])

        while self.state == State.SETUP:
            self.do_command()

        while self.state == State.PLAYING and not self.board.game_over():
            move = self.players[self.board.turn].my_move()

            # None when the game left the playing state or the player was replaced
            if move is None:
                continue

            self.board.apply(move)

        if self.state == State.PLAYING:
            self.report_winner()
            self.state = State.FINISHED

        while self.state == State.FINISHED:
            self.do_command()

    def do_command(self) -> None:
        line = self.inputs.get_line("ataxx: ")

        if line is None:
            raise SessionEnded

        self.execute(Command.parse(line))

    def execute(self, command: Command) -> None:
        try:
            self.handlers[command.type](command.operands)
        except GameError as e:
            self.reporter.error_msg(str(e))

    def get_move_command(self, prompt: str) -> Optional[Move]:
        """
        Read commands until one of them is a legal move for the player to
        move. Returns None if a command makes the game leave the playing state
        or replaces the player to move.
        """
        player = self.players[self.board.turn]

        while self.state == State.PLAYING and self.players[self.board.turn] is player:
            line = self.inputs.get_line(prompt)

            if line is None:
                raise SessionEnded

            command = Command.parse(line)

            if command.type not in [CommandType.PIECE_MOVE, CommandType.PASS]:
                self.execute(command)
                continue

            try:
                move = self.parse_move(command.operands[0])
                self.board.check_legal(move)
            except GameError as e:
                self.reporter.error_msg(str(e))
                continue

            return move

        return None

    def parse_move(self, token: str) -> Move:
        try:
            return Move.parse(token)
        except ValueError as e:
            raise GameError(str(e)) from e

    def check_state(self, name: str, *states: str) -> None:
        if self.state not in states:
            raise GameError(f"'{name}' command is not allowed now.")

    def report_winner(self) -> None:
        winner = self.board.winner()

        if winner == RED:
            self.reporter.outcome_msg("Red wins.")
        elif winner == BLUE:
            self.reporter.outcome_msg("Blue wins.")
        else:
            self.reporter.outcome_msg("Draw.")

    # --- command handlers ---

    def do_auto(self, operands: list[str]) -> None:
        color = COLORS_BY_NAME[operands[0]]
        self.players[color] = self.build_player(color, AI_PLAYER)

    def do_manual(self, operands: list[str]) -> None:
        color = COLORS_BY_NAME[operands[0]]
        self.players[color] = ManualPlayer(self, color)

    def do_block(self, operands: list[str]) -> None:
        self.check_state("block", State.SETUP)
        self.board.set_block(operands[0])

    def do_clear(self, operands: list[str]) -> None:
        self.state = State.SETUP
        self.board.clear()

    def do_dump(self, operands: list[str]) -> None:
        self.reporter.info_msg(str(self.board))

    def do_help(self, operands: list[str]) -> None:
        self.reporter.info_msg(HELP_TEXT)

    def do_load(self, operands: list[str]) -> None:
        try:
            source = CommandSource.from_file(Path(operands[0]))
        except OSError:
            raise GameError(f"Cannot open file {operands[0]}") from None

        self.inputs.add_source(source)

    def do_move(self, operands: list[str]) -> None:
        # Moves while playing are read by get_move_command()
        self.check_state("move", State.SETUP)
        self.board.apply(self.parse_move(operands[0]))

    def do_quit(self, operands: list[str]) -> None:
        raise SessionEnded

    def do_start(self, operands: list[str]) -> None:
        self.check_state("start", State.SETUP)
        self.state = State.PLAYING

    def do_error(self, operands: list[str]) -> None:
        raise GameError("Command not understood")
