from __future__ import annotations

import re


class CommandType:
    AUTO = "auto"
    BLOCK = "block"
    CLEAR = "clear"
    DUMP = "dump"
    HELP = "help"
    LOAD = "load"
    MANUAL = "manual"
    PASS = "pass"
    PIECE_MOVE = "move"
    QUIT = "quit"
    START = "start"
    ERROR = "error"


PATTERNS: list[tuple[str, re.Pattern[str]]] = [
    (CommandType.AUTO, re.compile(r"auto\s+(red|blue)")),
    (CommandType.BLOCK, re.compile(r"block\s+([a-g][1-7])")),
    (CommandType.CLEAR, re.compile(r"clear")),
    (CommandType.DUMP, re.compile(r"dump")),
    (CommandType.HELP, re.compile(r"help")),
    (CommandType.LOAD, re.compile(r"load\s+(\S+)")),
    (CommandType.MANUAL, re.compile(r"manual\s+(red|blue)")),
    (CommandType.PASS, re.compile(r"(-)")),
    (CommandType.PIECE_MOVE, re.compile(r"([a-g][1-7]-[a-g][1-7])")),
    (CommandType.QUIT, re.compile(r"quit")),
    (CommandType.START, re.compile(r"start")),
]

HELP_TEXT = """\
Commands:
  start            Start playing from the current position.
  clear            Abandon the current game and clear the board.
  auto red|blue    Let the computer play the given color.
  manual red|blue  Read moves for the given color from the input.
  block <c><r>     Block a square and its reflections (setup only).
  <c><r>-<c><r>    Move a piece, for example a7-b6.
  -                Pass, only allowed when no move is possible.
  dump             Print the board.
  load <file>      Read commands from a file.
  help             Print this message.
  quit             End the session.\
"""


class Command:
    def __init__(self, type_: str, operands: list[str]) -> None:
        self.type = type_
        self.operands = operands

    @classmethod
    def parse(cls, line: str) -> Command:
        text = line.strip()

        for type_, pattern in PATTERNS:
            match = pattern.fullmatch(text)
            if match:
                return Command(type_, list(match.groups()))

        return Command(CommandType.ERROR, [text])

    def __repr__(self) -> str:  # pragma: nocover
        return f"Command({self.type}, {self.operands})"
