from __future__ import annotations

from typing import Callable, Iterable, Optional

from ataxx.game.move import (
    EXTENDED_SIDE,
    SIDE,
    Move,
    field_to_index,
    index,
    index_to_col_row,
    index_to_field,
    is_playing_square,
)

RED = 1
BLUE = -1
EMPTY = 0
BLOCKED = 2

# Number of consecutive jumps after which the game ends.
JUMP_LIMIT = 25

COLOR_NAMES = {RED: "Red", BLUE: "Blue"}

GLYPHS = {RED: "r", BLUE: "b", EMPTY: "-", BLOCKED: "X"}

# Playing squares in row-major order, starting at a1.
PLAYING_SQUARES = [index(col, row) for row in range(SIDE) for col in range(SIDE)]

NEIGHBOR_OFFSETS = [
    row * EXTENDED_SIDE + col
    for row in range(-1, 2)
    for col in range(-1, 2)
    if (row, col) != (0, 0)
]

# Offsets of all squares within distance 2, in move generation order.
MOVE_OFFSETS = [
    row * EXTENDED_SIDE + col
    for row in range(-2, 3)
    for col in range(-2, 3)
    if (row, col) != (0, 0)
]


def opponent(color: int) -> int:
    assert color in [RED, BLUE]
    return -color


def color_name(color: int) -> str:
    return COLOR_NAMES[color]


class GameError(Exception):
    pass


class IllegalMove(GameError):
    pass


class IllegalPass(IllegalMove):
    pass


class IllegalBlockPlacement(GameError):
    pass


class UndoRecord:
    def __init__(self, move: Move, flipped: list[tuple[int, int]], jumps: int) -> None:
        self.move = move

        # Squares recolored by the move, with their color before the flip
        self.flipped = flipped

        # Jump counter before the move
        self.jumps = jumps


BoardCallback = Callable[["Board"], None]


class Board:
    """
    Ataxx board on an 11x11 array: the 7x7 playing area surrounded by two
    layers of blocked squares. The border lets move generation look at every
    square within distance 2 of a piece without bounds checks.

    Every move applied to the board can be undone exactly.
    """

    def __init__(self) -> None:
        self.squares: list[int] = [BLOCKED] * (EXTENDED_SIDE * EXTENDED_SIDE)

        # Incremental counts, blocks are only counted on the playing area.
        self.counts: dict[int, int] = {RED: 0, BLUE: 0, BLOCKED: 0}

        self.turn = RED
        self.jumps = 0
        self.moves: list[Move] = []
        self.undo_log: list[UndoRecord] = []
        self.callback: Optional[BoardCallback] = None

        self.clear()

    @classmethod
    def from_fields(
        cls,
        red: Iterable[str],
        blue: Iterable[str],
        *,
        blocked: Iterable[str] = (),
        turn: int = RED,
    ) -> Board:
        """Board with only the given pieces and blocks, no reflections are added."""
        assert turn in [RED, BLUE]

        board = Board()
        for square in PLAYING_SQUARES:
            board._set(square, EMPTY)

        for fields, value in [(red, RED), (blue, BLUE), (blocked, BLOCKED)]:
            for field in fields:
                board._set(field_to_index(field), value)

        board.turn = turn
        return board

    def set_callback(self, callback: Optional[BoardCallback]) -> None:
        """Set function called with this board after every change."""
        self.callback = callback

    def _notify(self) -> None:
        if self.callback is not None:
            self.callback(self)

    def clear(self) -> None:
        for square in range(len(self.squares)):
            if is_playing_square(square):
                self.squares[square] = EMPTY
            else:
                self.squares[square] = BLOCKED

        self.counts = {RED: 0, BLUE: 0, BLOCKED: 0}

        self._set(field_to_index("a1"), BLUE)
        self._set(field_to_index("g1"), RED)
        self._set(field_to_index("a7"), RED)
        self._set(field_to_index("g7"), BLUE)

        self.turn = RED
        self.jumps = 0
        self.moves = []
        self.undo_log = []
        self._notify()

    def copy(self) -> Board:
        """Return an independent copy of this board, without callback."""
        board = Board()
        board.squares = self.squares.copy()
        board.counts = dict(self.counts)
        board.turn = self.turn
        board.jumps = self.jumps
        board.moves = self.moves.copy()
        board.undo_log = self.undo_log.copy()
        return board

    def _set(self, square: int, value: int) -> None:
        previous = self.squares[square]

        if previous in self.counts:
            self.counts[previous] -= 1

        if value in self.counts:
            self.counts[value] += 1

        self.squares[square] = value

    def get_square(self, square: int) -> int:
        return self.squares[square]

    def get_field(self, field: str) -> int:
        return self.squares[field_to_index(field)]

    def count(self, color: int) -> int:
        assert color in [RED, BLUE, BLOCKED]
        return self.counts[color]

    def undo_depth(self) -> int:
        return len(self.undo_log)

    def _piece_has_move(self, square: int) -> bool:
        squares = self.squares
        return any(squares[square + offset] == EMPTY for offset in MOVE_OFFSETS)

    def moves_available(self, color: int) -> bool:
        """Whether `color` can make a non-pass move, regardless of whose turn it is."""
        for square in PLAYING_SQUARES:
            if self.squares[square] == color and self._piece_has_move(square):
                return True
        return False

    def get_moves(self) -> list[Move]:
        """All legal non-pass moves of the player to move, in generation order."""
        squares = self.squares
        moves: list[Move] = []

        for square in PLAYING_SQUARES:
            if squares[square] != self.turn:
                continue

            for offset in MOVE_OFFSETS:
                if squares[square + offset] == EMPTY:
                    moves.append(Move.from_indexes(square, square + offset))

        return moves

    def legal(self, move: Move) -> bool:
        if move.is_pass():
            return not self.moves_available(self.turn)

        return (
            self.squares[move.from_index] == self.turn
            and self.squares[move.to_index] == EMPTY
            and move.distance() <= 2
        )

    def check_legal(self, move: Move) -> None:
        if self.legal(move):
            return

        if move.is_pass():
            raise IllegalPass(f"Illegal pass: {color_name(self.turn)} can move")

        if not self.moves_available(self.turn):
            raise IllegalPass(f"Illegal move: {color_name(self.turn)} must pass")

        raise IllegalMove(f'Illegal move "{move}"')

    def apply(self, move: Move) -> None:
        self.check_legal(move)

        color = self.turn
        jumps = self.jumps
        flipped: list[tuple[int, int]] = []

        if not move.is_pass():
            if move.is_extend():
                self.jumps = 0
            else:
                self.jumps += 1
                self._set(move.from_index, EMPTY)

            self._set(move.to_index, color)
            flipped = self._flip(move.to_index)

        self.undo_log.append(UndoRecord(move, flipped, jumps))
        self.moves.append(move)
        self.turn = opponent(color)
        self._notify()

    def apply_text(self, token: str) -> None:
        self.apply(Move.parse(token))

    def _flip(self, target: int) -> list[tuple[int, int]]:
        color = self.squares[target]
        enemy = opponent(color)

        flipped = [
            (target + offset, enemy)
            for offset in NEIGHBOR_OFFSETS
            if self.squares[target + offset] == enemy
        ]

        for square, _ in flipped:
            self._set(square, color)

        return flipped

    def undo(self) -> None:
        if not self.undo_log:
            raise GameError("Nothing to undo")

        record = self.undo_log.pop()
        self.moves.pop()

        move = record.move
        mover = opponent(self.turn)

        if not move.is_pass():
            for square, color in record.flipped:
                self._set(square, color)

            self._set(move.to_index, EMPTY)

            if move.is_jump():
                self._set(move.from_index, mover)

        self.jumps = record.jumps
        self.turn = mover
        self._notify()

    def game_over(self) -> bool:
        return (
            self.jumps >= JUMP_LIMIT
            or self.counts[RED] == 0
            or self.counts[BLUE] == 0
            or not (self.moves_available(RED) or self.moves_available(BLUE))
        )

    def winner(self) -> Optional[int]:
        """Color with the most pieces, None for a draw."""
        if self.counts[RED] > self.counts[BLUE]:
            return RED
        if self.counts[BLUE] > self.counts[RED]:
            return BLUE
        return None

    @classmethod
    def reflections(cls, square: int) -> list[int]:
        """The square and its mirror images across the center row and column."""
        col, row = index_to_col_row(square)
        mirror_col = SIDE - 1 - col
        mirror_row = SIDE - 1 - row

        return sorted(
            {
                index(col, row),
                index(mirror_col, row),
                index(col, mirror_row),
                index(mirror_col, mirror_row),
            }
        )

    def set_block(self, field: str) -> None:
        if self.undo_log:
            raise IllegalBlockPlacement("Cannot place blocks after moves were made")

        targets = self.reflections(field_to_index(field))

        for square in targets:
            if self.squares[square] not in [EMPTY, BLOCKED]:
                raise IllegalBlockPlacement(
                    f'Cannot place block on occupied square "{index_to_field(square)}"'
                )

        for square in targets:
            self._set(square, BLOCKED)

        self._notify()

    def as_tuple(self) -> tuple[tuple[int, ...], int, int, tuple[int, int, int]]:
        counts = (self.counts[RED], self.counts[BLUE], self.counts[BLOCKED])
        return (tuple(self.squares), self.turn, self.jumps, counts)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            raise TypeError(f"Cannot compare Board with {type(other)}")

        return self.as_tuple() == other.as_tuple()

    def __repr__(self) -> str:
        return f"Board(turn={color_name(self.turn)}, moves={len(self.moves)})"

    def __str__(self) -> str:
        lines = ["==="]

        for row in reversed(range(SIDE)):
            glyphs = [GLYPHS[self.squares[index(col, row)]] for col in range(SIDE)]
            lines.append("  " + " ".join(glyphs))

        lines.append("===")
        return "\n".join(lines)
