from __future__ import annotations

SIDE = 7

# Width of the always-blocked margin around the playing area.
BORDER = 2

EXTENDED_SIDE = SIDE + 2 * BORDER

COLUMNS = "abcdefg"
ROWS = "1234567"

PASS_TOKEN = "-"


def index(col: int, row: int) -> int:
    """
    Linearized index on the extended board of the square at 0-based column
    `col` and row `row`. Values in range -2..8 address the border margin.
    """
    assert -BORDER <= col < SIDE + BORDER
    assert -BORDER <= row < SIDE + BORDER
    return (row + BORDER) * EXTENDED_SIDE + (col + BORDER)


def index_to_col_row(square: int) -> tuple[int, int]:
    if square not in range(EXTENDED_SIDE * EXTENDED_SIDE):
        raise ValueError(f"Invalid index {square}")

    row, col = divmod(square, EXTENDED_SIDE)
    return col - BORDER, row - BORDER


def is_playing_square(square: int) -> bool:
    if square not in range(EXTENDED_SIDE * EXTENDED_SIDE):
        return False

    col, row = index_to_col_row(square)
    return 0 <= col < SIDE and 0 <= row < SIDE


def index_to_field(square: int) -> str:
    if not is_playing_square(square):
        raise ValueError(f"Index {square} is not on the playing area")

    col, row = index_to_col_row(square)
    return COLUMNS[col] + ROWS[row]


def field_to_index(field: str) -> int:
    if len(field) != 2:
        raise ValueError(f'Invalid field length "{len(field)}"')

    if field[0] not in COLUMNS or field[1] not in ROWS:
        raise ValueError(f'Invalid field "{field}"')

    return index(COLUMNS.index(field[0]), ROWS.index(field[1]))


class Move:
    """
    A move from one playing square to another, or the pass.

    There is exactly one Move object per square pair: use the factory
    classmethods, which look moves up in a table built at import time.
    Moves with a distance above 2 exist so that legality checks can reject
    them, they are neither extends nor jumps.
    """

    __slots__ = ("from_index", "to_index", "_distance")

    def __init__(self, from_index: int, to_index: int) -> None:
        self.from_index = from_index
        self.to_index = to_index

        if from_index < 0:
            self._distance = 0
        else:
            col0, row0 = index_to_col_row(from_index)
            col1, row1 = index_to_col_row(to_index)
            self._distance = max(abs(col1 - col0), abs(row1 - row0))

    @classmethod
    def pass_move(cls) -> Move:
        return PASS

    @classmethod
    def from_indexes(cls, from_index: int, to_index: int) -> Move:
        try:
            return _ALL_MOVES[(from_index, to_index)]
        except KeyError:
            raise ValueError(
                f"No move from index {from_index} to index {to_index}"
            ) from None

    @classmethod
    def from_fields(cls, from_field: str, to_field: str) -> Move:
        from_index = field_to_index(from_field)
        to_index = field_to_index(to_field)

        if from_index == to_index:
            raise ValueError(f'Move "{from_field}-{to_field}" does not move')

        return cls.from_indexes(from_index, to_index)

    @classmethod
    def parse(cls, token: str) -> Move:
        if token == PASS_TOKEN:
            return PASS

        if len(token) != 5 or token[2] != "-":
            raise ValueError(f'Invalid move "{token}"')

        return cls.from_fields(token[:2], token[3:])

    def is_pass(self) -> bool:
        return self.from_index < 0

    def distance(self) -> int:
        """Chebyshev distance between the two squares, 0 for the pass."""
        return self._distance

    def is_extend(self) -> bool:
        return self.distance() == 1

    def is_jump(self) -> bool:
        return self.distance() == 2

    @property
    def col0(self) -> int:
        return index_to_col_row(self.from_index)[0]

    @property
    def row0(self) -> int:
        return index_to_col_row(self.from_index)[1]

    @property
    def col1(self) -> int:
        return index_to_col_row(self.to_index)[0]

    @property
    def row1(self) -> int:
        return index_to_col_row(self.to_index)[1]

    def as_tuple(self) -> tuple[int, int]:
        return (self.from_index, self.to_index)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Move):
            return NotImplemented

        return self.as_tuple() == other.as_tuple()

    def __hash__(self) -> int:
        return hash(self.as_tuple())

    def __str__(self) -> str:
        if self.is_pass():
            return PASS_TOKEN

        return index_to_field(self.from_index) + "-" + index_to_field(self.to_index)

    def __repr__(self) -> str:
        return f'Move("{self}")'


PASS = Move(-1, -1)


def _build_all_moves() -> dict[tuple[int, int], Move]:
    squares = [index(col, row) for row in range(SIDE) for col in range(SIDE)]

    return {
        (from_index, to_index): Move(from_index, to_index)
        for from_index in squares
        for to_index in squares
        if from_index != to_index
    }


_ALL_MOVES = _build_all_moves()
