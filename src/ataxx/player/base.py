from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from ataxx.game.board import BLUE, RED, Board
from ataxx.game.move import Move

if TYPE_CHECKING:
    from ataxx.session.game import Game


class Player:
    def __init__(self, game: Game, color: int) -> None:
        assert color in [RED, BLUE]

        self.game = game
        self.color = color

    def get_board(self) -> Board:
        return self.game.board

    def my_move(self) -> Optional[Move]:
        """
        Return a legal move for this player on the game's board. None means
        the game left the playing state while waiting for a move.
        """
        raise NotImplementedError
