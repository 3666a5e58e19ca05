from __future__ import annotations

from typing import TYPE_CHECKING

from ataxx.ai.search import Search
from ataxx.game.board import color_name
from ataxx.game.move import Move
from ataxx.player.base import Player

if TYPE_CHECKING:
    from ataxx.session.game import Game


class AIPlayer(Player):
    def __init__(self, game: Game, color: int, search: Search) -> None:
        super().__init__(game, color)
        self.search = search

    def my_move(self) -> Move:
        board = self.get_board()
        assert board.turn == self.color

        # Search a copy, so the game's board never sees the search.
        move = self.search.choose_move(board.copy())

        if move.is_pass():
            self.game.reporter.move_msg(f"{color_name(self.color)} passes.")
        else:
            self.game.reporter.move_msg(f"{color_name(self.color)} moves {move}.")

        return move
