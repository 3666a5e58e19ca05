from __future__ import annotations

from typing import Optional

from ataxx.game.board import color_name
from ataxx.game.move import Move
from ataxx.player.base import Player


class ManualPlayer(Player):
    def my_move(self) -> Optional[Move]:
        return self.game.get_move_command(f"{color_name(self.color)}: ")
