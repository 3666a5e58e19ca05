from __future__ import annotations

from ataxx.config import get_ai_verbose, get_search_depth

MANUAL_PLAYER = "manual"
AI_PLAYER = "ai"

PLAYER_KINDS = [MANUAL_PLAYER, AI_PLAYER]


class PlayerArguments:
    def __init__(self, red: str, blue: str) -> None:
        for kind in [red, blue]:
            if kind not in PLAYER_KINDS:
                raise ValueError(f'Unknown player kind "{kind}"')

        self.red = red
        self.blue = blue


class SearchArguments:
    def __init__(self, depth: int, verbose: bool) -> None:
        if depth < 1:
            raise ValueError(f"Search depth must be at least 1, got {depth}")

        self.depth = depth
        self.verbose = verbose


class Arguments:
    def __init__(self, players: PlayerArguments, search: SearchArguments) -> None:
        self.players = players
        self.search = search

    @classmethod
    def empty(cls) -> Arguments:
        return Arguments(
            PlayerArguments(MANUAL_PLAYER, AI_PLAYER),
            SearchArguments(get_search_depth(), get_ai_verbose()),
        )
