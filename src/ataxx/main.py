import sys
import typer
from pathlib import Path
from typing import Annotated, Optional

from ataxx.arguments import (
    AI_PLAYER,
    MANUAL_PLAYER,
    Arguments,
    PlayerArguments,
    SearchArguments,
)
from ataxx.config import get_ai_verbose, get_search_depth
from ataxx.game.board import Board
from ataxx.session.game import Game
from ataxx.session.reporter import Reporter
from ataxx.session.source import CommandSource, CommandSources

app = typer.Typer()


@app.command()
def main(
    script: Annotated[Optional[Path], typer.Argument()] = None,
    red: Annotated[str, typer.Option("--red", "-r")] = MANUAL_PLAYER,
    blue: Annotated[str, typer.Option("--blue", "-b")] = AI_PLAYER,
    depth: Annotated[Optional[int], typer.Option("--depth", "-d")] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v")] = False,
) -> None:
    try:
        players = PlayerArguments(red, blue)
        search = SearchArguments(
            depth if depth is not None else get_search_depth(),
            verbose or get_ai_verbose(),
        )
    except ValueError as e:
        raise typer.BadParameter(str(e))

    inputs = CommandSources()
    inputs.add_source(CommandSource(sys.stdin, interactive=sys.stdin.isatty()))

    if script is not None:
        try:
            inputs.add_source(CommandSource.from_file(script))
        except OSError:
            raise typer.BadParameter(f"Cannot open file {script}")

    game = Game(Board(), inputs, Arguments(players, search), Reporter())
    game.process()


if __name__ == "__main__":
    app()
