from __future__ import annotations

from pathlib import Path
from typing import Optional, TextIO


class CommandSource:
    def __init__(self, stream: TextIO, *, interactive: bool, owned: bool = False) -> None:
        self.stream = stream

        # Interactive sources print a prompt before reading a line
        self.interactive = interactive

        # Owned streams are closed once exhausted
        self.owned = owned

    @classmethod
    def from_file(cls, file: Path) -> CommandSource:
        return CommandSource(file.open(), interactive=False, owned=True)

    def get_line(self, prompt: str) -> Optional[str]:
        if self.interactive:
            print(prompt, end="", flush=True)

        line = self.stream.readline()

        if line == "":
            return None

        return line

    def close(self) -> None:
        if self.owned:
            self.stream.close()


class CommandSources:
    """
    Stack of command sources. Lines are read from the most recently added
    source until it runs out, then from the one below it.
    """

    def __init__(self) -> None:
        self.sources: list[CommandSource] = []

    def add_source(self, source: CommandSource) -> None:
        self.sources.append(source)

    def get_line(self, prompt: str) -> Optional[str]:
        """Next non-blank, non-comment line, or None when all sources are exhausted."""
        while self.sources:
            line = self.sources[-1].get_line(prompt)

            if line is None:
                self.sources.pop().close()
                continue

            line = line.strip()

            if line == "" or line.startswith("#"):
                continue

            return line

        return None

    def close_all(self) -> None:
        while self.sources:
            self.sources.pop().close()
