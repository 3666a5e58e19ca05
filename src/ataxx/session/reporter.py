import sys
from typing import Optional, TextIO


class Reporter:
    def __init__(self, out: Optional[TextIO] = None, err: Optional[TextIO] = None) -> None:
        self.out = out
        self.err = err

    def move_msg(self, message: str) -> None:
        print(message, file=self.out)

    def outcome_msg(self, message: str) -> None:
        print(message, file=self.out)

    def info_msg(self, message: str) -> None:
        print(message, file=self.out)

    def error_msg(self, message: str) -> None:
        print(message, file=self.err or sys.stderr)
