from __future__ import annotations

import math
import time
from typing import Optional

from ataxx.game.board import (
    BLUE,
    JUMP_LIMIT,
    RED,
    Board,
    IllegalMove,
    color_name,
    opponent,
)
from ataxx.game.move import Move

INFINITY = math.inf


class Candidate:
    """A root move together with the minimax score it was found to have."""

    def __init__(self, move: Move, score: float) -> None:
        self.move = move
        self.score = score

    def __repr__(self) -> str:  # pragma: nocover
        return f"Candidate({self.move}, {self.score})"


class Search:
    """
    Depth-limited minimax with alpha-beta pruning.

    The search mutates the board it is given and undoes every move it makes,
    so the board is left exactly as it was received. Moves are tried in the
    order of `Board.get_moves()`, a move only replaces the best one found so
    far when it scores strictly better.
    """

    def __init__(
        self, depth: int = 4, *, pruning: bool = True, verbose: bool = False
    ) -> None:
        if depth < 1:
            raise ValueError(f"Search depth must be at least 1, got {depth}")

        self.depth = depth
        self.pruning = pruning
        self.verbose = verbose

        # Color of the player we are searching for
        self.color = RED

        # Positions visited during the last search
        self.nodes = 0

    def choose_move(self, board: Board) -> Move:
        candidate = self.search(board)

        if candidate is None:
            return Move.pass_move()

        return candidate.move

    def search(self, board: Board) -> Optional[Candidate]:
        """Best move for the player to move, or None if that player must pass."""
        if not board.moves_available(board.turn):
            return None

        self.color = board.turn
        self.nodes = 0
        start = time.time()

        best: Optional[Candidate] = None
        alpha = -INFINITY

        for move in board.get_moves():
            score = self._score_move(board, move, self.depth - 1, alpha, INFINITY)

            if best is None or score > best.score:
                best = Candidate(move, score)

            if self.pruning:
                alpha = max(alpha, score)

        assert best is not None

        if self.verbose:
            elapsed = time.time() - start
            print(
                f"{color_name(self.color)} search depth {self.depth} "
                f"move {best.move} score {best.score} "
                f"nodes {self.nodes} time {elapsed:.3f}s"
            )

        return best

    def _apply(self, board: Board, move: Move) -> None:
        try:
            board.apply(move)
        except IllegalMove as e:
            raise AssertionError(f'Search generated illegal move "{move}"') from e

    def _score_move(
        self, board: Board, move: Move, depth: int, alpha: float, beta: float
    ) -> float:
        self._apply(board, move)
        try:
            return self._minimax(board, depth, alpha, beta)
        finally:
            board.undo()

    def _static_score(self, board: Board, move: Move) -> float:
        self._apply(board, move)
        try:
            self.nodes += 1
            return board.count(self.color) - board.count(opponent(self.color))
        finally:
            board.undo()

    def _terminal_score(self, board: Board) -> float:
        mine = board.count(self.color)
        theirs = board.count(opponent(self.color))

        if mine > theirs:
            return INFINITY
        if mine < theirs:
            return -INFINITY
        return 0

    def _minimax(self, board: Board, depth: int, alpha: float, beta: float) -> float:
        self.nodes += 1

        # Same conditions as Board.game_over(), reusing the generated moves
        if (
            board.jumps >= JUMP_LIMIT
            or board.count(RED) == 0
            or board.count(BLUE) == 0
        ):
            return self._terminal_score(board)

        moves = board.get_moves()

        if not moves:
            if not board.moves_available(opponent(board.turn)):
                return self._terminal_score(board)
            moves = [Move.pass_move()]

        maximizing = board.turn == self.color
        best = -INFINITY if maximizing else INFINITY

        for move in moves:
            if depth == 0:
                score = self._static_score(board, move)
            else:
                score = self._score_move(board, move, depth - 1, alpha, beta)

            if maximizing:
                best = max(best, score)
                alpha = max(alpha, best)
            else:
                best = min(best, score)
                beta = min(beta, best)

            if self.pruning and beta <= alpha:
                break

        return best
