import logging
from dataclasses import dataclass
from typing import Optional

from hive_engine.pieces import QUEEN, get_opponent

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GameResult:
    """A finished game: `winner` is a player name, or None for a draw."""
    winner: Optional[str] = None

    @classmethod
    def draw(cls):
        return cls(None)

    @classmethod
    def player_won(cls, player):
        return cls(player)

    @property
    def is_draw(self):
        return self.winner is None

    def __str__(self):
        return "Draw" if self.is_draw else self.winner


def is_queen_surrounded(board, queen):
    """Checks if every neighbour of the Queen's cell is occupied."""
    if not queen.is_placed:
        return False
    return all(board.is_occupied(n) for n in queen.coordinate.neighbors())


def surrounded_queen_owners(board, pieces):
    return {
        piece.player for piece in pieces
        if piece.insect_type == QUEEN and is_queen_surrounded(board, piece)
    }


def detect_result(board, pieces):
    """
    Game result for the post-move board: one surrounded Queen loses for its
    owner, two is a draw, none leaves the game running.
    """
    losers = surrounded_queen_owners(board, pieces)
    if not losers:
        return None
    if len(losers) > 1:
        logger.info("Both Queens are surrounded: draw")
        return GameResult.draw()
    loser = losers.pop()
    logger.info("%s's Queen is surrounded: %s wins", loser, get_opponent(loser))
    return GameResult.player_won(get_opponent(loser))
