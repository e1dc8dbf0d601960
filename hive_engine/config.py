from dataclasses import dataclass, field
from typing import Dict

from hive_engine.pieces import ANT, BEETLE, GRASSHOPPER, QUEEN, SPIDER

INITIAL_PIECES = {
    QUEEN: 1,
    SPIDER: 2,
    BEETLE: 2,
    GRASSHOPPER: 2,
    ANT: 3,
}

LOG_FORMAT = '%(asctime)s [%(levelname)s] %(message)s'
LOG_DATE_FORMAT = '%H:%M:%S'


@dataclass(frozen=True)
class GameConfig:
    """
    Rule knobs for a game.
      - starting_pieces: insect type -> how many each player starts with
      - queen_deadline: value of a player's moves_played at which an unplaced
        Queen becomes the only piece that player may play
    """
    starting_pieces: Dict[str, int] = field(default_factory=lambda: dict(INITIAL_PIECES))
    queen_deadline: int = 2

    def __post_init__(self):
        if self.starting_pieces.get(QUEEN, 0) != 1:
            raise ValueError("Each player must start with exactly one Queen.")
        if any(count < 0 for count in self.starting_pieces.values()):
            raise ValueError("Piece counts cannot be negative.")
        if self.queen_deadline < 0:
            raise ValueError("queen_deadline cannot be negative.")


DEFAULT_CONFIG = GameConfig()
