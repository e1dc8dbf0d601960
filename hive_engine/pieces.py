from dataclasses import dataclass, field
from typing import Dict, Optional

from hive_engine.hex_coordinate import HexCoordinate

PLAYER1 = "Player1"
PLAYER2 = "Player2"
PLAYERS = (PLAYER1, PLAYER2)

QUEEN = "Queen"
ANT = "Ant"
SPIDER = "Spider"
GRASSHOPPER = "Grasshopper"
BEETLE = "Beetle"
INSECT_TYPES = (QUEEN, ANT, SPIDER, GRASSHOPPER, BEETLE)


def get_opponent(player):
    return PLAYER2 if player == PLAYER1 else PLAYER1


@dataclass
class Piece:
    """
    A single tile. `coordinate` is None while the piece is still in hand.
    `resting_on` / `covered_by` hold piece ids and describe the stack the
    piece belongs to; a piece with `covered_by` set cannot move.
    """
    piece_id: int
    insect_type: str
    player: str
    coordinate: Optional[HexCoordinate] = None
    resting_on: Optional[int] = None
    covered_by: Optional[int] = None

    @property
    def is_placed(self):
        return self.coordinate is not None

    @property
    def is_covered(self):
        return self.covered_by is not None

    def copy(self):
        return Piece(self.piece_id, self.insect_type, self.player,
                     self.coordinate, self.resting_on, self.covered_by)

    def label(self):
        """Short label such as 'P1Q' for Player1's Queen."""
        return f"P{self.player[-1]}{self.insect_type[0]}"


@dataclass
class PlayerInventory:
    pieces: Dict[str, int] = field(default_factory=dict)
    moves_played: int = 0

    def count(self, insect_type):
        return self.pieces.get(insect_type, 0)

    def contains(self, insect_type):
        return self.count(insect_type) > 0

    def take(self, insect_type):
        if not self.contains(insect_type):
            raise ValueError(f"No {insect_type} left in hand.")
        self.pieces[insect_type] -= 1

    def copy(self):
        return PlayerInventory(dict(self.pieces), self.moves_played)
