import logging

from hive_engine.errors import InvariantViolation
from hive_engine.hex_coordinate import ALL_DIRECTIONS

logger = logging.getLogger(__name__)


def stack_level(piece, pieces_by_id):
    """Number of pieces strictly below `piece`, following its resting_on chain."""
    level = 0
    seen = {piece.piece_id}
    current = piece
    while current.resting_on is not None:
        current = pieces_by_id[current.resting_on]
        if current.piece_id in seen:
            raise InvariantViolation(f"Piece {piece.piece_id} rests on a cycle of pieces.")
        seen.add(current.piece_id)
        level += 1
    return level


class Board:
    """
    Immutable position index of a Hive game:
      stacks: coordinate -> tuple of piece ids, bottom to top.
    Only the top of each stack counts for occupancy and adjacency.
    An entry is never an empty tuple.
    Equality and hashing look at `stacks` only; `pieces` is the id -> Piece
    lookup of the state the board was derived from and is not compared.
    """

    __slots__ = ("stacks", "pieces", "_sorted_items", "_hash")

    def __init__(self, stacks, pieces):
        object.__setattr__(self, "stacks", {
            coord: tuple(stack) for coord, stack in stacks.items() if stack
        })
        object.__setattr__(self, "pieces", pieces)

        sorted_items = tuple(sorted(self.stacks.items()))
        object.__setattr__(self, "_sorted_items", sorted_items)
        object.__setattr__(self, "_hash", hash(sorted_items))

    def __setattr__(self, name, value):
        raise AttributeError("Board is immutable.")

    def __hash__(self):
        return self._hash

    def __eq__(self, other):
        if not isinstance(other, Board):
            return False
        return self._sorted_items == other._sorted_items

    def __repr__(self):
        return f"Board({self._sorted_items})"

    def __len__(self):
        return len(self.stacks)

    def __contains__(self, coord):
        return coord in self.stacks

    @classmethod
    def empty(cls):
        return cls({}, {})

    @classmethod
    def from_pieces(cls, pieces):
        """
        Fold every placed piece into a coordinate -> stack mapping.
        `pieces` is an iterable of Piece; unplaced ones are skipped.
        """
        pieces_by_id = {piece.piece_id: piece for piece in pieces}
        levels = {}
        for piece in pieces_by_id.values():
            if not piece.is_placed:
                continue
            level = stack_level(piece, pieces_by_id)
            cell = levels.setdefault(piece.coordinate, {})
            if level in cell:
                logger.error("Pieces %s and %s both claim %s at level %d",
                             cell[level], piece.piece_id, piece.coordinate, level)
                raise InvariantViolation(
                    f"Pieces {cell[level]} and {piece.piece_id} both occupy "
                    f"{piece.coordinate} at level {level}.")
            cell[level] = piece.piece_id

        stacks = {}
        for coord, cell in levels.items():
            if sorted(cell) != list(range(len(cell))):
                logger.error("Stack at %s has gaps: levels %s", coord, sorted(cell))
                raise InvariantViolation(f"Stack at {coord} has levels {sorted(cell)}.")
            stacks[coord] = tuple(cell[level] for level in range(len(cell)))
        return cls(stacks, pieces_by_id)

    # ---------------------------------------------------------
    # Queries
    # ---------------------------------------------------------
    def stack_at(self, coord):
        """Return the tuple of piece ids at coord, or an empty tuple."""
        return self.stacks.get(coord, ())

    def top_at(self, coord):
        """Return the visible Piece at coord, or None."""
        stack = self.stacks.get(coord)
        if not stack:
            return None
        return self.pieces[stack[-1]]

    def owner_at(self, coord):
        top = self.top_at(coord)
        return top.player if top is not None else None

    def is_occupied(self, coord):
        return coord in self.stacks

    def occupied(self):
        """Return a list of coordinates with a non-empty stack."""
        return list(self.stacks)

    def occupied_neighbors(self, coord):
        return [n for n in coord.neighbors() if n in self.stacks]

    # ---------------------------------------------------------
    # Derived boards
    # ---------------------------------------------------------
    def without(self, coord):
        """Return a new Board with the whole stack at coord removed."""
        if coord not in self.stacks:
            return self
        new_stacks = dict(self.stacks)
        del new_stacks[coord]
        return Board(new_stacks, self.pieces)

    def with_stack(self, coord, stack):
        """Return a new Board with coord's stack replaced by `stack`."""
        new_stacks = dict(self.stacks)
        if stack:
            new_stacks[coord] = tuple(stack)
        else:
            new_stacks.pop(coord, None)
        return Board(new_stacks, self.pieces)

    # ---------------------------------------------------------
    # Sliding
    # ---------------------------------------------------------
    def slidable_neighbors(self, origin, ignore=()):
        """
        Empty neighbours of origin reachable by sliding along the hex edge.
        A neighbour qualifies when it is empty, not in `ignore`, and exactly
        one of the two gate cells flanking the edge is occupied. No occupied
        gate means the move loses contact with the hive; two means the gap
        is too narrow.
        """
        valid_positions = []
        for direction in ALL_DIRECTIONS:
            candidate = origin.get_relative(direction)
            if candidate in self.stacks or candidate in ignore:
                continue

            filled_gates = sum(
                1 for side in direction.get_adjacent_directions()
                if origin.get_relative(side) in self.stacks
            )
            if filled_gates == 1:
                valid_positions.append(candidate)
        return valid_positions
