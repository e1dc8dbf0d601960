import logging

from hive_engine.connectivity import is_connected
from hive_engine.errors import UnknownPiece
from hive_engine.hex_coordinate import ALL_DIRECTIONS, HexCoordinate
from hive_engine.pieces import ANT, BEETLE, GRASSHOPPER, QUEEN, SPIDER, get_opponent

logger = logging.getLogger(__name__)


class MoveGenerator:
    """
    Legal-destination rules for every insect, plus placement of new pieces.
    Relocation helpers take the board with the moving piece's cell already
    removed, so the piece never blocks or supports its own move.
    """

    SPIDER_EXTRA_ROUNDS = 2

    # ---------------------------------------------------------
    # 1. Per-insect relocation rules
    # ---------------------------------------------------------
    @staticmethod
    def get_queen_destinations(board, start):
        return set(board.slidable_neighbors(start))

    @staticmethod
    def get_ant_destinations(board, start):
        """Everything reachable by repeated slides along the hive perimeter."""
        found = set(board.slidable_neighbors(start))
        frontier = set(found)
        while frontier:
            ignore = found | {start}
            new_cells = set()
            for cell in frontier:
                new_cells.update(board.slidable_neighbors(cell, ignore))
            found |= new_cells
            frontier = new_cells
        return found

    @staticmethod
    def get_spider_destinations(board, start):
        """
        Cells at the end of three consecutive slides. If a round finds
        nothing new the previous round's cells are kept.
        """
        possible = set(board.slidable_neighbors(start))
        ignore = possible | {start}

        for _ in range(MoveGenerator.SPIDER_EXTRA_ROUNDS):
            new_cells = set()
            for cell in possible:
                new_cells.update(board.slidable_neighbors(cell, ignore))
            if not new_cells:
                break
            possible = new_cells
            ignore |= new_cells
        return possible

    @staticmethod
    def get_grasshopper_jumps(board, start):
        possible_destinations = set()
        for direction in ALL_DIRECTIONS:
            position = start.get_relative(direction)
            jumped = False
            while board.is_occupied(position):
                position = position.get_relative(direction)
                jumped = True
            if jumped:
                possible_destinations.add(position)
        return possible_destinations

    @staticmethod
    def get_beetle_destinations(board, start, level):
        # TODO: ground-level beetles ignore the slide gate when climbing; decide
        # whether to apply slidable_neighbors-style gating here too.
        if level > 0:
            return set(start.neighbors())
        return {cell for cell in start.neighbors() if board.is_occupied(cell)}

    # ---------------------------------------------------------
    # 2. Placement
    # ---------------------------------------------------------
    @staticmethod
    def get_placement_cells(board, player, may_touch_opponent):
        """
        Empty cells touching the hive. Unless `may_touch_opponent`, cells
        next to a stack topped by the opponent are excluded.
        """
        if len(board) == 0:
            return {HexCoordinate.origin()}

        opponent = get_opponent(player)
        valid_cells = set()
        checked = set()
        for position in board.occupied():
            for candidate in position.neighbors():
                if candidate in checked:
                    continue
                checked.add(candidate)
                if board.is_occupied(candidate):
                    continue
                if not may_touch_opponent and any(
                        board.owner_at(n) == opponent for n in candidate.neighbors()):
                    continue
                valid_cells.add(candidate)
        return valid_cells

    # ---------------------------------------------------------
    # 3. State-level queries
    # ---------------------------------------------------------
    @staticmethod
    def is_forced_queen_turn(state, player):
        inventory = state.inventories[player]
        return (inventory.moves_played == state.config.queen_deadline
                and inventory.contains(QUEEN))

    @staticmethod
    def new_piece_cells(state, board, insect_type):
        if state.result is not None:
            return set()
        player = state.current_player
        if not state.inventories[player].contains(insect_type):
            return set()
        if insect_type != QUEEN and MoveGenerator.is_forced_queen_turn(state, player):
            logger.debug("%s must place the Queen; %s is not playable", player, insect_type)
            return set()
        may_touch_opponent = not any(p.player == player for p in state.placed_pieces())
        return MoveGenerator.get_placement_cells(board, player, may_touch_opponent)

    @staticmethod
    def relocation_destinations(board, piece):
        """
        Destinations for a placed, uncovered piece on `board` (the full
        current board). Ground pieces whose removal would split the hive
        have none.
        """
        start = piece.coordinate
        level = board.stack_at(start).index(piece.piece_id)
        reduced = board.without(start)

        if level == 0 and not is_connected(reduced):
            logger.debug("Piece %d at %s is pinned by the one-hive rule", piece.piece_id, start)
            return set()

        insect_type = piece.insect_type
        if insect_type == QUEEN:
            destinations = MoveGenerator.get_queen_destinations(reduced, start)
        elif insect_type == ANT:
            destinations = MoveGenerator.get_ant_destinations(reduced, start)
        elif insect_type == SPIDER:
            destinations = MoveGenerator.get_spider_destinations(reduced, start)
        elif insect_type == GRASSHOPPER:
            destinations = MoveGenerator.get_grasshopper_jumps(reduced, start)
        elif insect_type == BEETLE:
            destinations = MoveGenerator.get_beetle_destinations(reduced, start, level)
        else:
            raise ValueError(f"Unknown insect type {insect_type!r}")

        logger.debug("%s %d at %s has %d destinations",
                     insect_type, piece.piece_id, start, len(destinations))
        return destinations

    @staticmethod
    def destinations_for(state, board, piece_id):
        """
        All legal destinations of one piece for the player to move.
        Pieces that cannot be played this turn get an empty set.
        """
        if piece_id not in state.pieces:
            raise UnknownPiece(f"No piece with id {piece_id}.", piece_id=piece_id)
        piece = state.pieces[piece_id]

        if state.result is not None or piece.player != state.current_player:
            return set()
        if piece.insect_type != QUEEN and MoveGenerator.is_forced_queen_turn(state, piece.player):
            logger.debug("%s must place the Queen; piece %d is not playable",
                         piece.player, piece_id)
            return set()
        if not piece.is_placed:
            return MoveGenerator.new_piece_cells(state, board, piece.insect_type)
        if piece.is_covered:
            return set()
        return MoveGenerator.relocation_destinations(board, piece)
