import logging
from dataclasses import dataclass
from typing import FrozenSet

from hive_engine.board import Board, stack_level
from hive_engine.config import DEFAULT_CONFIG
from hive_engine.connectivity import is_connected
from hive_engine.errors import (
    GameAlreadyOver,
    IllegalDestination,
    InvariantViolation,
    NotCurrentPlayersPiece,
    PassNotAllowed,
    PieceNotSelectable,
    StaleSelection,
    UnknownPiece,
    WrongPieceForForcedQueenRule,
)
from hive_engine.hex_coordinate import HexCoordinate
from hive_engine.move_generator import MoveGenerator
from hive_engine.pieces import PLAYER1, PLAYERS, QUEEN, Piece, PlayerInventory, get_opponent
from hive_engine.win_detector import detect_result

logger = logging.getLogger(__name__)


class GameState:
    """
    Everything about a game in progress:
      pieces: piece id -> Piece, for placed and unplaced pieces alike
      inventories: player -> PlayerInventory
    The board is never stored; call board() to derive it from the pieces.
    """

    def __init__(self, pieces=None, inventories=None, current_player=PLAYER1,
                 result=None, move_number=0, config=None):
        self.config = config if config is not None else DEFAULT_CONFIG
        self.pieces = pieces if pieces is not None else {}
        self.inventories = inventories if inventories is not None else {
            player: PlayerInventory(dict(self.config.starting_pieces)) for player in PLAYERS
        }
        self.current_player = current_player
        self.result = result
        self.move_number = move_number

    def copy(self):
        return GameState(
            pieces={piece_id: piece.copy() for piece_id, piece in self.pieces.items()},
            inventories={player: inv.copy() for player, inv in self.inventories.items()},
            current_player=self.current_player,
            result=self.result,
            move_number=self.move_number,
            config=self.config,
        )

    def board(self):
        return Board.from_pieces(self.pieces.values())

    def piece(self, piece_id):
        if piece_id not in self.pieces:
            raise UnknownPiece(f"No piece with id {piece_id}.", piece_id=piece_id)
        return self.pieces[piece_id]

    def placed_pieces(self):
        return [piece for piece in self.pieces.values() if piece.is_placed]

    def pieces_in_hand(self, player):
        return [piece for piece in self.pieces.values()
                if piece.player == player and not piece.is_placed]

    def level_of(self, piece_id):
        return stack_level(self.piece(piece_id), self.pieces)

    def get_opponent(self):
        return get_opponent(self.current_player)

    def is_terminal(self):
        return self.result is not None

    # ---------------------------------------------------------
    # Mutation (only ever applied to a fresh copy)
    # ---------------------------------------------------------
    def _place(self, piece, destination):
        self.inventories[piece.player].take(piece.insect_type)
        piece.coordinate = destination
        piece.resting_on = None

    def _relocate(self, piece, destination, board):
        if piece.resting_on is not None:
            self.pieces[piece.resting_on].covered_by = None
            piece.resting_on = None

        top = board.top_at(destination)
        if top is not None:
            piece.resting_on = top.piece_id
            self.pieces[top.piece_id].covered_by = piece.piece_id
        piece.coordinate = destination


def new_game(config=None):
    """Fresh game: every piece in hand, Player1 to move."""
    config = config if config is not None else DEFAULT_CONFIG
    pieces = {}
    piece_id = 0
    for player in PLAYERS:
        for insect_type, count in config.starting_pieces.items():
            for _ in range(count):
                piece_id += 1
                pieces[piece_id] = Piece(piece_id, insect_type, player)
    return GameState(pieces=pieces, config=config)


def state_from_layout(layout, current_player=PLAYER1, moves_played=None, config=None):
    """
    Build a mid-game position.
      layout: coordinate (HexCoordinate or (x, y)) -> [(player, insect), ...],
              each stack listed bottom to top
      moves_played: player -> count; defaults to how many pieces each player
              has on the board
    Pieces are taken from the players' hands, so counts cannot exceed the
    starting composition.
    """
    state = new_game(config)
    for coord, stack in layout.items():
        if not isinstance(coord, HexCoordinate):
            coord = HexCoordinate(*coord)
        below = None
        for player, insect_type in stack:
            piece = next((p for p in state.pieces_in_hand(player)
                          if p.insect_type == insect_type), None)
            if piece is None:
                raise ValueError(f"{player} has no {insect_type} left to put at {coord}.")
            state._place(piece, coord)
            if below is not None:
                piece.resting_on = below.piece_id
                below.covered_by = piece.piece_id
            below = piece

    for player in PLAYERS:
        if moves_played is not None and player in moves_played:
            count = moves_played[player]
        else:
            count = sum(1 for piece in state.placed_pieces() if piece.player == player)
        state.inventories[player].moves_played = count

    state.current_player = current_player
    state.board()
    return state


# ---------------------------------------------------------
# Queries
# ---------------------------------------------------------
def legal_destinations(state, piece_id):
    return MoveGenerator.destinations_for(state, state.board(), piece_id)


def legal_new_piece_cells(state, insect_type):
    return MoveGenerator.new_piece_cells(state, state.board(), insect_type)


def current_result(state):
    return state.result


def all_legal_moves(state):
    """piece id -> destinations, for every playable piece of the player to move."""
    board = state.board()
    moves = {}
    for piece in state.pieces.values():
        if piece.player != state.current_player:
            continue
        destinations = MoveGenerator.destinations_for(state, board, piece.piece_id)
        if destinations:
            moves[piece.piece_id] = destinations
    return moves


def has_legal_move(state):
    return bool(all_legal_moves(state))


# ---------------------------------------------------------
# Commands
# ---------------------------------------------------------
def _check_selectable(state, piece_id):
    if state.result is not None:
        raise GameAlreadyOver(f"The game is over ({state.result}).", piece_id=piece_id)
    piece = state.piece(piece_id)
    if piece.player != state.current_player:
        raise NotCurrentPlayersPiece(
            f"Piece {piece_id} belongs to {piece.player}, but {state.current_player} is to move.",
            piece_id=piece_id)
    if piece.is_covered:
        raise PieceNotSelectable(f"Piece {piece_id} is covered by piece {piece.covered_by}.",
                                 piece_id=piece_id)
    if piece.insect_type != QUEEN and MoveGenerator.is_forced_queen_turn(state, piece.player):
        raise WrongPieceForForcedQueenRule(
            f"{piece.player} must place the Queen this turn.", piece_id=piece_id)
    return piece


def apply_move(state, piece_id, destination):
    """
    Validate and play one placement or relocation. Returns the new state;
    `state` itself is never modified. Raises a MoveError when the move is
    rejected.
    """
    _check_selectable(state, piece_id)
    board = state.board()
    legal = MoveGenerator.destinations_for(state, board, piece_id)
    if destination not in legal:
        raise IllegalDestination(f"Piece {piece_id} cannot move to {destination}.",
                                 piece_id=piece_id, destination=destination)

    new_state = state.copy()
    piece = new_state.pieces[piece_id]
    mover = piece.player
    if piece.is_placed:
        origin = piece.coordinate
        new_state._relocate(piece, destination, board)
        logger.info("%s moved %s %d from %s to %s", mover, piece.insect_type, piece_id,
                    origin, destination)
    else:
        new_state._place(piece, destination)
        logger.info("%s placed %s %d at %s", mover, piece.insect_type, piece_id, destination)

    new_state.inventories[mover].moves_played += 1
    new_state.move_number += 1

    post_board = new_state.board()
    if not is_connected(post_board):
        logger.error("Hive split after moving piece %d to %s", piece_id, destination)
        raise InvariantViolation(f"Hive split after moving piece {piece_id} to {destination}.")

    new_state.result = detect_result(post_board, new_state.pieces.values())
    if new_state.result is None:
        new_state.current_player = get_opponent(mover)
    return new_state


def pass_turn(state):
    """Hand the turn to the opponent; only allowed when no legal move exists."""
    if state.result is not None:
        raise GameAlreadyOver(f"The game is over ({state.result}).")
    if has_legal_move(state):
        raise PassNotAllowed(f"{state.current_player} has a legal move and cannot pass.")
    new_state = state.copy()
    new_state.current_player = state.get_opponent()
    new_state.move_number += 1
    logger.info("%s has no legal move and passes", state.current_player)
    return new_state


@dataclass(frozen=True)
class Selection:
    """A picked-up piece and the destinations computed for it at move_number."""
    piece_id: int
    move_number: int
    destinations: FrozenSet[HexCoordinate]


def select_piece(state, piece_id):
    _check_selectable(state, piece_id)
    destinations = MoveGenerator.destinations_for(state, state.board(), piece_id)
    return Selection(piece_id, state.move_number, frozenset(destinations))


def confirm_selection(state, selection, destination):
    if selection.move_number != state.move_number:
        raise StaleSelection(
            f"Selection was made at move {selection.move_number}, game is at move {state.move_number}.",
            piece_id=selection.piece_id, destination=destination)
    if destination not in selection.destinations:
        raise IllegalDestination(f"Piece {selection.piece_id} cannot move to {destination}.",
                                 piece_id=selection.piece_id, destination=destination)
    return apply_move(state, selection.piece_id, destination)
