class MoveError(ValueError):
    """
    A rejected player intent. The state it was raised for is unchanged and
    the driver may simply ask for another move.
    """

    def __init__(self, message, piece_id=None, destination=None):
        super().__init__(message)
        self.piece_id = piece_id
        self.destination = destination


class UnknownPiece(MoveError):
    pass


class NotCurrentPlayersPiece(MoveError):
    pass


class PieceNotSelectable(MoveError):
    """The piece has another piece resting on it."""


class IllegalDestination(MoveError):
    pass


class GameAlreadyOver(MoveError):
    pass


class WrongPieceForForcedQueenRule(MoveError):
    pass


class StaleSelection(MoveError):
    """The selection was computed before the most recent committed move."""


class PassNotAllowed(MoveError):
    pass


class InvariantViolation(RuntimeError):
    """
    Board bookkeeping disagrees with itself. This means move application is
    broken; it is not something a player can cause.
    """
