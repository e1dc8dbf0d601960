def render_text(state):
    """
    Plain-text dump of a game, one line per occupied cell, e.g.
        Cell (0,1): P1A P2B
    Stacks read bottom to top.
    """
    board = state.board()
    lines = [f"Move#: {state.move_number}, Current Player: {state.current_player}"]
    if len(board) == 0:
        lines.append("Board is empty.")
    else:
        for coord, stack in sorted(board.stacks.items()):
            labels = " ".join(state.pieces[piece_id].label() for piece_id in stack)
            lines.append(f"Cell {coord}: {labels}")

    lines.append("Pieces in hand:")
    for player, inventory in state.inventories.items():
        counts = ", ".join(f"{insect}={count}" for insect, count in inventory.pieces.items())
        lines.append(f"  {player}: {counts} (moves played: {inventory.moves_played})")

    if state.result is not None:
        lines.append(f"Result: {state.result}")
    return "\n".join(lines)
