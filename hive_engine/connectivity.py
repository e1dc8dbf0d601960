from collections import deque


def is_connected(board):
    """
    True when every occupied cell of `board` can be reached from any other
    through occupied neighbours. An empty board counts as connected.
    """
    occupied_cells = board.occupied()
    if not occupied_cells:
        return True

    start = occupied_cells[0]
    reached = {start}
    frontier = deque([start])
    while frontier:
        cell = frontier.popleft()
        for neighbor in cell.neighbors():
            if neighbor in reached or not board.is_occupied(neighbor):
                continue
            reached.add(neighbor)
            frontier.append(neighbor)

    return len(reached) == len(occupied_cells)


def is_cut_vertex(board, coord):
    """Checks if removing the whole stack at coord would split the hive."""
    if not board.is_occupied(coord):
        return False
    return not is_connected(board.without(coord))
