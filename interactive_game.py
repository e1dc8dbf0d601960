import argparse
import logging
import math

import pygame

from hive_engine.config import LOG_DATE_FORMAT, LOG_FORMAT
from hive_engine.errors import MoveError
from hive_engine.game_state import (
    confirm_selection,
    current_result,
    has_legal_move,
    new_game,
    pass_turn,
    select_piece,
)
from hive_engine.hex_coordinate import HexCoordinate
from hive_engine.pieces import ANT, BEETLE, GRASSHOPPER, PLAYER1, QUEEN, SPIDER
from hive_engine.text_view import render_text

logger = logging.getLogger(__name__)

# ---------------------- Hex Grid Helpers -------------------------
HEX_SIZE = 40      # Radius of each hexagon.
OFFSET_X = 400     # Initial X offset so the grid is centered.
OFFSET_Y = 300     # Initial Y offset so the grid is centered.

KEY_TO_INSECT = {"Q": QUEEN, "A": ANT, "S": SPIDER, "B": BEETLE, "G": GRASSHOPPER}


def hex_to_pixel(coord, hex_size=HEX_SIZE, offset=(OFFSET_X, OFFSET_Y)):
    """Pointy-top layout; positive y points up the screen."""
    x = hex_size * math.sqrt(3) * (coord.x + coord.y / 2)
    y = -hex_size * (3 / 2) * coord.y
    return (int(round(x + offset[0])), int(round(y + offset[1])))


def pixel_to_hex(pos, hex_size=HEX_SIZE, offset=(OFFSET_X, OFFSET_Y)):
    px = pos[0] - offset[0]
    py = pos[1] - offset[1]
    q = (math.sqrt(3) / 3 * px + 1 / 3 * py) / hex_size
    r = (-2 / 3 * py) / hex_size

    cube_x = q
    cube_z = r
    cube_y = -cube_x - cube_z

    rx = round(cube_x)
    ry = round(cube_y)
    rz = round(cube_z)

    x_diff = abs(rx - cube_x)
    y_diff = abs(ry - cube_y)
    z_diff = abs(rz - cube_z)

    if x_diff > y_diff and x_diff > z_diff:
        rx = -ry - rz
    elif y_diff > z_diff:
        ry = -rx - rz
    else:
        rz = -rx - ry

    return HexCoordinate(int(rx), int(rz))


def polygon_corners(center, size):
    cx, cy = center
    corners = []
    for i in range(6):
        angle_deg = 60 * i - 30
        angle_rad = math.radians(angle_deg)
        corners.append((cx + size * math.cos(angle_rad), cy + size * math.sin(angle_rad)))
    return corners


# ---------------------- Board Drawing -------------------------
def draw_hive_board(state, surface, hex_size, offset, highlights=(), status=None):
    surface.fill((255, 255, 255))
    board = state.board()
    font = pygame.font.SysFont(None, 24)

    cells = board.occupied() or [HexCoordinate.origin()]
    xs = [c.x for c in cells]
    ys = [c.y for c in cells]
    for x in range(min(xs) - 2, max(xs) + 3):
        for y in range(min(ys) - 2, max(ys) + 3):
            coord = HexCoordinate(x, y)
            center = hex_to_pixel(coord, hex_size, offset)
            corners = polygon_corners(center, hex_size)
            pygame.draw.polygon(surface, (200, 200, 200), corners, 1)

            top = board.top_at(coord)
            if top is None:
                continue
            color = (0, 0, 255) if top.player == PLAYER1 else (255, 0, 0)
            pygame.draw.polygon(surface, color, corners, 0)
            height = len(board.stack_at(coord))
            label = top.insect_type[0] if height == 1 else f"{top.insect_type[0]}{height}"
            text = font.render(label, True, (255, 255, 255))
            surface.blit(text, text.get_rect(center=center))

    for coord in highlights:
        pygame.draw.circle(surface, (255, 255, 0), hex_to_pixel(coord, hex_size, offset),
                           hex_size // 2, 3)

    if status:
        surface.blit(font.render(status, True, (0, 0, 0)), (10, 10))


# ---------------------- Intent Handling -------------------------
def piece_for_key(state, key):
    """First in-hand piece of the player to move matching a Q/A/S/B/G key."""
    insect_type = KEY_TO_INSECT.get(key)
    if insect_type is None:
        return None
    for piece in state.pieces_in_hand(state.current_player):
        if piece.insect_type == insect_type:
            return piece.piece_id
    return None


def piece_at(state, coord):
    top = state.board().top_at(coord)
    return top.piece_id if top is not None else None


def try_select(state, piece_id):
    if piece_id is None:
        return None
    try:
        selection = select_piece(state, piece_id)
    except MoveError as e:
        logger.warning("Cannot select piece %s: %s", piece_id, e)
        return None
    if not selection.destinations:
        logger.warning("Piece %s has no legal destinations.", piece_id)
        return None
    return selection


# ---------------------- Main Game Loop -------------------------
def skip_stuck_turns(state):
    """
    Pass the turn of a player with nothing to play. Returns the new state
    and whether the opponent is stuck as well.
    """
    if current_result(state) is not None or has_legal_move(state):
        return state, False
    state = pass_turn(state)
    stalled = not has_legal_move(state)
    if stalled:
        logger.warning("Neither player has a legal move.")
    return state, stalled


def status_text(state, stalled=False):
    result = current_result(state)
    if result is not None:
        return "Draw" if result.is_draw else f"{result.winner} wins"
    if stalled:
        return "No moves left for either player"
    return f"{state.current_player} to move"


def play_hot_seat(hex_size):
    pygame.init()
    screen = pygame.display.set_mode((800, 600), pygame.RESIZABLE | pygame.DOUBLEBUF)
    pygame.display.set_caption("Hive (hot seat)")
    offset = (screen.get_width() // 2, screen.get_height() // 2)

    state, stalled = skip_stuck_turns(new_game())
    selection = None
    clock = pygame.time.Clock()
    running = True

    while running:
        game_over = stalled or current_result(state) is not None
        highlights = selection.destinations if selection is not None else ()
        draw_hive_board(state, screen, hex_size, offset, highlights, status_text(state, stalled))
        pygame.display.flip()

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
                break
            elif event.type == pygame.VIDEORESIZE:
                screen = pygame.display.set_mode((event.w, event.h), pygame.RESIZABLE | pygame.DOUBLEBUF)
                offset = (event.w // 2, event.h // 2)
            elif game_over:
                continue
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    selection = None
                    continue
                key = pygame.key.name(event.key).upper()
                selection = try_select(state, piece_for_key(state, key))
            elif event.type == pygame.MOUSEBUTTONDOWN:
                clicked = pixel_to_hex(event.pos, hex_size, offset)
                if selection is None:
                    selection = try_select(state, piece_at(state, clicked))
                    continue
                try:
                    state = confirm_selection(state, selection, clicked)
                    logger.debug("\n%s", render_text(state))
                except MoveError as e:
                    logger.warning("Move rejected: %s", e)
                else:
                    state, stalled = skip_stuck_turns(state)
                    if current_result(state) is not None:
                        logger.info("Game over. Outcome: %s", current_result(state))
                selection = None

        clock.tick(30)

    pygame.quit()


def parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Two-player Hive on one screen.")
    p.add_argument("--hex-size", type=int, default=HEX_SIZE)
    p.add_argument("--log-level", default="INFO",
                   choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return p


def main(argv=None):
    args = parser().parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level),
                        format=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
    play_hot_seat(args.hex_size)


if __name__ == "__main__":
    main()
