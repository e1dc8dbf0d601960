import unittest

from hive_engine.board import Board
from hive_engine.game_state import legal_destinations, state_from_layout
from hive_engine.hex_coordinate import HexCoordinate, hex_distance
from hive_engine.move_generator import MoveGenerator
from hive_engine.pieces import (
    ANT,
    BEETLE,
    GRASSHOPPER,
    PLAYER1,
    PLAYER2,
    QUEEN,
    SPIDER,
)


def H(x, y):
    return HexCoordinate(x, y)


def piece_id_at(state, coord):
    return state.board().top_at(coord).piece_id


class TestInsectMoves(unittest.TestCase):
    """Relocations on small hand-built positions. Player1 is always to move."""

    def around_one_piece(self, insect_type):
        state = state_from_layout({
            (0, 0): [(PLAYER1, insect_type)],
            (1, 0): [(PLAYER2, QUEEN)],
        })
        return state, legal_destinations(state, piece_id_at(state, H(0, 0)))

    def test_queen_slides_one_step(self):
        _, destinations = self.around_one_piece(QUEEN)
        self.assertEqual(destinations, {H(0, 1), H(1, -1)})

    def test_ant_walks_the_whole_perimeter(self):
        _, destinations = self.around_one_piece(ANT)
        self.assertEqual(destinations, {H(0, 1), H(1, 1), H(2, 0), H(2, -1), H(1, -1)})
        self.assertNotIn(H(0, 0), destinations)
        self.assertNotIn(H(1, 0), destinations)

    def test_spider_takes_exactly_three_steps(self):
        _, destinations = self.around_one_piece(SPIDER)
        self.assertEqual(destinations, {H(2, 0)})

    def test_spider_stops_when_a_round_finds_nothing_new(self):
        # From the two first-step cells every further slide is gated or
        # leads back, so the spider keeps its one-step cells.
        cells = [H(-2, 0), H(-2, 1), H(-2, 2), H(0, -1), H(0, 1), H(1, -1)]
        board = Board({cell: (i,) for i, cell in enumerate(cells)}, {})
        destinations = MoveGenerator.get_spider_destinations(board, H(0, 0))
        self.assertEqual(destinations, {H(-1, 0), H(-1, 1)})

    def test_ground_beetle_alone_has_no_moves(self):
        state = state_from_layout({(0, 0): [(PLAYER1, BEETLE)]})
        self.assertEqual(legal_destinations(state, piece_id_at(state, H(0, 0))), set())

    def test_ground_beetle_only_climbs(self):
        state = state_from_layout({
            (0, 0): [(PLAYER1, BEETLE)],
            (1, 0): [(PLAYER2, QUEEN)],
            (1, -1): [(PLAYER1, QUEEN)],
        })
        destinations = legal_destinations(state, piece_id_at(state, H(0, 0)))
        self.assertEqual(destinations, {H(1, 0), H(1, -1)})

    def test_beetle_on_a_stack_can_go_anywhere_adjacent(self):
        state = state_from_layout({
            (0, 0): [(PLAYER2, QUEEN), (PLAYER1, BEETLE)],
            (1, 0): [(PLAYER1, QUEEN)],
        })
        destinations = legal_destinations(state, piece_id_at(state, H(0, 0)))
        self.assertEqual(destinations, set(H(0, 0).neighbors()))
        self.assertIn(H(-1, 0), destinations)
        self.assertIn(H(1, 0), destinations)

    def test_grasshopper_jumps_over_a_row(self):
        state = state_from_layout({
            (0, 0): [(PLAYER1, GRASSHOPPER)],
            (1, 0): [(PLAYER2, QUEEN)],
            (2, 0): [(PLAYER1, QUEEN)],
        })
        destinations = legal_destinations(state, piece_id_at(state, H(0, 0)))
        self.assertEqual(destinations, {H(3, 0)})

    def test_grasshopper_never_lands_next_to_its_origin(self):
        state = state_from_layout({
            (0, 0): [(PLAYER1, GRASSHOPPER)],
            (1, 0): [(PLAYER2, QUEEN)],
            (0, 1): [(PLAYER1, QUEEN)],
            (0, 2): [(PLAYER1, ANT)],
            (-1, 1): [(PLAYER2, ANT)],
            (1, -1): [(PLAYER2, SPIDER)],
        })
        board = state.board()
        origin = H(0, 0)
        destinations = legal_destinations(state, piece_id_at(state, origin))
        self.assertEqual(destinations, {H(2, 0), H(0, 3), H(-2, 2), H(2, -2)})
        for destination in destinations:
            self.assertGreaterEqual(hex_distance(origin, destination), 2)
            self.assertFalse(board.is_occupied(destination))


class TestOneHiveRule(unittest.TestCase):

    def test_piece_holding_the_hive_together_is_pinned(self):
        state = state_from_layout({
            (-1, 0): [(PLAYER1, QUEEN)],
            (0, 0): [(PLAYER1, ANT)],
            (1, 0): [(PLAYER2, QUEEN)],
        })
        self.assertEqual(legal_destinations(state, piece_id_at(state, H(0, 0))), set())

    def test_end_of_the_line_can_move(self):
        state = state_from_layout({
            (-1, 0): [(PLAYER1, ANT)],
            (0, 0): [(PLAYER1, QUEEN)],
            (1, 0): [(PLAYER2, QUEEN)],
        })
        self.assertTrue(legal_destinations(state, piece_id_at(state, H(-1, 0))))

    def test_beetle_on_top_of_a_cut_vertex_is_not_pinned(self):
        state = state_from_layout({
            (-1, 0): [(PLAYER1, QUEEN)],
            (0, 0): [(PLAYER2, ANT), (PLAYER1, BEETLE)],
            (1, 0): [(PLAYER2, QUEEN)],
        })
        destinations = legal_destinations(state, piece_id_at(state, H(0, 0)))
        self.assertEqual(len(destinations), 6)

    def test_covered_piece_has_no_moves(self):
        state = state_from_layout({
            (0, 0): [(PLAYER1, QUEEN), (PLAYER2, BEETLE)],
            (1, 0): [(PLAYER1, ANT)],
        })
        covered = state.board().stack_at(H(0, 0))[0]
        self.assertEqual(legal_destinations(state, covered), set())


class TestAntContainsQueen(unittest.TestCase):

    def test_ant_reach_is_a_superset_of_queen_reach(self):
        layout = {
            (0, 0): [(PLAYER1, ANT)],
            (1, 0): [(PLAYER2, QUEEN)],
            (2, 0): [(PLAYER2, ANT)],
            (2, -1): [(PLAYER2, SPIDER)],
            (0, 1): [(PLAYER1, QUEEN)],
            (-1, 2): [(PLAYER1, SPIDER)],
        }
        origin = H(0, 0)
        board = state_from_layout(layout).board()
        reduced = board.without(origin)
        queen = MoveGenerator.get_queen_destinations(reduced, origin)
        ant = MoveGenerator.get_ant_destinations(reduced, origin)
        self.assertTrue(queen)
        self.assertTrue(queen <= ant)


class TestPlacement(unittest.TestCase):

    def test_first_piece_goes_to_the_origin(self):
        state = state_from_layout({})
        board = state.board()
        self.assertEqual(MoveGenerator.get_placement_cells(board, PLAYER1, True), {H(0, 0)})

    def test_first_placement_may_touch_the_opponent(self):
        state = state_from_layout({(0, 0): [(PLAYER1, ANT)]}, current_player=PLAYER2)
        cells = MoveGenerator.new_piece_cells(state, state.board(), ANT)
        self.assertEqual(cells, set(H(0, 0).neighbors()))

    def test_later_placements_avoid_the_opponent(self):
        state = state_from_layout({
            (0, 0): [(PLAYER1, ANT)],
            (1, 0): [(PLAYER2, ANT)],
        })
        cells = MoveGenerator.new_piece_cells(state, state.board(), SPIDER)
        self.assertEqual(cells, {H(0, -1), H(-1, 0), H(-1, 1)})

    def test_only_the_visible_piece_counts_for_contact(self):
        # Player2's Ant is buried under Player1's Beetle, so it does not repel.
        state = state_from_layout({
            (0, 0): [(PLAYER1, QUEEN)],
            (1, 0): [(PLAYER2, ANT), (PLAYER1, BEETLE)],
            (3, 0): [(PLAYER2, QUEEN)],
            (2, 0): [(PLAYER2, SPIDER)],
        })
        cells = MoveGenerator.new_piece_cells(state, state.board(), ANT)
        self.assertIn(H(0, 1), cells)
        self.assertNotIn(H(1, 1), cells)

    def test_nothing_left_in_hand(self):
        state = state_from_layout({(0, 0): [(PLAYER1, QUEEN)], (1, 0): [(PLAYER2, QUEEN)]})
        self.assertEqual(MoveGenerator.new_piece_cells(state, state.board(), QUEEN), set())


if __name__ == "__main__":
    unittest.main()
