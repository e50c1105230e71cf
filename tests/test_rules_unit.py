import unittest

from game import (
    BLACK,
    WHITE,
    HORIZONTAL,
    VERTICAL,
    FINISHED,
    PLACE_WALL,
    SELECT,
    STANDARD,
    LARGE,
    GameState,
    Rejection,
    Wall,
    WallInventory,
    commit_move,
    commit_wall,
    new_game,
    pass_turn,
    skip_wall,
)


def _mk_state(black, white, walls=(), turn=BLACK, phase=SELECT, black_inv=(9, 9), white_inv=(9, 9)):
    return GameState(
        board=STANDARD,
        black=tuple(black),
        white=tuple(white),
        walls=tuple(walls),
        black_inventory=WallInventory(*black_inv),
        white_inventory=WallInventory(*white_inv),
        turn=turn,
        phase=phase,
    )


class TestRulesUnit(unittest.TestCase):
    def test_given_presets_when_new_game_then_black_to_move_with_full_supply(self):
        s = new_game()
        self.assertIs(s.board, STANDARD)
        self.assertEqual((s.turn, s.phase, s.winner), (BLACK, SELECT, None))
        self.assertEqual(s.black, STANDARD.black_starts)
        self.assertEqual(s.white, STANDARD.white_starts)
        self.assertEqual(s.walls, ())
        self.assertEqual(s.black_inventory, WallInventory(9, 9))
        self.assertEqual(s.white_inventory.total, 18)
        self.assertIs(new_game('large').board, LARGE)
        with self.assertRaises(ValueError):
            new_game('huge')

    def test_given_legal_move_when_committing_then_same_player_places_wall(self):
        s = new_game()
        res = commit_move(s, BLACK, 0, (3, 5))
        self.assertTrue(res.ok)
        self.assertEqual(res.state.black, ((3, 5), (7, 3)))
        self.assertEqual((res.state.turn, res.state.phase), (BLACK, PLACE_WALL))
        # input snapshot untouched
        self.assertEqual(s.black, ((3, 3), (7, 3)))
        self.assertEqual(s.phase, SELECT)

    def test_given_list_destination_when_committing_then_coerced(self):
        res = commit_move(new_game(), BLACK, 1, [7, 5])
        self.assertTrue(res.ok)
        self.assertEqual(res.state.black[1], (7, 5))

    def test_given_wrong_player_or_phase_when_committing_then_state_returned_unchanged(self):
        s = new_game()
        res = commit_move(s, WHITE, 0, (3, 8))
        self.assertFalse(res.ok)
        self.assertEqual(res.reason, Rejection.WRONG_PHASE_OR_TURN)
        self.assertIs(res.state, s)
        res = commit_wall(s, BLACK, HORIZONTAL, (5, 5))
        self.assertEqual(res.reason, Rejection.WRONG_PHASE_OR_TURN)
        self.assertIs(res.state, s)
        moved = commit_move(s, BLACK, 0, (3, 5)).state
        res = commit_move(moved, BLACK, 1, (7, 5))
        self.assertEqual(res.reason, Rejection.WRONG_PHASE_OR_TURN)

    def test_given_unreachable_square_when_committing_then_illegal_destination(self):
        s = new_game()
        for dest in [(3, 4), (3, 6), (3, 3), (7, 3), (20, 20)]:
            res = commit_move(s, BLACK, 0, dest)
            self.assertEqual(res.reason, Rejection.ILLEGAL_DESTINATION, msg=str(dest))
            self.assertIs(res.state, s)

    def test_given_wall_phase_when_committing_wall_then_supply_spent_and_turn_passes(self):
        s = commit_move(new_game(), BLACK, 0, (3, 5)).state
        res = commit_wall(s, BLACK, VERTICAL, [2, 7])
        self.assertTrue(res.ok)
        after = res.state
        self.assertEqual(after.walls, (Wall(VERTICAL, 2, 7, BLACK),))
        self.assertEqual(after.black_inventory, WallInventory(9, 8))
        self.assertEqual(after.white_inventory, WallInventory(9, 9))
        self.assertEqual((after.turn, after.phase), (WHITE, SELECT))

    def test_given_illegal_wall_when_committing_then_reason_and_same_state(self):
        s = _mk_state([(3, 3), (7, 3)], [(3, 10), (7, 10)], [Wall(HORIZONTAL, 5, 3, WHITE)], phase=PLACE_WALL)
        res = commit_wall(s, BLACK, VERTICAL, (4, 4))
        self.assertEqual(res.reason, Rejection.WALL_CROSSES_EXISTING)
        self.assertIs(res.state, s)
        res = commit_wall(s, BLACK, HORIZONTAL, (0, 4))
        self.assertEqual(res.reason, Rejection.OUT_OF_BOUNDS)
        empty = _mk_state([(3, 3), (7, 3)], [(3, 10), (7, 10)], phase=PLACE_WALL, black_inv=(0, 3))
        self.assertEqual(commit_wall(empty, BLACK, HORIZONTAL, (5, 5)).reason, Rejection.NO_WALLS_LEFT)

    def test_given_no_walls_left_when_moving_then_turn_passes_straight_away(self):
        s = _mk_state([(3, 3), (7, 3)], [(3, 10), (7, 10)], black_inv=(0, 0))
        res = commit_move(s, BLACK, 0, (3, 5))
        self.assertTrue(res.ok)
        self.assertEqual((res.state.turn, res.state.phase), (WHITE, SELECT))

    def test_given_goal_in_reach_when_moving_then_game_finishes(self):
        s = _mk_state([(3, 8), (7, 3)], [(5, 10), (8, 10)])
        res = commit_move(s, BLACK, 0, (3, 10))
        self.assertTrue(res.ok)
        done = res.state
        self.assertEqual(done.phase, FINISHED)
        self.assertEqual(done.winner, BLACK)
        self.assertTrue(done.is_finished())
        for attempt in (
            commit_move(done, WHITE, 0, (5, 8)),
            commit_move(done, BLACK, 1, (7, 5)),
            commit_wall(done, BLACK, HORIZONTAL, (5, 5)),
            pass_turn(done, WHITE),
            skip_wall(done, BLACK),
        ):
            self.assertEqual(attempt.reason, Rejection.GAME_ALREADY_FINISHED)
            self.assertIs(attempt.state, done)

    def test_given_win_with_empty_supply_when_moving_then_still_finished(self):
        s = _mk_state([(3, 8), (7, 3)], [(5, 10), (8, 10)], black_inv=(0, 0))
        done = commit_move(s, BLACK, 0, (3, 10)).state
        self.assertEqual((done.phase, done.winner), (FINISHED, BLACK))

    def test_given_boxed_in_tokens_when_passing_then_turn_goes_to_opponent(self):
        walls = [Wall(VERTICAL, 0, 1, WHITE), Wall(HORIZONTAL, 2, 0, WHITE)]
        s = _mk_state([(0, 0), (1, 0)], [(3, 10), (7, 10)], walls)
        res = pass_turn(s, BLACK)
        self.assertTrue(res.ok)
        self.assertEqual((res.state.turn, res.state.phase), (WHITE, SELECT))
        self.assertEqual(res.state.black, s.black)

    def test_given_move_available_when_passing_then_refused(self):
        s = new_game()
        res = pass_turn(s, BLACK)
        self.assertEqual(res.reason, Rejection.MOVE_AVAILABLE)
        self.assertIs(res.state, s)
        self.assertEqual(pass_turn(s, WHITE).reason, Rejection.WRONG_PHASE_OR_TURN)

    def test_given_wall_phase_when_skipping_then_only_without_legal_wall(self):
        s = commit_move(new_game(), BLACK, 0, (3, 5)).state
        self.assertEqual(skip_wall(s, BLACK).reason, Rejection.WALL_AVAILABLE)
        self.assertEqual(skip_wall(new_game(), BLACK).reason, Rejection.WRONG_PHASE_OR_TURN)
        stuck = _mk_state([(3, 5), (7, 3)], [(3, 10), (7, 10)], phase=PLACE_WALL, black_inv=(0, 0))
        res = skip_wall(stuck, BLACK)
        self.assertTrue(res.ok)
        self.assertEqual((res.state.turn, res.state.phase), (WHITE, SELECT))

    def test_given_contract_violations_when_committing_then_value_error(self):
        s = new_game()
        with self.assertRaises(ValueError):
            commit_move(s, 'red', 0, (3, 5))
        with self.assertRaises(ValueError):
            commit_move(s, BLACK, 2, (3, 5))
        with self.assertRaises(ValueError):
            commit_move(s, BLACK, 0, 'nowhere')
        with self.assertRaises(ValueError):
            commit_wall(s, BLACK, 'diagonal', (5, 5))
        with self.assertRaises(ValueError):
            pass_turn(s, 'red')
        with self.assertRaises(ValueError):
            skip_wall(s, 'red')

    def test_given_full_turn_cycle_when_playing_then_players_alternate(self):
        s = new_game()
        s = commit_move(s, BLACK, 0, (3, 5)).state
        s = commit_wall(s, BLACK, HORIZONTAL, (6, 8)).state
        self.assertEqual(s.turn, WHITE)
        s = commit_move(s, WHITE, 1, (7, 8)).state
        self.assertEqual((s.turn, s.phase), (WHITE, PLACE_WALL))
        s = commit_wall(s, WHITE, VERTICAL, (2, 5)).state
        self.assertEqual((s.turn, s.phase), (BLACK, SELECT))
        self.assertEqual(len(s.walls), 2)
        self.assertEqual(s.black_inventory, WallInventory(8, 9))
        self.assertEqual(s.white_inventory, WallInventory(9, 8))


if __name__ == '__main__':
    unittest.main(verbosity=2)
