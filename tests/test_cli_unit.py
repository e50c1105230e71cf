import io
import os
import unittest
from contextlib import redirect_stdout
from unittest import mock

from blockade_core import cli
from blockade_core.debug import debug_enabled, trace
from game import BLACK, WHITE, PLACE_WALL, Rejection, new_game


def _step(state, text):
    buf = io.StringIO()
    with redirect_stdout(buf):
        out = cli._human_step(state, text)
    return out, buf.getvalue()


class TestCliUnit(unittest.TestCase):
    def test_given_move_command_when_stepping_then_state_advances(self):
        s = new_game()
        nxt, _ = _step(s, "move 0 3 5")
        self.assertEqual(nxt.black[0], (3, 5))
        self.assertEqual(nxt.phase, PLACE_WALL)
        walled, _ = _step(nxt, "v 2 8")
        self.assertEqual(walled.turn, WHITE)
        self.assertEqual(len(walled.walls), 1)

    def test_given_illegal_command_when_stepping_then_message_and_same_state(self):
        s = new_game()
        nxt, out = _step(s, "move 0 3 4")
        self.assertIs(nxt, s)
        self.assertIn(Rejection.ILLEGAL_DESTINATION.message, out)
        nxt, out = _step(s, "pass")
        self.assertIs(nxt, s)
        self.assertIn(Rejection.MOVE_AVAILABLE.message, out)

    def test_given_informational_commands_when_stepping_then_state_unchanged(self):
        s = new_game()
        nxt, out = _step(s, "moves 0")
        self.assertIs(nxt, s)
        self.assertIn("(3, 5)", out)
        nxt, out = _step(s, "hint")
        self.assertIs(nxt, s)
        self.assertEqual(len(out.strip().splitlines()), 5)
        nxt, out = _step(s, "dance")
        self.assertIn("Unknown command", out)
        self.assertIsNone(_step(s, "quit")[0])

    def test_given_bad_numbers_when_stepping_then_value_error(self):
        s = new_game()
        with self.assertRaises(ValueError):
            cli._human_step(s, "move 0 3")
        with self.assertRaises(ValueError):
            cli._human_step(s, "h x y")

    def test_given_state_when_rendering_then_turn_and_supplies_shown(self):
        text = cli._render(new_game())
        self.assertIn(f"Turn: {BLACK}", text)
        self.assertIn("black walls H:9 V:9", text)

    def test_given_debug_env_when_tracing_then_printed_only_when_enabled(self):
        buf = io.StringIO()
        with mock.patch.dict(os.environ, {"BLOCKADE_DEBUG": "1"}), redirect_stdout(buf):
            self.assertTrue(debug_enabled())
            trace("hello")
        self.assertEqual(buf.getvalue(), "[blockade] hello\n")
        buf = io.StringIO()
        with mock.patch.dict(os.environ, {"BLOCKADE_DEBUG": "0"}), redirect_stdout(buf):
            trace("hidden")
        self.assertEqual(buf.getvalue(), "")


if __name__ == '__main__':
    unittest.main(verbosity=2)
