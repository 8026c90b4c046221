import os
import sys
import unittest

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
SRC = os.path.join(ROOT, 'src')
if SRC not in sys.path:
    sys.path.insert(0, SRC)

from models import TimingConfig  # noqa: E402
from timing_gate import GateState, evaluate_gate  # noqa: E402


class TestTimingGate(unittest.TestCase):
    def setUp(self):
        self.timing = TimingConfig(read_time=1.0, warning_time=20.0, abort_time=60.0)

    def test_never_accepts_up_to_read_time(self):
        for elapsed in (0.0, 0.25, 0.999, 1.0):
            decision = evaluate_gate(elapsed, self.timing)
            self.assertFalse(decision.accepts, elapsed)
            self.assertEqual(decision.state, GateState.TOO_EARLY)

    def test_normal_after_read_time(self):
        decision = evaluate_gate(1.0001, self.timing)
        self.assertTrue(decision.accepts)
        self.assertEqual(decision.state, GateState.NORMAL)

    def test_warn_does_not_block_acceptance(self):
        decision = evaluate_gate(20.5, self.timing)
        self.assertEqual(decision.state, GateState.WARN)
        self.assertTrue(decision.warn)
        self.assertTrue(decision.accepts)

    def test_abort_wins_over_everything(self):
        timing = TimingConfig(read_time=100.0, warning_time=0.0, abort_time=60.0)
        decision = evaluate_gate(61.0, timing)
        self.assertEqual(decision.state, GateState.ABORTED)
        self.assertFalse(decision.accepts)

    def test_abort_is_strictly_after_abort_time(self):
        self.assertFalse(evaluate_gate(60.0, self.timing).aborted)
        self.assertTrue(evaluate_gate(60.01, self.timing).aborted)

    def test_no_abort_time_never_aborts(self):
        timing = TimingConfig(read_time=1.0, warning_time=20.0, abort_time=None)
        self.assertFalse(evaluate_gate(10_000.0, timing).aborted)

    def test_too_early_keeps_warning_flag(self):
        timing = TimingConfig(read_time=5.0, warning_time=2.0)
        decision = evaluate_gate(3.0, timing)
        self.assertEqual(decision.state, GateState.TOO_EARLY)
        self.assertTrue(decision.warn)

    def test_warning_after_abort_never_warns_before_abort(self):
        timing = TimingConfig(read_time=1.0, warning_time=90.0, abort_time=60.0)
        self.assertFalse(evaluate_gate(59.0, timing).warn)
        self.assertTrue(evaluate_gate(61.0, timing).aborted)


if __name__ == '__main__':
    unittest.main()
