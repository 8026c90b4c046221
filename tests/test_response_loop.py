"""Response loop tests driven by scripted pointer samples.

No display or input device is needed: the sampler replays (position,
button_down, timestamp) tuples and the renderer records every frame.
"""
import os
import sys
import unittest

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
SRC = os.path.join(ROOT, 'src')
if SRC not in sys.path:
    sys.path.insert(0, SRC)

from fakes import FakeTimeSource, RecordingRenderer, ScriptedSampler  # noqa: E402
from models import ConfigurationError, FrameKind, TimingConfig  # noqa: E402
from response_loop import LoopState, ResponseLoop  # noqa: E402
from scale_geometry import ContinuousScaleGeometry, DiscreteScaleGeometry  # noqa: E402

LABELS = ['1', '2', '3', '4', '5']
OPTION_3 = 500.0
GAP = 250.0


def make_loop(samples):
    time_source = FakeTimeSource()
    sampler = ScriptedSampler(samples, time_source=time_source)
    renderer = RecordingRenderer()
    loop = ResponseLoop(sampler, renderer, time_source)
    return loop, sampler, renderer, time_source


class TestDiscreteResponseLoop(unittest.TestCase):
    def setUp(self):
        self.geo = DiscreteScaleGeometry(1000, 800, 5)

    def test_click_before_read_time_is_ignored_then_later_click_accepted(self):
        loop, sampler, renderer, time_source = make_loop([
            (OPTION_3, True, 0.5),
            (OPTION_3, False, 0.8),
            (OPTION_3, True, 1.2),
        ])
        result = loop.run('Q', LABELS, self.geo, TimingConfig(read_time=1.0, warning_time=20.0))
        self.assertTrue(result.answered)
        self.assertEqual(result.value, 3)
        self.assertAlmostEqual(result.reaction_time, 1.2)
        self.assertEqual(sampler.sample_count, 3)
        self.assertEqual(loop.state, LoopState.ANSWERED)
        self.assertEqual(
            renderer.kinds(),
            [FrameKind.RESPONSE] * 3 + [FrameKind.CONFIRM, FrameKind.BLANK],
        )

    def test_early_click_alone_never_answers(self):
        loop, _, renderer, _ = make_loop([
            (OPTION_3, True, 0.5),
            (OPTION_3, True, 0.9),
            (OPTION_3, True, 2.5),
        ])
        result = loop.run('Q', LABELS, self.geo, TimingConfig(read_time=1.0, warning_time=20.0, abort_time=2.0))
        self.assertFalse(result.answered)
        self.assertIsNone(result.value)
        self.assertIsNone(result.reaction_time)
        self.assertEqual(renderer.kinds(), [FrameKind.RESPONSE] * 2 + [FrameKind.BLANK])

    def test_click_in_gap_is_not_an_answer(self):
        loop, _, renderer, _ = make_loop([
            (GAP, True, 2.0),
            (OPTION_3, True, 3.0),
        ])
        result = loop.run('Q', LABELS, self.geo, TimingConfig())
        self.assertEqual(result.value, 3)
        self.assertAlmostEqual(result.reaction_time, 3.0)
        self.assertIsNone(renderer.frames[0].highlight_index)
        self.assertEqual(renderer.frames[1].highlight_index, 3)

    def test_abort_after_abort_time_regardless_of_pointer(self):
        loop, sampler, renderer, _ = make_loop([
            (GAP, False, 0.0),
            (GAP, False, 30.0),
            (GAP, False, 59.9),
            (OPTION_3, True, 60.5),
        ])
        result = loop.run('Q', LABELS, self.geo, TimingConfig(read_time=1.0, warning_time=20.0, abort_time=60.0))
        self.assertFalse(result.answered)
        self.assertIsNone(result.value)
        self.assertIsNone(result.reaction_time)
        self.assertEqual(sampler.sample_count, 4)
        self.assertEqual(loop.state, LoopState.ABORTED)
        self.assertNotIn(FrameKind.CONFIRM, renderer.kinds())
        self.assertEqual(renderer.kinds()[-1], FrameKind.BLANK)

    def test_position_is_clamped_before_rendering(self):
        loop, _, renderer, _ = make_loop([
            (-50.0, False, 0.1),
            (5000.0, False, 0.2),
            (OPTION_3, True, 1.5),
        ])
        loop.run('Q', LABELS, self.geo, TimingConfig())
        self.assertEqual(renderer.frames[0].position, self.geo.left)
        self.assertEqual(renderer.frames[1].position, self.geo.right)

    def test_warning_flag_follows_warning_time_even_when_too_early(self):
        loop, _, renderer, _ = make_loop([
            (GAP, False, 0.3),
            (GAP, False, 0.7),
            (OPTION_3, True, 2.0),
        ])
        style = {'warning_text': 'Please respond'}
        loop.run('Q', LABELS, self.geo, TimingConfig(read_time=1.0, warning_time=0.5), style=style)
        self.assertFalse(renderer.frames[0].warning_active)
        self.assertTrue(renderer.frames[1].warning_active)
        self.assertEqual(renderer.frames[1].warning_text, 'Please respond')

    def test_confirmation_and_blank_frames_are_timed(self):
        loop, sampler, renderer, time_source = make_loop([(OPTION_3, True, 1.5)])
        loop.run('Q', LABELS, self.geo, TimingConfig())
        confirm = renderer.frames[1]
        self.assertEqual(confirm.kind, FrameKind.CONFIRM)
        self.assertEqual(confirm.selected_index, 3)
        self.assertEqual(len(time_source.waits), 2)
        self.assertAlmostEqual(time_source.waits[0], 0.2)
        self.assertAlmostEqual(time_source.waits[1], 0.2)
        self.assertEqual(sampler.sample_count, 1)

    def test_start_position_places_pointer(self):
        loop, sampler, _, _ = make_loop([(OPTION_3, True, 1.5)])
        loop.run('Q', LABELS, self.geo, TimingConfig(), start_position='left')
        self.assertEqual(sampler.placed, [(self.geo.left, 400)])

    def test_label_mismatch_fails_before_sampling(self):
        loop, sampler, renderer, _ = make_loop([(OPTION_3, True, 1.5)])
        with self.assertRaises(ConfigurationError):
            loop.run('Q', LABELS[:4], self.geo, TimingConfig())
        with self.assertRaises(ConfigurationError):
            loop.run('Q', [], self.geo, TimingConfig())
        self.assertEqual(sampler.sample_count, 0)
        self.assertEqual(renderer.frames, [])

    def test_bad_start_position_fails_before_sampling(self):
        loop, sampler, _, _ = make_loop([(OPTION_3, True, 1.5)])
        with self.assertRaises(ConfigurationError):
            loop.run('Q', LABELS, self.geo, TimingConfig(), start_position='middle')
        self.assertEqual(sampler.sample_count, 0)

    def test_renderer_errors_propagate(self):
        class BrokenRenderer:
            def render(self, frame):
                raise RuntimeError('display lost')

        time_source = FakeTimeSource()
        sampler = ScriptedSampler([(OPTION_3, False, 0.1)], time_source=time_source)
        loop = ResponseLoop(sampler, BrokenRenderer(), time_source)
        with self.assertRaises(RuntimeError):
            loop.run('Q', LABELS, self.geo, TimingConfig())


class TestContinuousResponseLoop(unittest.TestCase):
    def setUp(self):
        self.geo = ContinuousScaleGeometry(1000, 800)

    def test_click_anywhere_after_read_time_answers_with_percentage(self):
        loop, _, renderer, _ = make_loop([
            (300.0, True, 0.4),
            (700.0, True, 2.0),
        ])
        result = loop.run('Q', ['disagree', 'agree'], self.geo, TimingConfig.slider_defaults())
        self.assertTrue(result.answered)
        self.assertAlmostEqual(result.value, 50.0)
        self.assertAlmostEqual(result.reaction_time, 2.0)
        self.assertIsNone(renderer.frames[0].highlight_index)
        self.assertEqual(renderer.kinds()[-2:], [FrameKind.CONFIRM, FrameKind.BLANK])

    def test_value_uses_clamped_position(self):
        loop, _, _, _ = make_loop([(5000.0, True, 2.0)])
        result = loop.run('Q', ['a', 'b'], self.geo, TimingConfig.slider_defaults())
        self.assertAlmostEqual(result.value, 100.0)

    def test_abort_at_sixty_seconds(self):
        loop, _, _, _ = make_loop([(500.0, False, 0.0), (500.0, False, 30.0), (500.0, True, 60.2)])
        result = loop.run('Q', ['a', 'b'], self.geo, TimingConfig.slider_defaults())
        self.assertFalse(result.answered)

    def test_requires_two_labels(self):
        loop, _, _, _ = make_loop([])
        with self.assertRaises(ConfigurationError):
            loop.run('Q', ['only one'], self.geo, TimingConfig())


if __name__ == '__main__':
    unittest.main()
