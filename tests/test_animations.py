import math
import threading
import time
import unittest

from rich.style import Style

from clog.color import color_stop
from clog.exceptions import AnimationCancelledError, AnimationTimeoutError
from clog.fields import Field
from clog.levels import Level
from clog.logger import Logger
from clog.output import ColorMode, Output
from clog.progress.animations import (
    BarAnimation,
    Direction,
    PulseAnimation,
    ShimmerAnimation,
    SpinnerAnimation,
    SpinnerType,
    pulse_phase,
    pulse_text,
    shimmer_text,
)
from clog.progress.animations.shimmer import LUT_SIZE, build_lut, char_index
from clog.progress.animations.spinner import LINE, MOON
from clog.progress.bar import BAR_BASIC, BarAlign
from clog.progress.config import ProgressConfig, set_config, update_config
from clog.progress.result import TaskResult


def tagged(text, style):
    return f"<{text}>" if style is not None else text


class TestSpinner(unittest.TestCase):
    def test_frames_follow_elapsed_time(self) -> None:
        self.assertEqual(LINE.frame_at(0.0), "|")
        self.assertEqual(LINE.frame_at(0.15), "/")
        self.assertEqual(LINE.frame_at(0.45), "|")

    def test_reverse(self) -> None:
        rev = LINE.reversed()
        self.assertTrue(rev.reverse)
        self.assertEqual(rev.frame_at(0.0), "\\")

    def test_default_is_moon(self) -> None:
        self.assertIs(SpinnerAnimation().spinner_type, MOON)
        self.assertEqual(SpinnerAnimation().icon("⏳", 0.0), "🌔")

    def test_non_positive_interval_uses_default(self) -> None:
        spinner = SpinnerAnimation(SpinnerType(("a", "b"), 0))
        self.assertEqual(spinner.tick_rate, MOON.interval)


class TestPulse(unittest.TestCase):
    def test_phase_starts_at_zero(self) -> None:
        self.assertAlmostEqual(pulse_phase(0.0, 0.5), 0.0)
        self.assertAlmostEqual(pulse_phase(1.0, 0.5), 1.0)

    def test_whitespace_left_bare(self) -> None:
        stops = [color_stop(0, (255, 0, 0))]
        self.assertEqual(pulse_text("hello big  world", 0.3, stops, tagged), "<hello> <big>  <world>")

    def test_empty_text(self) -> None:
        self.assertEqual(pulse_text("", 0.5, [], tagged), "")


class TestShimmer(unittest.TestCase):
    def test_lut_size(self) -> None:
        self.assertEqual(len(build_lut([color_stop(0, (0, 0, 0))])), LUT_SIZE)

    def test_index_in_range(self) -> None:
        for direction in Direction:
            for i in range(10):
                with self.subTest(direction=direction, i=i):
                    self.assertTrue(0 <= char_index(i, 10, 0.7, direction) < LUT_SIZE)

    def test_directions_differ(self) -> None:
        self.assertNotEqual(
            char_index(2, 10, 0.25, Direction.RIGHT),
            char_index(2, 10, 0.25, Direction.LEFT),
        )

    def test_whitespace_unstyled(self) -> None:
        lut = [Style(bold=True)] * LUT_SIZE
        out = shimmer_text("ab cd", 0.0, Direction.RIGHT, lut, tagged)
        self.assertIn(" ", out)
        self.assertNotIn("< >", out)
        self.assertEqual(out.replace("<", "").replace(">", ""), "ab cd")


class TestBarAnimation(unittest.TestCase):
    def test_percent_field_for_inline_bars(self) -> None:
        bar = BarAnimation(200, BAR_BASIC.with_(align=BarAlign.INLINE))
        bar.state.progress.store(50)
        self.assertEqual(bar.extra_fields(), [Field("progress", 25.0)])

    def test_no_field_when_percent_beside_bar(self) -> None:
        self.assertEqual(BarAnimation(10).extra_fields(), [])

    def test_hidden_percent(self) -> None:
        style = BAR_BASIC.with_(align=BarAlign.INLINE, hide_percent=True)
        self.assertEqual(BarAnimation(10, style).extra_fields(), [])


class AnimationTestCase(unittest.TestCase):
    def setUp(self) -> None:
        set_config(ProgressConfig(bar_tick_rate=0.01, pulse_tick_rate=0.01, shimmer_tick_rate=0.01))
        self.out = Output.buffer()
        self.log = Logger(self.out)

    def tearDown(self) -> None:
        set_config(ProgressConfig())

    def lines(self):
        return self.out.getvalue().splitlines()


class TestWait(AnimationTestCase):
    def test_static_line_then_success(self) -> None:
        err = self.log.spinner("Working").wait(lambda: None).msg("Done")
        self.assertIsNone(err)
        self.assertEqual(self.lines(), ["INF ⏳ Working", "INF ℹ️ Done"])

    def test_default_success_message_is_last_message(self) -> None:
        def task(update):
            update.msg("Almost").send()

        self.log.pulse("Working").progress(task).send()
        self.assertEqual(self.lines()[-1], "INF ℹ️ Almost")

    def test_error_result(self) -> None:
        def fail():
            raise ValueError("disk full")

        err = self.log.spinner("Copying").wait(fail).send()
        self.assertIsInstance(err, ValueError)
        self.assertEqual(self.lines()[-1], "ERR ❌ disk full")

    def test_custom_error_message_adds_field(self) -> None:
        def fail():
            raise ValueError("disk full")

        self.log.spinner("Copying").wait(fail).on_error_message("Copy failed").send()
        self.assertEqual(self.lines()[-1], 'ERR ❌ Copy failed error="disk full"')

    def test_level_and_prefix_overrides(self) -> None:
        self.log.spinner("x").wait(lambda: None).on_success_level(Level.WARN).prefix("✅").msg("ok")
        self.assertEqual(self.lines()[-1], "WRN ✅ ok")

    def test_silent_logs_nothing_extra(self) -> None:
        err = self.log.spinner("Quiet").wait(lambda: None).silent()
        self.assertIsNone(err)
        self.assertEqual(self.lines(), ["INF ⏳ Quiet"])

    def test_builder_fields_in_final_entry(self) -> None:
        self.log.with_(job=7).spinner("Run").field("step", "a").wait(lambda: None).with_fields(n=1).msg("Ran")
        self.assertEqual(self.lines()[-1], "INF ℹ️ Ran job=7 step=a n=1")

    def test_elapsed_field(self) -> None:
        self.log.spinner("Timed").elapsed().wait(lambda: time.sleep(0.05)).msg("Timed")
        self.assertRegex(self.lines()[-1], r"^INF ℹ️ Timed elapsed=\d+ms$")

    def test_bar_progress_final_fields(self) -> None:
        style = BAR_BASIC.with_(align=BarAlign.INLINE, width=10)

        def task(update):
            update.set_total(4)
            for _ in range(4):
                update.increment()

        err = self.log.bar("Copying", 100).style(style).progress(task).msg("Copied")
        self.assertIsNone(err)
        self.assertEqual(self.lines()[-1], "INF ℹ️ Copied progress=100%")

    def test_style_rejected_for_spinner(self) -> None:
        with self.assertRaises(TypeError):
            self.log.spinner("x").style(BAR_BASIC)

    def test_speed_rejected_for_bar(self) -> None:
        with self.assertRaises(TypeError):
            self.log.bar("x", 10).speed(2.0)

    def test_disabled_level_runs_task_without_output(self) -> None:
        ran = []
        self.log.spinner("hidden").at_level(Level.DEBUG).wait(lambda: ran.append(1)).silent()
        self.assertEqual(ran, [1])
        self.assertEqual(self.out.getvalue(), "")

    def test_result_base_requires_error(self) -> None:
        with self.assertRaises(TypeError):
            TaskResult(self.log)

        class Failed(TaskResult):
            @property
            def error(self):
                return RuntimeError("boom")

        self.assertIsInstance(Failed(self.log).send(), RuntimeError)
        self.assertEqual(self.lines(), ["ERR ❌ boom"])


class TestDelay(AnimationTestCase):
    def test_fast_task_shows_nothing(self) -> None:
        self.log.spinner("Quick").after(1.0).wait(lambda: None).silent()
        self.assertEqual(self.out.getvalue(), "")

    def test_slow_task_shows_line(self) -> None:
        self.log.spinner("Slow").after(0.02).wait(lambda: time.sleep(0.2)).silent()
        self.assertEqual(self.lines(), ["INF ⏳ Slow"])


class TestCancellation(AnimationTestCase):
    def test_cancel_event(self) -> None:
        cancel = threading.Event()
        release = threading.Event()
        timer = threading.Timer(0.05, cancel.set)
        timer.start()
        try:
            err = self.log.spinner("Blocked").wait(lambda: release.wait(5), cancel=cancel).send()
        finally:
            release.set()
            timer.cancel()
        self.assertIsInstance(err, AnimationCancelledError)
        self.assertEqual(self.lines()[-1], "ERR ❌ animation cancelled")

    def test_timeout(self) -> None:
        release = threading.Event()
        try:
            err = self.log.spinner("Slow").wait(lambda: release.wait(5), timeout=0.05).silent()
        finally:
            release.set()
        self.assertIsInstance(err, AnimationTimeoutError)
        self.assertIsInstance(err, AnimationCancelledError)


class TestAnimatedOutput(AnimationTestCase):
    def setUp(self) -> None:
        super().setUp()
        update_config(progress_mode="on")
        self.out = Output.buffer(ColorMode.ALWAYS, width=60)
        self.log = Logger(self.out)

    def test_frames_drawn_and_cleared(self) -> None:
        def task(update):
            for _ in range(5):
                time.sleep(0.01)
                update.increment()

        err = self.log.bar("Loading", 5).progress(task).msg("Loaded")
        self.assertIsNone(err)
        text = self.out.getvalue()
        self.assertIn("\x1b[2K\r", text)
        self.assertIn("Loading", text)
        self.assertIn("Loaded", text.splitlines()[-1])

    def test_pulse_speed(self) -> None:
        builder = self.log.pulse("Breathing").speed(2.0)
        self.assertIsInstance(builder.animation, PulseAnimation)
        self.assertEqual(builder.animation.speed, 2.0)
        self.assertTrue(math.isclose(builder.animation.tick_rate, 0.01))

    def test_shimmer_direction(self) -> None:
        builder = self.log.shimmer("Sweeping").shimmer_direction(Direction.LEFT)
        self.assertIsInstance(builder.animation, ShimmerAnimation)
        self.assertEqual(builder.animation.direction, Direction.LEFT)
        self.assertIsNone(builder.wait(lambda: time.sleep(0.03)).silent())


if __name__ == "__main__":
    unittest.main()
