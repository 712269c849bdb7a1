import threading
import time
import unittest

from clog.exceptions import AnimationTimeoutError, GroupClosedError, GroupError
from clog.logger import Logger
from clog.output import ColorMode, Output
from clog.progress.config import ProgressConfig, set_config


class GroupTestCase(unittest.TestCase):
    def setUp(self) -> None:
        set_config(ProgressConfig(bar_tick_rate=0.01, pulse_tick_rate=0.01, shimmer_tick_rate=0.01))
        self.out = Output.buffer()
        self.log = Logger(self.out)

    def tearDown(self) -> None:
        set_config(ProgressConfig())

    def lines(self):
        return self.out.getvalue().splitlines()


class TestGroup(GroupTestCase):
    def test_all_succeed(self) -> None:
        group = self.log.group()
        a = group.add(self.log.bar("A", 3)).progress(lambda u: u.set_progress(3))
        b = group.add(self.log.pulse("B")).run(lambda: time.sleep(0.02))
        self.assertEqual(len(group), 2)

        err = group.wait().on_success_message("All done").send()

        self.assertIsNone(err)
        self.assertIsNone(a.silent())
        self.assertIsNone(b.silent())
        self.assertEqual(self.lines(), ["INF ⏳ A", "INF ⏳ B", "INF ℹ️ All done"])

    def test_failures_joined(self) -> None:
        def fail(message):
            def task():
                raise RuntimeError(message)
            return task

        group = self.log.group()
        group.add(self.log.spinner("one")).run(fail("first"))
        group.add(self.log.spinner("two")).run(lambda: None)
        group.add(self.log.spinner("three")).run(fail("second"))

        result = group.wait()
        err = result.silent()

        self.assertIsInstance(err, GroupError)
        self.assertEqual(len(err.errors), 2)
        self.assertEqual(str(err), "first; second")
        self.assertEqual(len(result.errors), 2)

    def test_entry_results_after_wait(self) -> None:
        group = self.log.group()
        entry = group.add(self.log.spinner("job")).run(lambda: None)
        group.wait().silent()
        entry.msg("job finished")
        self.assertEqual(self.lines()[-1], "INF ℹ️ job finished")

    def test_timeout_abandons_every_entry(self) -> None:
        release = threading.Event()
        group = self.log.group(timeout=0.05)
        slow = group.add(self.log.spinner("slow")).run(lambda: release.wait(5))
        quick = group.add(self.log.spinner("quick")).run(lambda: None)
        try:
            err = group.wait().silent()
        finally:
            release.set()

        self.assertIsInstance(err, GroupError)
        self.assertIsInstance(slow.silent(), AnimationTimeoutError)
        self.assertIsNone(quick.silent())

    def test_many_entries_run_at_once(self) -> None:
        barrier = threading.Barrier(40, timeout=5)
        group = self.log.group(timeout=10)
        for i in range(40):
            group.add(self.log.spinner(f"job {i}")).run(barrier.wait)
        self.assertIsNone(group.wait().silent())

    def test_closed_after_wait(self) -> None:
        group = self.log.group()
        group.add(self.log.spinner("first")).run(lambda: None)
        late = group.add(self.log.spinner("late"))
        group.wait().silent()

        with self.assertRaises(GroupClosedError):
            group.add(self.log.spinner("again"))
        with self.assertRaises(GroupClosedError):
            late.run(lambda: None)
        with self.assertRaises(RuntimeError):
            group.wait()
        self.assertEqual(len(group), 1)

    def test_animated_block(self) -> None:
        set_config(ProgressConfig(bar_tick_rate=0.01, progress_mode="on"))
        out = Output.buffer(ColorMode.ALWAYS, width=60)
        log = Logger(out)
        group = log.group()

        def fill(update):
            for _ in range(4):
                time.sleep(0.01)
                update.increment()

        group.add(log.bar("first", 4)).progress(fill)
        group.add(log.bar("second", 4)).progress(fill)
        self.assertIsNone(group.wait().silent())

        text = out.getvalue()
        self.assertIn("first", text)
        self.assertIn("second", text)


if __name__ == "__main__":
    unittest.main()
