import threading
import unittest

from clog.fields import Field
from clog.progress.core import ProgressState, ProgressUpdate
from clog.progress.core.state import make_update


class TestProgressState(unittest.TestCase):
    def test_non_positive_total_becomes_one(self) -> None:
        self.assertEqual(ProgressState(0).total.load(), 1)
        self.assertEqual(ProgressState(-3).total.load(), 1)

    def test_snapshot(self) -> None:
        state = ProgressState(10)
        state.progress.store(4)
        self.assertEqual(state.snapshot(), (4, 10))


class TestProgressUpdate(unittest.TestCase):
    def setUp(self) -> None:
        self.state = ProgressState(100)
        self.update, self.message, self.fields = make_update(self.state, "Working", [Field("job", 1)])

    def test_set_progress_clamps_high(self) -> None:
        self.update.set_progress(150)
        self.assertEqual(self.update.current, 100)

    def test_set_progress_clamps_low(self) -> None:
        self.update.set_progress(-10)
        self.assertEqual(self.update.current, 0)

    def test_set_total_non_positive(self) -> None:
        self.update.set_total(0)
        self.assertEqual(self.update.total, 1)
        self.update.set_total(-10)
        self.assertEqual(self.update.total, 1)

    def test_set_total_keeps_progress(self) -> None:
        self.update.set_progress(80).set_total(50)
        self.assertEqual(self.update.current, 80)
        self.assertEqual(self.update.total, 50)

    def test_setters_chain(self) -> None:
        result = self.update.set_total(10).set_progress(2).increment(3)
        self.assertIs(result, self.update)
        self.assertEqual(self.update.current, 5)

    def test_message_published_on_send(self) -> None:
        self.update.msg("Copying")
        self.assertEqual(self.message.load(), "Working")
        self.update.send()
        self.assertEqual(self.message.load(), "Copying")

    def test_fields_merge_on_send(self) -> None:
        self.update.field("file", "a.txt").send()
        self.assertEqual(self.fields.load(), [Field("job", 1), Field("file", "a.txt")])
        self.update.with_fields(file="b.txt", size=3).send()
        self.assertEqual(self.fields.load(), [Field("job", 1), Field("file", "b.txt"), Field("size", 3)])

    def test_detached_handle_is_noop(self) -> None:
        update = ProgressUpdate.detached()
        update.set_total(10).set_progress(5).increment().msg("x").field("k", "v").send()
        self.assertEqual(update.current, 0)
        self.assertEqual(update.total, 0)

    def test_handle_without_state_ignores_progress(self) -> None:
        update, message, _ = make_update(None, "Waiting", [])
        update.set_progress(5).msg("Still waiting").send()
        self.assertEqual(update.current, 0)
        self.assertEqual(message.load(), "Still waiting")

    def test_concurrent_increments(self) -> None:
        self.update.set_total(10_000)

        def work() -> None:
            for _ in range(1000):
                self.update.increment()

        threads = [threading.Thread(target=work) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        self.assertLessEqual(self.update.current, 4000)
        self.assertGreater(self.update.current, 0)


if __name__ == "__main__":
    unittest.main()
