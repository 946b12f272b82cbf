"""
Tests for the single-concurrency execution queue.
"""
import threading
import time
import unittest


class TestExecutionQueue(unittest.TestCase):

    def setUp(self):
        from egocli.core.queue import ExecutionQueue
        self.queue = ExecutionQueue()

    def tearDown(self):
        self.queue.shutdown()

    def test_tasks_never_overlap_and_run_fifo(self):
        """At most one task runs at a time, in submission order."""
        lock = threading.Lock()
        state = {"active": 0, "max": 0}
        order = []

        def task(i):
            with lock:
                state["active"] += 1
                state["max"] = max(state["max"], state["active"])
            time.sleep(0.01)
            order.append(i)
            with lock:
                state["active"] -= 1
            return i

        futures = [self.queue.add(task, i) for i in range(6)]
        results = [f.result(timeout=5) for f in futures]

        self.assertEqual(results, list(range(6)))
        self.assertEqual(order, list(range(6)))
        self.assertEqual(state["max"], 1)

    def test_error_surfaces_through_future(self):
        """A failing task raises its error from the future; later tasks still run."""
        def boom():
            raise ValueError("boom")

        failing = self.queue.add(boom)
        after = self.queue.add(lambda: "still running")

        with self.assertRaises(ValueError):
            failing.result(timeout=5)
        self.assertEqual(after.result(timeout=5), "still running")

    def test_run_blocks_for_result(self):
        """run() waits and returns the task result."""
        self.assertEqual(self.queue.run(lambda a, b: a + b, 2, b=3), 5)

    def test_join_waits_for_pending(self):
        """join() returns after every submitted task finished."""
        done = []
        for i in range(3):
            self.queue.add(lambda i=i: (time.sleep(0.01), done.append(i)))
        self.queue.add(lambda: 1 / 0)
        self.queue.join()
        self.assertEqual(done, [0, 1, 2])
        self.assertEqual(self.queue.size, 0)

    def test_size_is_zero_after_every_join(self):
        """join() also clears tasks whose done callbacks did not run yet."""
        for _ in range(50):
            self.queue.add(lambda: None)
            self.queue.join()
            self.assertEqual(self.queue.size, 0)


if __name__ == "__main__":
    unittest.main()
