"""Tests for TaskScheduler."""

import threading

import pytest

from kontrolhid.hid import TaskScheduler


class TestTaskScheduler:
    """Test the single-worker scheduler."""

    @pytest.fixture
    def scheduler(self):
        scheduler = TaskScheduler()
        scheduler.start()
        yield scheduler
        scheduler.stop()

    @pytest.mark.unit
    def test_runs_tasks_in_order(self, scheduler):
        results = []

        for i in range(20):
            scheduler.schedule(lambda i=i: results.append(i))
        scheduler.stop()

        assert results == list(range(20))

    @pytest.mark.unit
    def test_runs_on_worker_thread(self, scheduler):
        threads = []

        scheduler.schedule(lambda: threads.append(threading.current_thread().name))
        scheduler.stop()

        assert threads == ["kontrolhid-scheduler"]

    @pytest.mark.unit
    def test_delayed_task(self, scheduler):
        done = threading.Event()

        scheduler.schedule(done.set, delay_ms=10)

        assert done.wait(timeout=2.0)

    @pytest.mark.unit
    def test_stop_cancels_delayed_tasks(self, scheduler):
        results = []

        scheduler.schedule(lambda: results.append("late"), delay_ms=5000)
        scheduler.stop()

        assert results == []

    @pytest.mark.unit
    def test_exception_does_not_stop_worker(self, scheduler, caplog):
        results = []

        def failing():
            raise RuntimeError("task failed")

        scheduler.schedule(failing)
        scheduler.schedule(lambda: results.append("after"))
        scheduler.stop()

        assert results == ["after"]
        assert "task failed" in caplog.text

    @pytest.mark.unit
    def test_schedule_when_not_running_is_dropped(self):
        scheduler = TaskScheduler()
        results = []

        scheduler.schedule(lambda: results.append(1))
        scheduler.start()
        scheduler.stop()

        assert results == []

    @pytest.mark.unit
    def test_lifecycle(self):
        scheduler = TaskScheduler()
        assert not scheduler.is_running

        with scheduler:
            assert scheduler.is_running

        assert not scheduler.is_running
        scheduler.stop()

    @pytest.mark.unit
    def test_restart(self):
        scheduler = TaskScheduler()
        results = []

        scheduler.start()
        scheduler.stop()
        scheduler.start()
        scheduler.schedule(lambda: results.append(1))
        scheduler.stop()

        assert results == [1]

    @pytest.mark.unit
    def test_tasks_racing_stop_do_not_leak_into_restart(self):
        scheduler = TaskScheduler()
        session = ["first"]
        ran_in = []

        def producer():
            for _ in range(2000):
                scheduler.schedule(lambda: ran_in.append(session[0]))

        scheduler.start()
        thread = threading.Thread(target=producer)
        thread.start()
        scheduler.stop(timeout=5.0)
        thread.join()

        session[0] = "second"
        scheduler.start()
        scheduler.stop(timeout=5.0)

        assert "second" not in ran_in
