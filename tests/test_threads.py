import threading

import pytest

from jwhttp.threads import ThreadPool


def test_all_jobs_run_before_shutdown_returns():
    results = []
    lock = threading.Lock()
    pool = ThreadPool(4)

    def make_job(value):
        def job():
            with lock:
                results.append(value)

        return job

    job_count = pool.size * 5
    for value in range(job_count):
        pool.execute(make_job(value))
    pool.shutdown()
    assert pool.size == 4
    assert sorted(results) == list(range(20))


@pytest.mark.parametrize("size", [0, -1])
def test_non_positive_size_is_rejected(size):
    with pytest.raises(ValueError):
        ThreadPool(size)


def test_execute_after_shutdown_raises():
    pool = ThreadPool(1)
    pool.shutdown()
    with pytest.raises(RuntimeError):
        pool.execute(lambda: None)


def test_jobs_run_concurrently_on_separate_workers():
    barrier = threading.Barrier(3, timeout=5)
    reached = []
    lock = threading.Lock()

    def job():
        barrier.wait()
        with lock:
            reached.append(threading.current_thread().name)

    pool = ThreadPool(3)
    for _ in range(pool.size):
        pool.execute(job)
    pool.shutdown()
    assert len(set(reached)) == pool.size == 3


def test_failing_job_does_not_stop_worker(capsys):
    results = []

    def fail():
        raise ValueError("boom")

    pool = ThreadPool(1)
    pool.execute(fail)
    pool.execute(lambda: results.append("ran"))
    pool.shutdown()
    assert results == ["ran"]
    assert "ValueError: boom" in capsys.readouterr().err


def test_context_manager_waits_for_jobs():
    results = []
    with ThreadPool(2) as pool:
        for value in range(5):
            pool.execute(lambda value=value: results.append(value))
    assert sorted(results) == list(range(5))
    with pytest.raises(RuntimeError):
        pool.execute(lambda: None)


def test_shutdown_twice_keeps_pool_closed():
    pool = ThreadPool(2)
    pool.shutdown()
    pool.shutdown()
    assert pool.size == 2
    with pytest.raises(RuntimeError):
        pool.execute(lambda: None)