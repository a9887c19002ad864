import threading

from Lexid import metrics


def test_inc_and_get_counter():
    metrics.inc_counter("example")
    metrics.inc_counter("example", 4)
    assert metrics.get_counter("example") == 5
    assert metrics.get_counter("missing") == 0


def test_get_counters_is_a_copy():
    metrics.inc_counter("a")
    snap = metrics.get_counters()
    snap["a"] = 99
    assert metrics.get_counter("a") == 1


def test_reset_counters_clears_everything():
    metrics.inc_counter("a")
    metrics.inc_counter("b", 2)
    metrics.reset_counters()
    assert metrics.get_counters() == {}


def test_increments_from_many_threads_are_not_lost():
    def _bump():
        for _ in range(1000):
            metrics.inc_counter("threads")

    threads = [threading.Thread(target=_bump) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert metrics.get_counter("threads") == 8000
