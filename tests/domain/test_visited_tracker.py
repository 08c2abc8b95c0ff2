import threading

from seoscope.domain.visited_tracker import VisitedTracker


def test_url_not_visited_initially():
    tracker = VisitedTracker()
    assert not tracker.is_visited("https://example.com")


def test_marking_url_makes_it_visited():
    tracker = VisitedTracker()
    tracker.mark("https://example.com")
    assert tracker.is_visited("https://example.com")


def test_different_urls_tracked_independently():
    tracker = VisitedTracker()
    tracker.mark("https://example.com")
    assert tracker.is_visited("https://example.com")
    assert not tracker.is_visited("https://other.com")


def test_marking_same_url_twice_is_idempotent():
    tracker = VisitedTracker()
    tracker.mark("https://example.com")
    tracker.mark("https://example.com")
    assert tracker.is_visited("https://example.com")
    assert len(tracker) == 1


def test_mark_if_new_claims_url_once():
    tracker = VisitedTracker()
    assert tracker.mark_if_new("https://example.com/a") is True
    assert tracker.mark_if_new("https://example.com/a") is False


def test_max_size_evicts_oldest():
    tracker = VisitedTracker(max_size=2)
    tracker.mark("a")
    tracker.mark("b")
    tracker.mark("c")
    assert not tracker.is_visited("a")
    assert tracker.is_visited("b")
    assert tracker.is_visited("c")


def test_non_positive_max_size_is_unbounded():
    tracker = VisitedTracker(max_size=0)
    for i in range(50):
        tracker.mark(f"u{i}")
    assert len(tracker) == 50


def test_concurrent_mark_if_new_has_single_winner():
    tracker = VisitedTracker()
    barrier = threading.Barrier(8)
    wins = []

    def claim():
        barrier.wait()
        if tracker.mark_if_new("https://example.com/contested"):
            wins.append(1)

    threads = [threading.Thread(target=claim) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert len(wins) == 1
