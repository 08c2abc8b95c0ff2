import threading

from seoscope.domain import CrawlSession


def test_same_host_compares_netloc_case_insensitively():
    session = CrawlSession("https://Example.com/", max_pages=5)
    assert session.is_same_host("https://example.com/about")
    assert not session.is_same_host("https://blog.example.com/")
    assert not session.is_same_host("https://example.com:8443/")
    assert not session.is_same_host("mailto:someone@example.com")


def test_malformed_url_is_not_same_host():
    session = CrawlSession("https://example.com/", max_pages=5)
    assert not session.is_same_host("http://[broken")


def test_failure_attempts_are_bounded():
    session = CrawlSession("https://example.com/", max_pages=5, max_fetch_attempts=2)
    url = "https://example.com/broken"
    session.record_failure(url)
    assert not session.attempts_exhausted(url)
    session.record_failure(url)
    assert session.attempts_exhausted(url)


def test_stop_event_and_deadline_stop_session():
    now = [10.0]
    event = threading.Event()
    session = CrawlSession("https://example.com/", 5, stop_event=event, deadline=12.0, clock=lambda: now[0])
    assert not session.is_stopped()
    now[0] = 12.0
    assert session.is_stopped()

    other = CrawlSession("https://example.com/", 5)
    other.mark_stopped()
    assert other.is_stopped()


def test_budget_tracking():
    session = CrawlSession("https://example.com/", max_pages=1)
    assert not session.budget_reached()
    session.increment_pages_crawled()
    assert session.budget_reached()
