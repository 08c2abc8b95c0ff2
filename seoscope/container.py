"""Dependency injection container for the application."""
from dependency_injector import containers, providers

from seoscope import config as env
from seoscope.domain.visited_tracker import VisitedTracker
from seoscope.services.crawler import Crawler
from seoscope.services.html_extractor import HtmlExtractor
from seoscope.services.http_service import HttpService, make_session
from seoscope.services.insights import InsightsService, NullInsightGenerator
from seoscope.services.politeness import PolitenessLimiter


# Environment variables used by the container (read via `seoscope.config` helpers).
#
# USER_AGENT (str, default: "SEOScope/1.0 (+https://seoscope.dev/bot)")
#   User-Agent header for outbound HTTP requests.
#
# ACCEPT_LANGUAGE (str, default: "de-DE,de;q=0.9,en;q=0.8")
#   Accept-Language header for outbound HTTP requests.
#
# HTTP_TIMEOUT (float seconds, default: 30)
#   Default per-request timeout when the caller gives no deadline.
#
# MAX_REDIRECTS (int, default: 10)
#   Redirect hops followed before a fetch fails with TooManyRedirects.
#
# CRAWL_DELAY (float seconds, default: 1.0)
#   Minimum spacing between two requests to the same host.
#
# MAX_PAGES (int, default: 10)
#   Page budget for site traversals when the request does not give one.
#
# SEOSCOPE_VISITED_MAX_URLS (int, default: 100000)
#   Upper bound for visited URL trackers (LRU eviction).
#
# SEOSCOPE_MAX_FETCH_ATTEMPTS (int, default: 1)
#   Fetch attempts per URL within one traversal before it is given up.
#
# SEOSCOPE_MOBILE_CHECK (str, default: "header")
#   "header" checks a `viewport` response header, "document" the parsed meta tag.
#
# SEOSCOPE_RESPECT_ROBOTS_TXT (bool, default: true)
#   Accepted for configuration compatibility; robots.txt is not enforced.
#
# SEOSCOPE_INSIGHTS_TIMEOUT (float seconds, default: 20)
#   Deadline for the narrative insights collaborator.
ENV = {
    "USER_AGENT": env.USER_AGENT,
    "ACCEPT_LANGUAGE": env.ACCEPT_LANGUAGE,
    "HTTP_TIMEOUT": env.get_float_env("HTTP_TIMEOUT", 30.0),
    "MAX_REDIRECTS": env.get_int_env("MAX_REDIRECTS", 10),
    "CRAWL_DELAY": env.CRAWL_DELAY,
    "MAX_PAGES": env.MAX_PAGES,
    "SEOSCOPE_VISITED_MAX_URLS": env.get_int_env("SEOSCOPE_VISITED_MAX_URLS", 100_000),
    "SEOSCOPE_MAX_FETCH_ATTEMPTS": env.get_int_env("SEOSCOPE_MAX_FETCH_ATTEMPTS", 1),
    "SEOSCOPE_MOBILE_CHECK": env.mobile_check_mode(),
    "SEOSCOPE_RESPECT_ROBOTS_TXT": env.respect_robots_txt(),
    "SEOSCOPE_INSIGHTS_TIMEOUT": env.get_float_env("SEOSCOPE_INSIGHTS_TIMEOUT", 20.0),
}


class Container(containers.DeclarativeContainer):
    """Dependency injection container for SEOScope application."""

    # Configuration
    config = providers.Configuration(default=ENV)

    # One requests session per process; it carries the redirect cap.
    http_session = providers.Singleton(
        make_session,
        max_redirects=config.MAX_REDIRECTS.as_(int),
    )

    http_service = providers.Singleton(
        HttpService,
        user_agent=config.USER_AGENT.as_(str),
        http_client=http_session.provided.get,
        timeout=config.HTTP_TIMEOUT.as_(float),
        max_redirects=config.MAX_REDIRECTS.as_(int),
        accept_language=config.ACCEPT_LANGUAGE.as_(str),
    )

    politeness_limiter = providers.Singleton(
        PolitenessLimiter,
        delay_seconds=config.CRAWL_DELAY.as_(float),
    )

    html_extractor = providers.Singleton(
        HtmlExtractor
    )

    visited_tracker = providers.Singleton(
        VisitedTracker,
        max_size=config.SEOSCOPE_VISITED_MAX_URLS.as_(int),
    )

    crawler = providers.Singleton(
        Crawler,
        http_service=http_service,
        limiter=politeness_limiter,
        extractor=html_extractor,
        visited_tracker=visited_tracker,
        mobile_check_mode=config.SEOSCOPE_MOBILE_CHECK.as_(str),
        max_fetch_attempts=config.SEOSCOPE_MAX_FETCH_ATTEMPTS.as_(int),
        visited_tracker_max_urls=config.SEOSCOPE_VISITED_MAX_URLS.as_(int),
    )

    insight_generator = providers.Singleton(
        NullInsightGenerator
    )

    insights_service = providers.Singleton(
        InsightsService,
        generator=insight_generator,
        timeout_seconds=config.SEOSCOPE_INSIGHTS_TIMEOUT.as_(float),
    )
