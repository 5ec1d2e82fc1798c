"""
Tests for user-agent parsing, traffic source attribution, UTM links and
report aggregation.
"""
from types import SimpleNamespace

import pytest

from src.shared.models.enums import TrafficSource
from src.shared.utils.analytics.device import parse_user_agent
from src.shared.utils.analytics.reports import Breakdown, campaign_metrics, traffic_report
from src.shared.utils.analytics.sources import categorize_traffic_source, referrer_host
from src.shared.utils.analytics.utm import UTMParams, build_utm_url, parse_utm, validate_utm


CHROME_WINDOWS = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/122.0.6261.95 Safari/537.36"
)
SAFARI_IPHONE = (
    "Mozilla/5.0 (iPhone; CPU iPhone OS 17_2 like Mac OS X) AppleWebKit/605.1.15 "
    "(KHTML, like Gecko) Version/17.2 Mobile/15E148 Safari/604.1"
)
ANDROID_TABLET = (
    "Mozilla/5.0 (Linux; Android 13; SM-X700) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)
EDGE = CHROME_WINDOWS + " Edg/122.0.2365.66"


class TestUserAgent:
    def test_chrome_on_windows(self):
        info = parse_user_agent(CHROME_WINDOWS)
        assert info.device_type == "desktop"
        assert (info.browser, info.browser_version) == ("Chrome", "122.0.6261")
        assert (info.os, info.os_version) == ("Windows", "10/11")

    def test_safari_on_iphone(self):
        info = parse_user_agent(SAFARI_IPHONE)
        assert info.device_type == "mobile"
        assert (info.browser, info.browser_version) == ("Safari", "17.2")
        assert (info.os, info.os_version) == ("iOS", "17.2")

    def test_android_without_mobile_is_tablet(self):
        info = parse_user_agent(ANDROID_TABLET)
        assert info.device_type == "tablet"
        assert (info.os, info.os_version) == ("Android", "13")

    def test_edge_wins_over_chrome(self):
        assert parse_user_agent(EDGE).browser == "Edge"

    def test_missing(self):
        info = parse_user_agent(None)
        assert info.device_type == info.browser == info.os == "unknown"


class TestTrafficSource:
    @pytest.mark.parametrize(
        "referrer,expected",
        [
            (None, TrafficSource.DIRECT),
            ("https://www.google.com/search?q=budget", TrafficSource.SEARCH),
            ("https://m.facebook.com/", TrafficSource.SOCIAL),
            ("https://t.co/abc", TrafficSource.REFERRAL),
            ("https://outlook.live.com/mail/0/", TrafficSource.EMAIL),
            ("https://example.org/post", TrafficSource.REFERRAL),
        ],
    )
    def test_referrer(self, referrer, expected):
        assert categorize_traffic_source(referrer) == expected

    def test_own_site_is_direct(self):
        assert categorize_traffic_source(
            "https://inshortbd.com/news/a", site_host="inshortbd.com"
        ) == TrafficSource.DIRECT

    @pytest.mark.parametrize(
        "source,medium,expected",
        [
            ("facebook", None, TrafficSource.SOCIAL),
            ("partner", "social", TrafficSource.SOCIAL),
            ("mailchimp", None, TrafficSource.EMAIL),
            ("google", "cpc", TrafficSource.SEARCH),
            ("partner", "banner", TrafficSource.OTHER),
        ],
    )
    def test_utm_wins_over_referrer(self, source, medium, expected):
        assert categorize_traffic_source("https://www.google.com/", source, medium) == expected

    def test_referrer_host(self):
        assert referrer_host("https://news.ycombinator.com/item?id=1") == "news.ycombinator.com"
        assert referrer_host("android-app://com.slack") == "com.slack"
        assert referrer_host(None) is None


class TestUTM:
    def test_validate(self):
        errors = validate_utm(UTMParams(source="", medium=" ", campaign="x" * 101))
        assert errors == [
            "Source is required",
            "Medium is required",
            "Campaign must be 100 characters or less",
        ]
        assert validate_utm(UTMParams("twitter", "social", "budget")) == []

    def test_build_replaces_existing_utm_and_keeps_other_params(self):
        url = build_utm_url(
            "https://inshortbd.com/news/a?ref=home&utm_source=old",
            UTMParams("twitter", "social", "budget-2025", term=" "),
        )
        assert url == (
            "https://inshortbd.com/news/a?ref=home"
            "&utm_source=twitter&utm_medium=social&utm_campaign=budget-2025"
        )
        assert parse_utm(url) == {"source": "twitter", "medium": "social", "campaign": "budget-2025"}


def session(**kwargs):
    values = {
        "session_id": "s",
        "post_id": "A",
        "traffic_source": TrafficSource.DIRECT,
        "device_type": "desktop",
        "browser": "Chrome",
        "page_views": 1,
        "utm_campaign": None,
        "utm_source": None,
        "utm_medium": None,
    }
    values.update(kwargs)
    return SimpleNamespace(**values)


def event(session_id, event_type, **data):
    return SimpleNamespace(session_id=session_id, event_type=event_type, event_data=data)


class TestReports:
    def test_traffic_report(self):
        sessions = [
            session(traffic_source=TrafficSource.SOCIAL, device_type="mobile", page_views=2),
            session(traffic_source=TrafficSource.SOCIAL, page_views=None),
            session(post_id="B", traffic_source=TrafficSource.SEARCH, device_type="mobile", browser="Safari"),
        ]

        report = traffic_report(sessions)

        assert report.total_sessions == 3
        assert report.total_page_views == 4
        assert report.traffic_sources == [Breakdown("social", 2, 67), Breakdown("search", 1, 33)]
        assert report.devices[0] == Breakdown("mobile", 2, 67)
        assert report.top_posts == [{"post_id": "A", "sessions": 2}, {"post_id": "B", "sessions": 1}]

    def test_empty_report(self):
        report = traffic_report([])
        assert report.total_sessions == 0
        assert report.traffic_sources == []

    def test_campaign_metrics(self):
        sessions = [
            session(session_id="s1", utm_campaign="budget", utm_source="facebook", utm_medium="social"),
            session(session_id="s2", utm_campaign="budget", utm_source="facebook", page_views=3),
            session(session_id="s3", utm_campaign="eid", utm_source="newsletter", utm_medium="email"),
            session(session_id="s4"),
        ]
        events = [
            event("s1", "time", timeSeconds=30),
            event("s2", "time", timeSeconds=61),
            event("s1", "scroll", scrollDepth=50),
            event("s4", "time", timeSeconds=999),
        ]

        metrics = campaign_metrics(sessions, events)

        assert [m.campaign for m in metrics] == ["budget", "eid"]
        budget = metrics[0]
        assert budget.sessions == 2
        assert budget.page_views == 4
        assert budget.avg_time_on_page == 46
        assert budget.avg_scroll_depth == 50
        assert (budget.top_source, budget.top_medium) == ("facebook", "social")
        assert budget.percentage == 67
        assert metrics[1].avg_time_on_page == 0
        assert metrics[1].percentage == 33

    def test_campaign_metrics_tolerate_odd_event_values(self):
        sessions = [
            session(session_id="s1", utm_campaign="budget"),
            session(session_id="s2", utm_campaign="budget"),
        ]
        events = [
            event("s1", "time", timeSeconds="30"),
            event("s1", "time", timeSeconds=True),
            event("s2", "time", timeSeconds=None),
            event("s2", "time", timeSeconds="soon"),
            event("s2", "time", timeSeconds=60),
            event("s2", "scroll", scrollDepth=45.5),
            event("s2", "scroll", scrollDepth={"max": 90}),
        ]

        budget = campaign_metrics(sessions, events)[0]

        assert budget.avg_time_on_page == 18
        assert budget.avg_scroll_depth == 23
