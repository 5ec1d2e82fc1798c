"""
Analytics Utilities

Pure helpers behind the analytics service: traffic source rules, User-Agent
parsing, UTM links and report aggregation.
"""

from src.shared.utils.analytics.device import DeviceInfo, parse_user_agent
from src.shared.utils.analytics.reports import (
    CampaignMetrics,
    TrafficReport,
    campaign_metrics,
    traffic_report,
)
from src.shared.utils.analytics.sources import categorize_traffic_source, referrer_host
from src.shared.utils.analytics.utm import UTMParams, build_utm_url, parse_utm, validate_utm

__all__ = [
    "DeviceInfo",
    "parse_user_agent",
    "CampaignMetrics",
    "TrafficReport",
    "campaign_metrics",
    "traffic_report",
    "categorize_traffic_source",
    "referrer_host",
    "UTMParams",
    "build_utm_url",
    "parse_utm",
    "validate_utm",
]
