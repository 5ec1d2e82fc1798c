"""
User-Agent Parsing

Substring checks on the lowercased User-Agent. Order matters: tablets are
tested before phones (Android tablets omit "mobile"), Edge before Chrome
and Chrome before Safari (both carry "safari/").
"""

from dataclasses import dataclass
import re
from typing import Optional


UNKNOWN = "unknown"

_NON_VERSION_RE = re.compile(r"[^0-9.]")


@dataclass(frozen=True)
class DeviceInfo:
    device_type: str = UNKNOWN
    browser: str = UNKNOWN
    browser_version: str = UNKNOWN
    os: str = UNKNOWN
    os_version: str = UNKNOWN


def _version_after(ua: str, prefix: str) -> Optional[str]:
    """Digits and dots following prefix up to the next space, at most 10 chars."""
    index = ua.find(prefix)
    if index == -1:
        return None
    start = index + len(prefix)
    end = ua.find(" ", start)
    raw = ua[start:end] if end != -1 else ua[start:]
    return _NON_VERSION_RE.sub("", raw.replace("_", "."))[:10] or None


def detect_device_type(user_agent: Optional[str]) -> str:
    if not user_agent:
        return UNKNOWN
    ua = user_agent.lower()

    if (
        "ipad" in ua
        or "tablet" in ua
        or ("android" in ua and "mobile" not in ua)
        or "playbook" in ua
        or "kindle" in ua
    ):
        return "tablet"

    if any(m in ua for m in ("mobile", "android", "iphone", "ipod", "blackberry", "windows phone")):
        return "mobile"

    return "desktop"


def detect_browser(user_agent: Optional[str]) -> tuple[str, str]:
    if not user_agent:
        return UNKNOWN, UNKNOWN
    ua = user_agent.lower()

    if "edg/" in ua:
        return "Edge", _version_after(ua, "edg/") or UNKNOWN
    if "chrome/" in ua:
        return "Chrome", _version_after(ua, "chrome/") or UNKNOWN
    if "firefox/" in ua:
        return "Firefox", _version_after(ua, "firefox/") or UNKNOWN
    if "safari/" in ua:
        return "Safari", _version_after(ua, "version/") or UNKNOWN
    if "opr/" in ua or "opera/" in ua:
        version = _version_after(ua, "opr/") or _version_after(ua, "version/")
        return "Opera", version or UNKNOWN
    return UNKNOWN, UNKNOWN


_WINDOWS_VERSIONS = (
    ("windows nt 10.0", "10/11"),
    ("windows nt 6.3", "8.1"),
    ("windows nt 6.2", "8"),
    ("windows nt 6.1", "7"),
)


def detect_os(user_agent: Optional[str]) -> tuple[str, str]:
    if not user_agent:
        return UNKNOWN, UNKNOWN
    ua = user_agent.lower()

    if "windows" in ua:
        for marker, version in _WINDOWS_VERSIONS:
            if marker in ua:
                return "Windows", version
        return "Windows", UNKNOWN
    # iOS agents also say "like Mac OS X"
    if "iphone os" in ua or "ipad" in ua:
        return "iOS", _version_after(ua, "os ") or UNKNOWN
    if "mac os x" in ua or "macintosh" in ua:
        return "macOS", _version_after(ua, "mac os x ") or UNKNOWN
    if "android" in ua:
        return "Android", _version_after(ua, "android ") or UNKNOWN
    if "linux" in ua:
        return "Linux", UNKNOWN
    return UNKNOWN, UNKNOWN


def parse_user_agent(user_agent: Optional[str]) -> DeviceInfo:
    browser, browser_version = detect_browser(user_agent)
    os_name, os_version = detect_os(user_agent)
    return DeviceInfo(
        device_type=detect_device_type(user_agent),
        browser=browser,
        browser_version=browser_version,
        os=os_name,
        os_version=os_version,
    )
