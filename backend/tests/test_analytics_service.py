"""
Tests for session and event beacons.
"""
from types import SimpleNamespace
from unittest.mock import AsyncMock
import uuid

import pytest

from src.shared.core.exceptions import ValidationError
from src.shared.models.enums import TrafficSource
from src.shared.services.analytics_service import AnalyticsService


@pytest.fixture
def service(mock_session):
    svc = AnalyticsService(mock_session)
    svc.repo = AsyncMock()
    svc.repo.get_by_session_id.return_value = None
    svc.repo.create.side_effect = lambda **kw: SimpleNamespace(**kw)
    return svc


@pytest.mark.asyncio
async def test_session_requires_ids(service):
    with pytest.raises(ValidationError):
        await service.record_session({"session_id": "s1"})


@pytest.mark.asyncio
async def test_repeat_beacon_counts_page_view(service):
    existing = SimpleNamespace(session_id="s1")
    service.repo.get_by_session_id.return_value = existing

    assert await service.record_session({"session_id": "s1", "post_id": uuid.uuid4()}) is existing
    service.repo.increment_page_views.assert_awaited_once_with("s1")
    service.repo.create.assert_not_awaited()


@pytest.mark.asyncio
async def test_utm_read_from_landing_url(service):
    row = await service.record_session(
        {
            "session_id": "s1",
            "post_id": uuid.uuid4(),
            "utm_source": None,
            "page_url": "https://inshortbd.com/news/a?utm_source=facebook&utm_medium=social&utm_campaign=budget",
        }
    )

    assert (row.utm_source, row.utm_medium, row.utm_campaign) == ("facebook", "social", "budget")
    assert row.traffic_source == TrafficSource.SOCIAL
    assert row.page_views == 1


@pytest.mark.asyncio
async def test_beacon_utm_wins_over_landing_url(service):
    row = await service.record_session(
        {
            "session_id": "s1",
            "post_id": uuid.uuid4(),
            "utm_source": "newsletter",
            "page_url": "https://inshortbd.com/?utm_source=facebook",
        }
    )

    assert row.utm_source == "newsletter"
    assert row.traffic_source == TrafficSource.EMAIL


@pytest.mark.asyncio
async def test_event_requires_type(service):
    with pytest.raises(ValidationError) as exc:
        await service.record_event("s1", uuid.uuid4(), None)
    assert exc.value.message == "Missing required fields"
