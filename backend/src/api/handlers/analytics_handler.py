"""
Analytics Handler

Beacons from article pages (anonymous, fire-and-forget) and the staff
dashboard reports.
"""

from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Request

from src.api.dependencies import CurrentProfile, OptionalProfile
from src.api.dependencies.services import AnalyticsServiceDep
from src.shared.schemas.analytics import (
    BeaconResponse,
    EventBeacon,
    SessionBeacon,
    UTMRequest,
    UTMResponse,
)
from src.shared.services.permissions import require_staff
from src.shared.utils.analytics import (
    CampaignMetrics,
    TrafficReport,
    UTMParams,
    build_utm_url,
    validate_utm,
)


router = APIRouter()


@router.post("/session", response_model=BeaconResponse)
async def record_session(
    beacon: SessionBeacon,
    request: Request,
    profile: OptionalProfile,
    service: AnalyticsServiceDep,
):
    await service.record_session(
        beacon.model_dump(),
        user_id=profile.id if profile else None,
        user_agent=request.headers.get("user-agent"),
    )
    return BeaconResponse()


@router.post("/events", response_model=BeaconResponse)
async def record_event(beacon: EventBeacon, service: AnalyticsServiceDep):
    await service.record_event(
        beacon.session_id,
        beacon.post_id,
        beacon.event_type,
        beacon.event_data,
    )
    return BeaconResponse()


@router.get("/data", response_model=TrafficReport)
async def traffic_report(
    profile: CurrentProfile,
    service: AnalyticsServiceDep,
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
):
    """Defaults to the last 30 days."""
    return await service.traffic_report(profile, start, end)


@router.get("/campaigns", response_model=List[CampaignMetrics])
async def campaign_metrics(
    profile: CurrentProfile,
    service: AnalyticsServiceDep,
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
):
    return await service.campaign_metrics(profile, start, end)


@router.post("/utm", response_model=UTMResponse)
async def build_utm(request: UTMRequest, profile: CurrentProfile):
    """Validate UTM parameters and build the tagged link."""
    require_staff(profile)
    params = UTMParams(
        source=request.source,
        medium=request.medium,
        campaign=request.campaign,
        term=request.term,
        content=request.content,
    )
    errors = validate_utm(params)
    if errors:
        return UTMResponse(valid=False, errors=errors)
    return UTMResponse(valid=True, url=build_utm_url(request.base_url, params))
