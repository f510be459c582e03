"""
Tests for the best effort sample meeting warm up.
"""

from gateway.bbb.client import BBBGateway, GatewayTransportError
from gateway.task.startup import RETURN_SAMPLE_MEETINGS_TIMEOUT, initialize_sample_meetings, warm_sample_meetings
from unittest.mock import AsyncMock, patch
import asyncio
import gateway.bbb.constants as cst
import pytest

from tests.responses import CREATED, NOT_FOUND


async def slow_fetch(*args, **kwargs):
    await asyncio.sleep(1)
    return CREATED


@pytest.mark.asyncio
async def test_warm_up_success(config):
    with patch.object(BBBGateway, "fetch", new=AsyncMock(return_value=CREATED)):
        outcome = await warm_sample_meetings(BBBGateway(config), 1.0)
    assert outcome["returncode"] == cst.SUCCESS
    assert outcome["meetingCreated"]["returncode"] == cst.SUCCESS
    assert outcome["meetingCreated"]["meetings"]["2"]["returncode"] == cst.SUCCESS


@pytest.mark.asyncio
async def test_warm_up_failed_create(config):
    with patch.object(BBBGateway, "fetch", new=AsyncMock(return_value=NOT_FOUND)):
        outcome = await warm_sample_meetings(BBBGateway(config), 1.0)
    assert outcome["returncode"] == cst.SUCCESS
    assert outcome["meetingCreated"]["returncode"] == cst.FAILED


@pytest.mark.asyncio
async def test_warm_up_timeout(config):
    with patch.object(BBBGateway, "fetch", new=slow_fetch):
        outcome = await warm_sample_meetings(BBBGateway(config), 0.01)
    assert outcome == RETURN_SAMPLE_MEETINGS_TIMEOUT


@pytest.mark.asyncio
async def test_warm_up_transport_error_is_raised(config):
    with patch.object(BBBGateway, "fetch", new=AsyncMock(side_effect=GatewayTransportError("refused"))):
        with pytest.raises(GatewayTransportError):
            await warm_sample_meetings(BBBGateway(config), 1.0)


def test_initialize_never_fails(gateway_settings):
    with patch.object(BBBGateway, "fetch", new=AsyncMock(side_effect=GatewayTransportError("refused"))):
        outcome = initialize_sample_meetings(1.0)
    assert "created automatically" in outcome


def test_initialize_reports_outcome(gateway_settings):
    with patch.object(BBBGateway, "fetch", new=AsyncMock(return_value=CREATED)):
        assert initialize_sample_meetings(1.0) == "Sample meetings initialized: SUCCESS"


def test_initialize_uses_startup_timeout(gateway_settings):
    gateway_settings.CLASSROOM_STARTUP_INIT_TIMEOUT = 3.0
    with patch("gateway.task.startup.warm_sample_meetings", new=AsyncMock(return_value={"meetingCreated": {"returncode": cst.SUCCESS}})) as warm:
        assert initialize_sample_meetings() == "Sample meetings initialized: SUCCESS"
    assert warm.await_args.args[1] == 3.0
