# EduGate - Classroom Conferencing Gateway
# Copyright (C) 2025 EduGate contributors
#
# This program is free software: you can redistribute it and/or modify it
# under the terms of the GNU Affero General Public License as published by
# the Free Software Foundation, either version 3 of the License, or (at your
# option) any later version.
#
# This program is distributed in the hope that it will be useful, but WITHOUT
# ANY WARRANTY; without even the implied warranty of MERCHANTABILITY or
# FITNESS FOR A PARTICULAR PURPOSE. See the GNU Affero General Public License
# for more details.
#
# You should have received a copy of the GNU Affero General Public License
# along with this program. If not, see <https://www.gnu.org/licenses/>.


from asgiref.sync import async_to_sync
from django.conf import settings
from gateway.bbb.client import BBBGateway, GatewayTimeoutError, GatewayTransportError
from gateway.bbb.signer import GatewayConfig
from typing import Any, Dict, Union
import asyncio
import gateway.bbb.constants as cst
import logging


logger = logging.getLogger(__name__)

RETURN_SAMPLE_MEETINGS_TIMEOUT = {
    "returncode": cst.SUCCESS,
    "message": "Server ready (sample meeting creation timed out)",
    "meetingCreated": {"returncode": cst.TIMEOUT},
}


async def warm_sample_meetings(gateway: BBBGateway, timeout: float) -> Dict[str, Any]:
    """
    Create the sample meetings within the given deadline.
    A timeout is not an error, meetings are created on demand later on.
    Other transport errors are raised to the caller.
    """
    try:
        results = await asyncio.wait_for(gateway.init_sample_meetings(), timeout=timeout)
    except (asyncio.TimeoutError, GatewayTimeoutError):
        logger.warning("Sample meeting creation timed out after %s seconds", timeout)
        return RETURN_SAMPLE_MEETINGS_TIMEOUT

    all_created = all(result.is_success for result in results.values())
    return {
        "returncode": cst.SUCCESS,
        "message": "Sample meetings initialized",
        "meetingCreated": {
            "returncode": cst.SUCCESS if all_created else cst.FAILED,
            "meetings": {meeting_id: result.to_dict() for meeting_id, result in results.items()},
        },
    }


def initialize_sample_meetings(timeout: Union[float, None] = None) -> str:
    """
    Blocking startup variant, never fails.
    """
    if timeout is None:
        timeout = settings.CLASSROOM_STARTUP_INIT_TIMEOUT
    gateway = BBBGateway(GatewayConfig.from_settings())
    try:
        outcome = async_to_sync(warm_sample_meetings)(gateway, timeout)
    except GatewayTransportError as exception:
        logger.warning("Could not initialize sample meetings: %s", exception)
        return "Sample meetings not initialized, meetings will be created automatically when needed."
    return f"Sample meetings initialized: {outcome['meetingCreated']['returncode']}"
