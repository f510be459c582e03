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


from aiohttp import ClientError, ClientSession, ClientTimeout
from aiohttp.web_request import URL
from gateway.bbb.parser import JoinResult, MeetingInfoResult, MeetingListResult, RecordingListResult, parse_meeting_info, parse_meetings, parse_recordings
from gateway.bbb.signer import GatewayConfig, RequestSigner
from typing import Any, Dict, Literal, Union
import asyncio
import gateway.bbb.constants as cst
import logging


logger = logging.getLogger(__name__)


class GatewayTransportError(Exception):
    """
    Outbound request to the conferencing server failed on network level.
    """


class GatewayTimeoutError(GatewayTransportError):
    """
    Outbound request to the conferencing server exceeded its deadline.
    """


def get_create_defaults(meeting_id: str) -> Dict[str, Any]:
    """
    Parameters for meetings created on demand, templated from the meeting id.
    """
    sample = cst.SAMPLE_MEETINGS.get(meeting_id, {})
    return {
        "meetingID": meeting_id,
        "name": sample.get("name", cst.AUTO_CREATE_NAME.format(meeting_id)),
        "attendeePW": cst.AUTO_CREATE_ATTENDEE_PW,
        "moderatorPW": cst.AUTO_CREATE_MODERATOR_PW,
        "welcome": sample.get("welcome", cst.AUTO_CREATE_WELCOME.format(meeting_id)),
        "record": True,
        "duration": cst.AUTO_CREATE_DURATION,
        "maxParticipants": cst.AUTO_CREATE_MAX_PARTICIPANTS,
    }


class BBBGateway:
    """
    Signed API gateway to one BigBlueButton compatible server.
    Every operation performs its outbound calls one after another, no state is kept between calls.
    """
    config: GatewayConfig
    signer: RequestSigner

    #### Transport ####
    async def fetch(self, operation: str, parameters: Dict[str, Any], method: Literal["GET", "POST"] = "GET") -> str:
        """
        Send signed request and return the raw response body.
        """
        signed = self.signer.sign(operation, parameters)
        logger.debug("%s %s", method, signed.url)
        try:
            async with ClientSession(timeout=ClientTimeout(total=self.config.request_timeout)) as session:
                async with session.request(method, URL(signed.url, encoded=True)) as res:
                    body = await res.text()
        except asyncio.TimeoutError as exception:
            raise GatewayTimeoutError(f"'{operation}' request timed out") from exception
        except ClientError as exception:
            raise GatewayTransportError(f"'{operation}' request failed: {exception}") from exception
        logger.debug("'%s' response: %s", operation, body)
        return body

    #### BBB Operations ####
    async def create(self, parameters: Dict[str, Any]) -> MeetingInfoResult:
        """
        'create' operation.
        An already existing meeting isn't an error, concurrent creators may race for the same meeting id.
        """
        logger.info("Creating meeting %s", parameters.get("meetingID"))
        result = parse_meeting_info(await self.fetch("create", parameters, "POST"))
        if result.is_duplicate:
            result.returncode = cst.SUCCESS
            result.message = cst.MESSAGE_DUPLICATE_MEETING
        return result

    async def create_default(self, meeting_id: str) -> MeetingInfoResult:
        result = await self.create(get_create_defaults(meeting_id))
        logger.info("Meeting %s created on demand: %s %s", meeting_id, result.returncode, result.message_key)
        return result

    async def lookup(self, meeting_id: str) -> MeetingInfoResult:
        return parse_meeting_info(await self.fetch("getMeetingInfo", {"meetingID": meeting_id}))

    async def get_meeting_info(self, meeting_id: str) -> MeetingInfoResult:
        """
        'getMeetingInfo' operation.
        Creates a missing meeting and looks it up again, exactly once.
        """
        result = await self.lookup(meeting_id)
        if result.is_not_found:
            logger.info("Meeting %s not found, creating it", meeting_id)
            await self.create_default(meeting_id)
            result = await self.lookup(meeting_id)
        return result

    async def join(self, meeting_id: str, full_name: str, password: Union[str, None] = None, redirect: Union[str, bool, None] = None, extra: Union[Dict[str, Any], None] = None) -> JoinResult:
        """
        'join' operation.
        Ensures the meeting exists and returns the signed join url, the join call itself is made by the attendee.
        """
        info = await self.lookup(meeting_id)
        if info.is_not_found:
            logger.info("Meeting %s not found for join, creating it", meeting_id)
            await self.create_default(meeting_id)
        parameters = {"meetingID": meeting_id, "fullName": full_name, "password": password, "redirect": redirect}
        parameters.update(extra or {})
        signed = self.signer.sign("join", parameters)
        logger.info("Generated join url for meeting %s", meeting_id)
        return JoinResult(returncode=cst.SUCCESS, join_url=signed.url)

    async def get_meetings(self) -> MeetingListResult:
        return parse_meetings(await self.fetch("getMeetings", {}))

    async def end(self, meeting_id: str, password: Union[str, None] = None) -> MeetingInfoResult:
        logger.info("Ending meeting %s", meeting_id)
        return parse_meeting_info(await self.fetch("end", {"meetingID": meeting_id, "password": password}, "POST"))

    async def get_recordings(self, meeting_id: Union[str, None] = None) -> RecordingListResult:
        return parse_recordings(await self.fetch("getRecordings", {"meetingID": meeting_id or None}))

    async def init_sample_meetings(self) -> Dict[str, MeetingInfoResult]:
        """
        Create all sample meetings, returns the create result per meeting id.
        """
        results = {}
        for meeting_id in cst.SAMPLE_MEETINGS:
            results[meeting_id] = await self.create(get_create_defaults(meeting_id))
        return results

    ## INIT ##
    def __init__(self, config: GatewayConfig):
        self.config = config
        self.signer = RequestSigner(config)
