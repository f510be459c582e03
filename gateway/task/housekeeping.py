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


from datetime import datetime, timedelta, timezone as dt_timezone
from django.utils import timezone
from gateway.bbb.parser import MeetingSummary, parse_meeting_info, parse_meetings
from gateway.bbb.signer import GatewayConfig, RequestSigner
from requests import get, post
from requests.exceptions import RequestException
from typing import List, Union
import logging


logger = logging.getLogger(__name__)


def get_meeting_age(meeting: MeetingSummary) -> Union[timedelta, None]:
    if not meeting.start_time:
        return None
    return timezone.now() - datetime.fromtimestamp(meeting.start_time / 1000, tz=dt_timezone.utc)


def end_stale_meetings(max_age: timedelta, dry_run: bool = False, config: Union[GatewayConfig, None] = None) -> List[str]:
    """
    End meetings running longer than max_age with their moderator password.
    Returns one line per meeting and error.
    """
    if config is None:
        config = GatewayConfig.from_settings()
    signer = RequestSigner(config)
    url = signer.sign("getMeetings", {}).url

    try:
        response = get(url, timeout=config.request_timeout)
    except RequestException as rex:
        logger.warning("Failed to contact API endpoint %s: %s", config.server_base_url, rex)
        return [f"Failed to contact API endpoint {config.server_base_url}: {rex}"]

    meetings = parse_meetings(response.text)
    if not meetings.is_success:
        return [f"getMeetings failed: {meetings.message_key or meetings.returncode}"]

    lines = []
    for meeting in meetings.meetings:
        age = get_meeting_age(meeting)
        if age is None or age <= max_age:
            continue

        line = f"Killing '{meeting.meeting_name}' running for '{age}'"
        if not dry_run:
            end_url = signer.sign("end", {"meetingID": meeting.meeting_id, "password": meeting.moderator_pw}).url
            try:
                result = parse_meeting_info(post(end_url, timeout=config.request_timeout).text)
                line = f"{line} => {result.returncode}"
            except RequestException as rex:
                line = f"{line} => {rex}"
        logger.info(line)
        lines.append(line)
    return lines
