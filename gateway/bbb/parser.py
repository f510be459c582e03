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


from dataclasses import dataclass, field
from gateway.bbb.utils import now_ms
from typing import Any, Dict, List, Union
from xml.parsers.expat import ExpatError
from xmltodict import parse
import gateway.bbb.constants as cst
import logging


logger = logging.getLogger(__name__)

# elements which may occur once or multiple times
FORCE_LIST = ("meeting", "recording", "format", "attendee")


#
# FIELD HELPERS
#
def get_text(node: Any, key: str, default: str = "") -> str:
    if not isinstance(node, dict):
        return default
    value = node.get(key)
    if isinstance(value, list):
        value = value[0] if value else None
    if isinstance(value, dict):
        value = value.get("#text")
    if value is None:
        return default
    return str(value)


def get_int(node: Any, key: str, default: int = 0) -> int:
    try:
        return int(get_text(node, key, str(default)))
    except ValueError:
        return default


def get_bool(node: Any, key: str, default: bool = False) -> bool:
    text = get_text(node, key)
    if not text:
        return default
    return text.lower() == "true"


def get_items(node: Any, container: str, item: str) -> List[Dict[str, Any]]:
    if not isinstance(node, dict) or not isinstance(node.get(container), dict):
        return []
    return [entry for entry in node[container].get(item, []) if isinstance(entry, dict)]


def parse_response(raw: Union[str, bytes, None]) -> Union[Dict[str, Any], None]:
    """
    Returns the children of the <response> root element or None if the payload isn't such a document.
    """
    if not raw:
        return None
    try:
        document = parse(raw, force_list=FORCE_LIST)
    except (ExpatError, ValueError) as exception:
        logger.warning("Unparseable response from conferencing server: %s", exception)
        return None
    if not isinstance(document, dict) or "response" not in document:
        logger.warning("Response from conferencing server has no <response> root element")
        return None
    response = document["response"]
    if isinstance(response, dict):
        return response
    return {}


#
# RESULTS
#
@dataclass
class ApiResult:
    returncode: str = cst.FAILED
    message_key: str = ""
    message: str = ""

    @property
    def is_success(self) -> bool:
        return self.returncode == cst.SUCCESS

    @property
    def is_not_found(self) -> bool:
        return self.returncode == cst.FAILED and self.message_key == cst.MESSAGE_KEY_NOT_FOUND

    @property
    def is_duplicate(self) -> bool:
        return self.returncode == cst.FAILED and self.message_key == cst.MESSAGE_KEY_DUPLICATE_WARNING

    def to_dict(self) -> Dict[str, Any]:
        return {"returncode": self.returncode, "messageKey": self.message_key, "message": self.message}

    @classmethod
    def parse_error(cls):
        return cls(returncode=cst.FAILED, message_key=cst.MESSAGE_KEY_XML_PARSE_ERROR, message=cst.MESSAGE_XML_PARSE_ERROR)


@dataclass
class MeetingInfoResult(ApiResult):
    """
    Normalized getMeetingInfo/create answer.
    createTime, startTime, hasUserJoined, recording and maxUsers are approximations made at parse time,
    they don't reflect the state on the conferencing server.
    """
    meeting_id: str = ""
    meeting_name: str = ""
    running: bool = False
    participant_count: int = 0
    moderator_count: int = 0
    attendee_pw: str = cst.DEFAULT_ATTENDEE_PW
    moderator_pw: str = cst.DEFAULT_MODERATOR_PW
    create_time: int = 0
    duration: int = 0
    has_user_joined: bool = False
    recording: bool = False
    has_been_forcibly_ended: bool = False
    start_time: int = 0
    end_time: int = 0
    listener_count: int = 0
    voice_participant_count: int = 0
    video_count: int = 0
    max_users: int = cst.DEFAULT_MAX_USERS

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        if self.is_success:
            result.update({
                "meetingID": self.meeting_id,
                "meetingName": self.meeting_name,
                "running": self.running,
                "participantCount": self.participant_count,
                "moderatorCount": self.moderator_count,
                "attendeePW": self.attendee_pw,
                "moderatorPW": self.moderator_pw,
                "createTime": self.create_time,
                "duration": self.duration,
                "hasUserJoined": self.has_user_joined,
                "recording": self.recording,
                "hasBeenForciblyEnded": self.has_been_forcibly_ended,
                "startTime": self.start_time,
                "endTime": self.end_time,
                "listenerCount": self.listener_count,
                "voiceParticipantCount": self.voice_participant_count,
                "videoCount": self.video_count,
                "maxUsers": self.max_users,
            })
        return result


@dataclass
class MeetingSummary:
    meeting_id: str = ""
    meeting_name: str = ""
    running: bool = False
    participant_count: int = 0
    moderator_count: int = 0
    attendee_pw: str = cst.DEFAULT_ATTENDEE_PW
    moderator_pw: str = cst.DEFAULT_MODERATOR_PW
    create_time: int = 0
    start_time: int = 0
    end_time: int = 0
    duration: int = 0
    has_user_joined: bool = False
    recording: bool = False
    has_been_forcibly_ended: bool = False
    is_breakout: bool = False
    listener_count: int = 0
    voice_participant_count: int = 0
    video_count: int = 0
    max_users: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "meetingID": self.meeting_id,
            "meetingName": self.meeting_name,
            "running": self.running,
            "participantCount": self.participant_count,
            "moderatorCount": self.moderator_count,
            "attendeePW": self.attendee_pw,
            "moderatorPW": self.moderator_pw,
            "createTime": self.create_time,
            "startTime": self.start_time,
            "endTime": self.end_time,
            "duration": self.duration,
            "hasUserJoined": self.has_user_joined,
            "recording": self.recording,
            "hasBeenForciblyEnded": self.has_been_forcibly_ended,
            "isBreakout": self.is_breakout,
            "listenerCount": self.listener_count,
            "voiceParticipantCount": self.voice_participant_count,
            "videoCount": self.video_count,
            "maxUsers": self.max_users,
        }


@dataclass
class MeetingListResult(ApiResult):
    meetings: List[MeetingSummary] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        if self.message_key != cst.MESSAGE_KEY_XML_PARSE_ERROR:
            result["meetings"] = [meeting.to_dict() for meeting in self.meetings]
        return result


@dataclass
class Recording:
    record_id: str = ""
    meeting_id: str = ""
    name: str = ""
    published: bool = False
    state: str = ""
    start_time: int = 0
    end_time: int = 0
    participants: int = 0
    playback_url: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "recordID": self.record_id,
            "meetingID": self.meeting_id,
            "name": self.name,
            "published": self.published,
            "state": self.state,
            "startTime": self.start_time,
            "endTime": self.end_time,
            "participants": self.participants,
            "playbackUrl": self.playback_url,
        }


@dataclass
class RecordingListResult(ApiResult):
    recordings: List[Recording] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        if self.message_key != cst.MESSAGE_KEY_XML_PARSE_ERROR:
            result["recordings"] = [recording.to_dict() for recording in self.recordings]
        return result


@dataclass
class JoinResult:
    returncode: str
    join_url: str

    def to_dict(self) -> Dict[str, Any]:
        return {"returncode": self.returncode, "joinURL": self.join_url}


#
# PARSERS
#
def parse_meeting_info(raw: Union[str, bytes, None]) -> MeetingInfoResult:
    response = parse_response(raw)
    if response is None:
        return MeetingInfoResult.parse_error()

    result = MeetingInfoResult(
        returncode=get_text(response, "returncode", cst.FAILED),
        message_key=get_text(response, "messageKey"),
        message=get_text(response, "message"),
    )
    if not result.is_success:
        return result

    now = now_ms()
    result.meeting_id = get_text(response, "meetingID")
    result.meeting_name = get_text(response, "meetingName")
    result.running = get_bool(response, "running")
    result.participant_count = get_int(response, "participantCount")
    result.moderator_count = get_int(response, "moderatorCount")
    result.attendee_pw = get_text(response, "attendeePW", cst.DEFAULT_ATTENDEE_PW)
    result.moderator_pw = get_text(response, "moderatorPW", cst.DEFAULT_MODERATOR_PW)
    result.create_time = now
    result.has_user_joined = result.running
    result.start_time = now - cst.START_TIME_OFFSET_MS if result.running else 0
    result.voice_participant_count = result.participant_count
    result.video_count = result.participant_count
    return result


def parse_meetings(raw: Union[str, bytes, None]) -> MeetingListResult:
    response = parse_response(raw)
    if response is None:
        return MeetingListResult.parse_error()

    result = MeetingListResult(
        returncode=get_text(response, "returncode", cst.FAILED),
        message_key=get_text(response, "messageKey"),
        message=get_text(response, "message"),
    )
    for meeting in get_items(response, "meetings", "meeting"):
        result.meetings.append(MeetingSummary(
            meeting_id=get_text(meeting, "meetingID"),
            meeting_name=get_text(meeting, "meetingName"),
            running=get_bool(meeting, "running"),
            participant_count=get_int(meeting, "participantCount"),
            moderator_count=get_int(meeting, "moderatorCount"),
            attendee_pw=get_text(meeting, "attendeePW", cst.DEFAULT_ATTENDEE_PW),
            moderator_pw=get_text(meeting, "moderatorPW", cst.DEFAULT_MODERATOR_PW),
            create_time=get_int(meeting, "createTime"),
            start_time=get_int(meeting, "startTime"),
            end_time=get_int(meeting, "endTime"),
            duration=get_int(meeting, "duration"),
            has_user_joined=get_bool(meeting, "hasUserJoined"),
            recording=get_bool(meeting, "recording"),
            has_been_forcibly_ended=get_bool(meeting, "hasBeenForciblyEnded"),
            is_breakout=get_bool(meeting, "isBreakout"),
            listener_count=get_int(meeting, "listenerCount"),
            voice_participant_count=get_int(meeting, "voiceParticipantCount"),
            video_count=get_int(meeting, "videoCount"),
            max_users=get_int(meeting, "maxUsers"),
        ))
    return result


def parse_recordings(raw: Union[str, bytes, None]) -> RecordingListResult:
    response = parse_response(raw)
    if response is None:
        return RecordingListResult.parse_error()

    result = RecordingListResult(
        returncode=get_text(response, "returncode", cst.FAILED),
        message_key=get_text(response, "messageKey"),
        message=get_text(response, "message"),
    )
    for recording in get_items(response, "recordings", "recording"):
        formats = get_items(recording, "playback", "format")
        result.recordings.append(Recording(
            record_id=get_text(recording, "recordID"),
            meeting_id=get_text(recording, "meetingID"),
            name=get_text(recording, "name"),
            published=get_bool(recording, "published"),
            state=get_text(recording, "state"),
            start_time=get_int(recording, "startTime"),
            end_time=get_int(recording, "endTime"),
            participants=get_int(recording, "participants"),
            playback_url=get_text(formats[0], "url") if formats else "",
        ))
    return result
