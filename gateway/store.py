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
from datetime import datetime
from django.utils import timezone
from os.path import getsize, isfile, join as path_join
from typing import Any, Dict, List, Union


@dataclass
class JitsiMeeting:
    id: str
    room_name: str
    title: str
    url: str
    created_at: datetime
    duration: int = 60
    participants: List[str] = field(default_factory=list)
    is_active: bool = False
    is_recording: bool = False
    recording_enabled: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "roomName": self.room_name,
            "title": self.title,
            "url": self.url,
            "createdAt": self.created_at.isoformat(),
            "participantCount": len(self.participants),
            "isActive": self.is_active,
            "isRecording": self.is_recording,
        }


@dataclass
class JitsiRecording:
    id: str
    room_name: str
    title: str
    start_time: int
    end_time: int
    file_name: str
    size: int
    participants: int
    status: str = "completed"

    @property
    def url(self) -> str:
        return f"/recordings/{self.file_name}"


class DemoStore:
    """
    In-memory registry of Jitsi meetings and recordings.
    Lives as long as the process, access isn't synchronized.
    """
    meetings: Dict[str, JitsiMeeting]
    recordings: List[JitsiRecording]
    recordings_dir: str

    def add_meeting(self, meeting: JitsiMeeting) -> JitsiMeeting:
        self.meetings[meeting.id] = meeting
        return meeting

    def find_meeting(self, room_name: str) -> Union[JitsiMeeting, None]:
        for meeting in self.meetings.values():
            if meeting.room_name == room_name:
                return meeting
        return None

    def list_meetings(self) -> List[JitsiMeeting]:
        return list(self.meetings.values())

    def add_participant(self, room_name: str, display_name: str) -> Union[JitsiMeeting, None]:
        meeting = self.find_meeting(room_name)
        if meeting:
            meeting.is_active = True
            if display_name not in meeting.participants:
                meeting.participants.append(display_name)
        return meeting

    def start_recording(self, room_name: str) -> Union[JitsiMeeting, None]:
        meeting = self.find_meeting(room_name)
        if meeting:
            meeting.is_recording = True
        return meeting

    def stop_recording(self, room_name: str) -> Union[JitsiRecording, None]:
        """
        Stop recording of the room and register a completed recording.
        Returns None for unknown rooms.
        """
        meeting = self.find_meeting(room_name)
        if not meeting:
            return None
        meeting.is_recording = False

        now = int(timezone.now().timestamp() * 1000)
        file_name = f"{room_name}_{now}.mp4"
        recording = JitsiRecording(
            id=str(now),
            room_name=room_name,
            title=meeting.title,
            start_time=int(meeting.created_at.timestamp() * 1000),
            end_time=now,
            file_name=file_name,
            size=self.get_file_size(file_name),
            participants=max(1, len(meeting.participants)),
        )
        self.recordings.append(recording)
        return recording

    def list_recordings(self, room_name: str = "") -> List[JitsiRecording]:
        if room_name:
            return [recording for recording in self.recordings if recording.room_name == room_name]
        return list(self.recordings)

    def delete_recording(self, recording_id: str) -> bool:
        for index, recording in enumerate(self.recordings):
            if recording.id == recording_id:
                del self.recordings[index]
                return True
        return False

    def get_file_path(self, file_name: str) -> str:
        return path_join(self.recordings_dir, file_name)

    def get_file_size(self, file_name: str) -> int:
        path = self.get_file_path(file_name)
        if isfile(path):
            return getsize(path)
        return 0

    def __init__(self, recordings_dir: str):
        self.meetings = {}
        self.recordings = []
        self.recordings_dir = recordings_dir
