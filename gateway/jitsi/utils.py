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

from typing import Union
from urllib.parse import quote, urlencode
import re

ROOM_NAME_LENGTH = 50
# symbols kept unescaped in room paths
ROOM_NAME_SAFE_SYMBOLS = "!*'()"
ROOM_NAME_INVALID_REGEX = re.compile(r'[^a-z0-9\s]')
ROOM_NAME_SPACE_REGEX = re.compile(r'\s+')


def generate_room_name(title: str) -> str:
    room_name = ROOM_NAME_INVALID_REGEX.sub("", title.lower())
    room_name = ROOM_NAME_SPACE_REGEX.sub("-", room_name)
    return room_name[:ROOM_NAME_LENGTH]


def get_meeting_url(domain: str, room_name: str, display_name: str = "", start_with_video_muted: bool = False, start_with_audio_muted: bool = False, password: Union[str, None] = None) -> str:
    params = []
    if display_name:
        params.append(("userInfo.displayName", display_name))
    if start_with_video_muted:
        params.append(("config.startWithVideoMuted", "true"))
    if start_with_audio_muted:
        params.append(("config.startWithAudioMuted", "true"))
    if password:
        params.append(("config.roomPassword", password))

    url = f"https://{domain}/{quote(room_name, safe=ROOM_NAME_SAFE_SYMBOLS)}"
    if params:
        return f"{url}?{urlencode(params)}"
    return url
