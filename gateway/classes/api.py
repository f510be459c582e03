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


from django.apps import apps
from django.conf import settings
from django.http import HttpRequest, HttpResponse, HttpResponseRedirect, JsonResponse
from django.utils import timezone
from gateway.bbb.client import BBBGateway, GatewayTransportError
from gateway.bbb.signer import GatewayConfig
from gateway.jitsi.utils import generate_room_name, get_meeting_url
from gateway.store import DemoStore, JitsiMeeting, JitsiRecording
from gateway.task.startup import warm_sample_meetings
from json import loads
from typing import Any, Dict, List, Literal
import gateway.bbb.constants as cst
import logging


logger = logging.getLogger(__name__)


def get_request_parameters(request: HttpRequest) -> Dict[str, Any]:
    """
    Collect query parameters and, for requests with body, JSON or form values.
    Body values take precedence. Raises ValueError for an undecodable JSON body.
    """
    parameters = {}
    for parameter in request.GET.keys():
        parameters[parameter] = request.GET.get(parameter)

    if request.method in ["POST", "DELETE"] and request.body:
        if request.content_type == "application/json":
            body = loads(request.body)
            if isinstance(body, dict):
                parameters.update(body)
        elif request.method == "POST":
            for parameter in request.POST.keys():
                parameters[parameter] = request.POST.get(parameter)
    return parameters


def is_true(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).lower() == "true"


def method_not_allowed(methods: List[str], body: Dict[str, Any]) -> JsonResponse:
    response = JsonResponse(body, status=405)
    response["Allow"] = ", ".join(methods)
    return response


class ClientGatewayRequest:
    """
    Class for client to BigBlueButton server communication.
    """
    request: HttpRequest
    endpoint: str
    parameters: Dict[str, Any]
    meeting_id: str
    body_error: bool
    gateway: BBBGateway
    ENDPOINTS: Dict[str, Dict[Literal["methods", "function"], Any]]

    #### Asynchronous BBB Endpoints
    async def test(self) -> HttpResponse:
        """
        Liveness check, echoes the configured conferencing servers.
        """
        return JsonResponse({
            "message": "Conferencing API Proxy Server is running!",
            "timestamp": timezone.now().isoformat(),
            "bbbServer": self.gateway.config.server_base_url,
            "jitsiDomain": settings.CLASSROOM_JITSI_DOMAIN,
        })

    async def create(self) -> HttpResponse:
        """
        'create' endpoint.
        Missing optional values are filled with the create defaults.
        """
        if not self.meeting_id:
            return JsonResponse(cst.RETURN_MISSING_MEETING_ID, status=400)

        parameters = {"meetingID": self.meeting_id, "name": self.parameters.get("name")}
        for parameter, default in cst.CREATE_DEFAULTS.items():
            parameters[parameter] = self.parameters.get(parameter, default)
        parameters.update(self.get_forwarded_parameters(cst.PARAMETERS_CREATE))

        result = await self.gateway.create(parameters)
        return JsonResponse(result.to_dict())

    async def join(self) -> HttpResponse:
        """
        'join' endpoint.
        Redirects the client to the signed join url unless 'redirect' is 'false'.
        """
        if not self.meeting_id:
            return JsonResponse(cst.RETURN_MISSING_MEETING_ID, status=400)
        full_name = self.parameters.get("fullName", "")
        if not full_name:
            return JsonResponse(cst.RETURN_MISSING_FULL_NAME, status=400)

        redirect = str(self.parameters.get("redirect", "true"))
        result = await self.gateway.join(self.meeting_id, full_name, self.parameters.get("password"), redirect, self.get_forwarded_parameters(cst.PARAMETERS_JOIN))

        if redirect.lower() == "false":
            return JsonResponse(result.to_dict())
        return HttpResponseRedirect(result.join_url)

    async def get_meeting_info(self) -> HttpResponse:
        """
        'getMeetingInfo' endpoint.
        """
        if not self.meeting_id:
            return JsonResponse(cst.RETURN_MISSING_MEETING_ID, status=400)
        result = await self.gateway.get_meeting_info(self.meeting_id)
        return JsonResponse(result.to_dict())

    async def get_meetings(self) -> HttpResponse:
        result = await self.gateway.get_meetings()
        return JsonResponse(result.to_dict())

    async def end(self) -> HttpResponse:
        """
        'end' endpoint.
        """
        if not self.meeting_id:
            return JsonResponse(cst.RETURN_MISSING_MEETING_ID, status=400)
        result = await self.gateway.end(self.meeting_id, self.parameters.get("password"))
        return JsonResponse(result.to_dict())

    async def get_recordings(self) -> HttpResponse:
        result = await self.gateway.get_recordings(self.meeting_id)
        return JsonResponse(result.to_dict())

    async def init_sample_meetings(self) -> HttpResponse:
        """
        Best effort creation of the sample meetings, bounded by CLASSROOM_SAMPLE_INIT_TIMEOUT.
        """
        try:
            outcome = await warm_sample_meetings(self.gateway, settings.CLASSROOM_SAMPLE_INIT_TIMEOUT)
        except GatewayTransportError as exception:
            logger.error("Error initializing sample meetings: %s", exception)
            return JsonResponse({
                "returncode": cst.FAILED,
                "messageKey": cst.MESSAGE_KEY_INTERNAL_ERROR,
                "message": "Failed to initialize sample meetings",
                "error": str(exception),
            }, status=500)
        return JsonResponse(outcome)

    #### Own Routines ####
    async def endpoint_delegation(self) -> HttpResponse:
        """
        Check for right endpoint and return response.
        Transport and unexpected errors are answered with an internal error.
        """
        if self.body_error:
            return JsonResponse(cst.RETURN_INVALID_BODY, status=400)
        try:
            # a misconfigured checksum algorithm raises here
            self.gateway = BBBGateway(GatewayConfig.from_settings())
            return await self.ENDPOINTS[self.endpoint]["function"]()
        except GatewayTransportError as exception:
            logger.error("Error in '%s' endpoint: %s", self.endpoint, exception)
        except Exception:
            logger.exception("Unexpected error in '%s' endpoint", self.endpoint)
        return JsonResponse(cst.RETURN_INTERNAL_ERROR, status=500)

    #### Class Routines ####
    def allowed_methods(self) -> List[str]:
        return self.ENDPOINTS[self.endpoint]["methods"]

    def is_allowed_endpoint(self) -> bool:
        if self.endpoint in self.ENDPOINTS:
            return True
        return False

    def is_allowed_method(self) -> bool:
        if self.request.method in self.allowed_methods():
            return True
        return False

    def get_forwarded_parameters(self, endpoint_parameters: List[str]) -> Dict[str, Any]:
        forwarded = {}
        for parameter, value in self.parameters.items():
            if parameter in endpoint_parameters or parameter.startswith(cst.META_PARAMETER_PREFIX):
                forwarded[parameter] = value
        return forwarded

    ## INIT ##
    def __init__(self, request: HttpRequest, endpoint: str):
        self.request = request
        self.endpoint = endpoint
        self.body_error = False
        try:
            self.parameters = get_request_parameters(request)
        except ValueError:
            self.body_error = True
            self.parameters = {}

        self.meeting_id = str(self.parameters.get("meetingID") or "")
        self.ENDPOINTS = {
            "test": {"methods": ["GET"], "function": self.test},
            "create": {"methods": ["POST"], "function": self.create},
            "join": {"methods": ["GET"], "function": self.join},
            "getMeetingInfo": {"methods": ["GET"], "function": self.get_meeting_info},
            "getMeetings": {"methods": ["GET"], "function": self.get_meetings},
            "end": {"methods": ["POST"], "function": self.end},
            "getRecordings": {"methods": ["GET"], "function": self.get_recordings},
            "initSampleMeetings": {"methods": ["POST"], "function": self.init_sample_meetings},
        }


class JitsiRequest:
    """
    Class for client to Jitsi Meet room handling.
    Rooms aren't signed, meetings and recordings are kept in the demo store.
    """
    request: HttpRequest
    endpoint: str
    parameters: Dict[str, Any]
    recording_id: str
    body_error: bool
    store: DemoStore
    ENDPOINTS: Dict[str, Dict[Literal["methods", "function", "error"], Any]]

    #### Jitsi Endpoints
    def create_meeting(self) -> JsonResponse:
        title = self.parameters.get("title", "")
        if not title:
            return self.bad_request("Meeting title is required")

        room_name = generate_room_name(title)
        meeting = self.store.add_meeting(JitsiMeeting(
            id=self.get_meeting_id(),
            room_name=room_name,
            title=title,
            url=self.get_url(room_name, self.parameters.get("displayName", "")),
            created_at=timezone.now(),
            duration=self.get_duration(),
        ))
        logger.info("Jitsi meeting %s created for room %s", meeting.id, room_name)
        return JsonResponse({
            "success": True,
            "meeting": {
                "id": meeting.id,
                "roomName": meeting.room_name,
                "title": meeting.title,
                "url": meeting.url,
                "joinUrl": meeting.url,
                "createdAt": meeting.created_at.isoformat(),
            },
        })

    def join(self) -> JsonResponse:
        room_name = self.parameters.get("roomName", "")
        display_name = self.parameters.get("displayName", "")
        if not room_name or not display_name:
            return self.bad_request("Room name and display name are required")

        self.store.add_participant(room_name, display_name)
        return JsonResponse({
            "success": True,
            "joinUrl": self.get_url(room_name, display_name),
            "roomName": room_name,
            "displayName": display_name,
        })

    def meeting_info(self) -> JsonResponse:
        room_name = self.parameters.get("roomName", "")
        if not room_name:
            return self.bad_request("Room name is required")

        meeting = self.store.find_meeting(room_name)
        if not meeting:
            return JsonResponse({"success": True, "roomName": room_name, "participantCount": 0, "isRecording": False, "isActive": False})
        return JsonResponse({
            "success": True,
            "roomName": meeting.room_name,
            "title": meeting.title,
            "participantCount": len(meeting.participants),
            "isRecording": meeting.is_recording,
            "isActive": meeting.is_active,
            "createdAt": meeting.created_at.isoformat(),
        })

    def meetings(self) -> JsonResponse:
        return JsonResponse({"success": True, "meetings": [meeting.to_dict() for meeting in self.store.list_meetings()]})

    def start_recording(self) -> JsonResponse:
        room_name = self.parameters.get("roomName", "")
        if not room_name:
            return self.bad_request("Room name is required")

        # no recorder attached, only the room state is tracked
        logger.info("Starting recording for room: %s", room_name)
        self.store.start_recording(room_name)
        return JsonResponse({"success": True, "message": "Recording started", "roomName": room_name})

    def stop_recording(self) -> JsonResponse:
        room_name = self.parameters.get("roomName", "")
        if not room_name:
            return self.bad_request("Room name is required")

        logger.info("Stopping recording for room: %s", room_name)
        self.store.stop_recording(room_name)
        return JsonResponse({"success": True, "message": "Recording stopped", "roomName": room_name})

    def recordings(self) -> JsonResponse:
        recordings = self.store.list_recordings(self.parameters.get("roomName", ""))
        return JsonResponse({"success": True, "recordings": [self.get_recording_dict(recording) for recording in recordings]})

    def delete_recording(self) -> JsonResponse:
        if not self.store.delete_recording(self.recording_id):
            return JsonResponse({"success": False, "error": "Recording not found"}, status=404)
        return JsonResponse({"success": True, "message": "Recording deleted", "recordID": self.recording_id})

    #### Own Routines ####
    def endpoint_delegation(self) -> JsonResponse:
        if self.body_error:
            return self.bad_request("Request body is not valid JSON")
        try:
            return self.ENDPOINTS[self.endpoint]["function"]()
        except Exception:
            logger.exception("Unexpected error in jitsi '%s' endpoint", self.endpoint)
            return JsonResponse({"success": False, "error": self.ENDPOINTS[self.endpoint]["error"]}, status=500)

    @staticmethod
    def bad_request(error: str) -> JsonResponse:
        return JsonResponse({"success": False, "error": error}, status=400)

    #### Class Routines ####
    def allowed_methods(self) -> List[str]:
        return self.ENDPOINTS[self.endpoint]["methods"]

    def is_allowed_endpoint(self) -> bool:
        if self.endpoint in self.ENDPOINTS:
            return True
        return False

    def is_allowed_method(self) -> bool:
        if self.request.method in self.allowed_methods():
            return True
        return False

    ## Getter Routines ##
    def get_duration(self) -> int:
        try:
            return int(self.parameters.get("duration") or 60)
        except (TypeError, ValueError):
            return 60

    def get_meeting_id(self) -> str:
        meeting_id = int(timezone.now().timestamp() * 1000)
        while str(meeting_id) in self.store.meetings:
            meeting_id += 1
        return str(meeting_id)

    def get_recording_dict(self, recording: JitsiRecording) -> Dict[str, Any]:
        return {
            "recordID": recording.id,
            "meetingID": recording.room_name,
            "name": recording.title,
            "published": True,
            "state": recording.status,
            "startTime": recording.start_time,
            "endTime": recording.end_time,
            "participants": recording.participants,
            "playbackUrl": self.request.build_absolute_uri(recording.url),
            "size": recording.size,
        }

    def get_url(self, room_name: str, display_name: str) -> str:
        return get_meeting_url(
            settings.CLASSROOM_JITSI_DOMAIN,
            room_name,
            display_name,
            start_with_video_muted=is_true(self.parameters.get("startWithVideoMuted", False)),
            start_with_audio_muted=is_true(self.parameters.get("startWithAudioMuted", False)),
            password=self.parameters.get("password"),
        )

    ## INIT ##
    def __init__(self, request: HttpRequest, endpoint: str, recording_id: str = ""):
        self.request = request
        self.endpoint = endpoint
        self.recording_id = recording_id
        self.body_error = False
        try:
            self.parameters = get_request_parameters(request)
        except ValueError:
            self.body_error = True
            self.parameters = {}

        self.store = apps.get_app_config("gateway").store
        self.ENDPOINTS = {
            "create-meeting": {"methods": ["POST"], "function": self.create_meeting, "error": "Failed to create meeting"},
            "join": {"methods": ["POST"], "function": self.join, "error": "Failed to generate join URL"},
            "meeting-info": {"methods": ["GET"], "function": self.meeting_info, "error": "Failed to get meeting info"},
            "meetings": {"methods": ["GET"], "function": self.meetings, "error": "Failed to get meetings"},
            "start-recording": {"methods": ["POST"], "function": self.start_recording, "error": "Failed to start recording"},
            "stop-recording": {"methods": ["POST"], "function": self.stop_recording, "error": "Failed to stop recording"},
            "recordings": {"methods": ["GET"], "function": self.recordings, "error": "Failed to get recordings"},
            "recording": {"methods": ["DELETE"], "function": self.delete_recording, "error": "Failed to delete recording"},
        }
