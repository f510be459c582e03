"""
Tests for Jitsi room naming, url building and the Jitsi endpoints.
"""

from django.test import Client
from gateway.jitsi.utils import generate_room_name, get_meeting_url
import json
import pytest


@pytest.fixture
def client(gateway_settings, store) -> Client:
    return Client()


def post_json(client: Client, url: str, data: dict):
    return client.post(url, data=json.dumps(data), content_type="application/json")


@pytest.mark.parametrize("title,room_name", [
    ("Team Standup", "team-standup"),
    ("Math 101: Algebra & Geometry!", "math-101-algebra-geometry"),
    ("  Spaced    Out  ", "-spaced-out-"),
])
def test_generate_room_name(title, room_name):
    assert generate_room_name(title) == room_name


def test_room_name_is_truncated():
    assert len(generate_room_name("a" * 80)) == 50


def test_meeting_url_without_options():
    assert get_meeting_url("meet.example.org", "team-standup") == "https://meet.example.org/team-standup"


def test_meeting_url_with_options():
    url = get_meeting_url("meet.example.org", "team-standup", "Ada Lovelace", start_with_video_muted=True, password="secret")
    assert url == "https://meet.example.org/team-standup?userInfo.displayName=Ada+Lovelace&config.startWithVideoMuted=true&config.roomPassword=secret"


def test_create_meeting(client, store):
    response = post_json(client, "/api/jitsi/create-meeting", {"title": "Team Standup"})
    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["meeting"]["roomName"] == "team-standup"
    assert data["meeting"]["url"] == "https://meet.example.org/team-standup"
    assert store.find_meeting("team-standup").title == "Team Standup"


def test_create_meeting_ids_are_unique(client, store):
    first = post_json(client, "/api/jitsi/create-meeting", {"title": "One"}).json()
    second = post_json(client, "/api/jitsi/create-meeting", {"title": "Two"}).json()
    assert first["meeting"]["id"] != second["meeting"]["id"]
    assert len(store.list_meetings()) == 2


def test_create_meeting_requires_title(client):
    response = post_json(client, "/api/jitsi/create-meeting", {})
    assert response.status_code == 400
    assert response.json() == {"success": False, "error": "Meeting title is required"}


def test_join(client, store):
    post_json(client, "/api/jitsi/create-meeting", {"title": "Team Standup"})
    response = post_json(client, "/api/jitsi/join", {"roomName": "team-standup", "displayName": "Ada", "startWithAudioMuted": True})
    data = response.json()
    assert data["success"] is True
    assert data["joinUrl"] == "https://meet.example.org/team-standup?userInfo.displayName=Ada&config.startWithAudioMuted=true"
    assert store.find_meeting("team-standup").participants == ["Ada"]


def test_join_requires_names(client):
    response = post_json(client, "/api/jitsi/join", {"roomName": "team-standup"})
    assert response.status_code == 400
    assert response.json()["error"] == "Room name and display name are required"


def test_meeting_info(client):
    post_json(client, "/api/jitsi/create-meeting", {"title": "Team Standup"})
    post_json(client, "/api/jitsi/join", {"roomName": "team-standup", "displayName": "Ada"})
    data = client.get("/api/jitsi/meeting-info", {"roomName": "team-standup"}).json()
    assert data["participantCount"] == 1
    assert data["isActive"] is True
    assert data["isRecording"] is False


def test_meeting_info_unknown_room(client):
    data = client.get("/api/jitsi/meeting-info", {"roomName": "nowhere"}).json()
    assert data == {"success": True, "roomName": "nowhere", "participantCount": 0, "isRecording": False, "isActive": False}


def test_meeting_info_requires_room(client):
    response = client.get("/api/jitsi/meeting-info")
    assert response.status_code == 400
    assert response.json()["error"] == "Room name is required"


def test_meetings(client):
    post_json(client, "/api/jitsi/create-meeting", {"title": "Team Standup"})
    meetings = client.get("/api/jitsi/meetings").json()["meetings"]
    assert [meeting["roomName"] for meeting in meetings] == ["team-standup"]


def test_recording_lifecycle(client, store):
    post_json(client, "/api/jitsi/create-meeting", {"title": "Team Standup"})
    assert post_json(client, "/api/jitsi/start-recording", {"roomName": "team-standup"}).json()["message"] == "Recording started"
    assert store.find_meeting("team-standup").is_recording is True

    assert post_json(client, "/api/jitsi/stop-recording", {"roomName": "team-standup"}).json()["message"] == "Recording stopped"
    recordings = client.get("/api/jitsi/recordings").json()["recordings"]
    assert len(recordings) == 1
    recording = recordings[0]
    assert recording["meetingID"] == "team-standup"
    assert recording["state"] == "completed"
    assert recording["playbackUrl"].startswith("http://testserver/recordings/team-standup_")

    response = client.delete(f"/api/jitsi/recordings/{recording['recordID']}")
    assert response.json()["success"] is True
    assert client.get("/api/jitsi/recordings").json()["recordings"] == []


def test_delete_unknown_recording(client):
    response = client.delete("/api/jitsi/recordings/12345")
    assert response.status_code == 404


def test_recordings_filtered_by_room(client):
    for title in ("One", "Two"):
        post_json(client, "/api/jitsi/create-meeting", {"title": title})
        post_json(client, "/api/jitsi/stop-recording", {"roomName": title.lower()})
    recordings = client.get("/api/jitsi/recordings", {"roomName": "two"}).json()["recordings"]
    assert [recording["meetingID"] for recording in recordings] == ["two"]


def test_wrong_method(client):
    response = client.get("/api/jitsi/create-meeting")
    assert response.status_code == 405
    assert response["Allow"] == "POST"
    assert response.json()["success"] is False


def test_unknown_endpoint(client):
    assert client.get("/api/jitsi/unknown").status_code == 404


def test_recording_file_download(client, store, tmp_path):
    (tmp_path / "room_1.mp4").write_bytes(b"video")
    response = client.get("/recordings/room_1.mp4")
    assert response.status_code == 200
    assert b"".join(response.streaming_content) == b"video"


def test_recording_file_missing(client):
    response = client.get("/recordings/missing.mp4")
    assert response.status_code == 404
    assert response.json() == {"error": "Recording not found"}


def test_recording_file_wrong_method(client):
    response = client.post("/recordings/x.mp4")
    assert response.status_code == 405
    assert response["Allow"] == "GET"
    assert response["Content-Type"] == "application/json"
    assert "error" in response.json()
