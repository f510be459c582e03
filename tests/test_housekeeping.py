"""
Tests for ending stale meetings.
"""

from datetime import timedelta
from gateway.task.housekeeping import end_stale_meetings
from requests.exceptions import ConnectionError
from unittest.mock import MagicMock, patch
from urllib.parse import parse_qs, urlparse
import gateway.bbb.utils as utils

ENDED = "<response><returncode>SUCCESS</returncode><messageKey>sentEndMeetingRequest</messageKey></response>"


def meetings_body(now: int) -> str:
    old = now - 13 * 3600 * 1000
    young = now - 3600 * 1000
    return (
        "<response><returncode>SUCCESS</returncode><meetings>"
        f"<meeting><meetingID>old</meetingID><meetingName>Old Lecture</meetingName><moderatorPW>secret</moderatorPW><startTime>{old}</startTime></meeting>"
        f"<meeting><meetingID>young</meetingID><meetingName>Young Lecture</meetingName><startTime>{young}</startTime></meeting>"
        "<meeting><meetingID>waiting</meetingID><meetingName>Not Started</meetingName><startTime>0</startTime></meeting>"
        "</meetings></response>"
    )


def response(text: str) -> MagicMock:
    return MagicMock(text=text)


def test_ends_only_stale_meetings(config):
    with patch("gateway.task.housekeeping.get", return_value=response(meetings_body(utils.now_ms()))) as get, \
            patch("gateway.task.housekeeping.post", return_value=response(ENDED)) as post:
        lines = end_stale_meetings(timedelta(hours=12), config=config)

    assert get.call_args.kwargs["timeout"] == config.request_timeout
    assert post.call_count == 1
    query = parse_qs(urlparse(post.call_args.args[0]).query)
    assert query["meetingID"] == ["old"]
    assert query["password"] == ["secret"]
    assert len(lines) == 1
    assert lines[0].startswith("Killing 'Old Lecture' running for")
    assert lines[0].endswith("=> SUCCESS")


def test_dry_run_does_not_end(config):
    with patch("gateway.task.housekeeping.get", return_value=response(meetings_body(utils.now_ms()))), \
            patch("gateway.task.housekeeping.post") as post:
        lines = end_stale_meetings(timedelta(hours=12), dry_run=True, config=config)
    post.assert_not_called()
    assert len(lines) == 1


def test_unreachable_server(config):
    with patch("gateway.task.housekeeping.get", side_effect=ConnectionError("refused")):
        lines = end_stale_meetings(timedelta(hours=12), config=config)
    assert lines[0].startswith("Failed to contact API endpoint")


def test_failed_listing(config):
    with patch("gateway.task.housekeeping.get", return_value=response("garbage")):
        lines = end_stale_meetings(timedelta(hours=12), config=config)
    assert lines == ["getMeetings failed: xmlParseError"]


def test_config_defaults_to_settings(settings):
    settings.CLASSROOM_BBB_SERVER_URL = "https://other.example.org/bigbluebutton"
    with patch("gateway.task.housekeeping.get", return_value=response("garbage")) as get:
        end_stale_meetings(timedelta(hours=12))
    assert get.call_args.args[0].startswith("https://other.example.org/bigbluebutton/api/getMeetings?checksum=")
