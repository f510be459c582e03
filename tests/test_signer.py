"""
Tests for checksum calculation and url signing.
"""

from gateway.bbb.signer import GatewayConfig, RequestSigner
from hashlib import sha1, sha256
import pytest

from tests.responses import API_SECRET, SERVER_URL


def test_sign_is_deterministic(config):
    signer = RequestSigner(config)
    parameters = {"meetingID": "1", "name": "Algebra"}
    assert signer.sign("create", parameters).checksum == signer.sign("create", parameters).checksum


def test_checksum_over_operation_query_and_secret(config):
    signed = RequestSigner(config).sign("getMeetingInfo", {"meetingID": "42"})
    assert signed.query_string == "meetingID=42"
    assert signed.checksum == sha1(f"getMeetingInfomeetingID=42{API_SECRET}".encode()).hexdigest()
    assert signed.url == f"{SERVER_URL}/api/getMeetingInfo?meetingID=42&checksum={signed.checksum}"


def test_unset_parameters_are_omitted(config):
    signed = RequestSigner(config).sign("create", {"meetingID": "1", "name": None, "record": False})
    assert signed.query_string == "meetingID=1&record=false"


def test_insertion_order_is_kept(config):
    signed = RequestSigner(config).sign("join", {"meetingID": "1", "fullName": "Ada Lovelace", "password": "ap"})
    assert signed.query_string == "meetingID=1&fullName=Ada+Lovelace&password=ap"


def test_asterisk_is_not_encoded(config):
    signed = RequestSigner(config).sign("create", {"name": "a*b"})
    assert signed.query_string == "name=a*b"


def test_empty_parameters(config):
    signed = RequestSigner(config).sign("getMeetings", {})
    assert signed.query_string == ""
    assert signed.url == f"{SERVER_URL}/api/getMeetings?checksum={sha1(f'getMeetings{API_SECRET}'.encode()).hexdigest()}"


def test_trailing_slash_is_stripped():
    config = GatewayConfig(server_base_url=f"{SERVER_URL}/", api_secret=API_SECRET)
    assert config.server_base_url == SERVER_URL


def test_other_algorithm():
    config = GatewayConfig(server_base_url=SERVER_URL, api_secret=API_SECRET, checksum_algorithm="sha256")
    signed = RequestSigner(config).sign("getMeetings", {})
    assert signed.checksum == sha256(f"getMeetings{API_SECRET}".encode()).hexdigest()


def test_unknown_algorithm():
    with pytest.raises(ValueError):
        GatewayConfig(server_base_url=SERVER_URL, api_secret=API_SECRET, checksum_algorithm="md5")
