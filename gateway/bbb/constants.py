from hashlib import sha1, sha256, sha384, sha512
from typing import Any, Dict

#
# CONSTANTS
#
CONTENT_TYPE = "application/json"

SUCCESS = "SUCCESS"
FAILED = "FAILED"
TIMEOUT = "TIMEOUT"

MESSAGE_KEY_DUPLICATE_WARNING = "duplicateWarning"
MESSAGE_KEY_INTERNAL_ERROR = "internalError"
MESSAGE_KEY_MISSING_FULL_NAME = "missingParamFullName"
MESSAGE_KEY_MISSING_MEETING_ID = "missingParamMeetingID"
MESSAGE_KEY_NOT_FOUND = "notFound"
MESSAGE_KEY_XML_PARSE_ERROR = "xmlParseError"

MESSAGE_DUPLICATE_MEETING = "Meeting already exists and is ready to join"
MESSAGE_INTERNAL_ERROR = "Internal server error"
MESSAGE_MISSING_FULL_NAME = "You must specify a full name for the attendee."
MESSAGE_MISSING_MEETING_ID = "You must specify a meeting ID for the meeting."
MESSAGE_XML_PARSE_ERROR = "Failed to parse XML response"

RETURN_INTERNAL_ERROR = {"returncode": FAILED, "messageKey": MESSAGE_KEY_INTERNAL_ERROR, "message": MESSAGE_INTERNAL_ERROR}
RETURN_MISSING_FULL_NAME = {"returncode": FAILED, "messageKey": MESSAGE_KEY_MISSING_FULL_NAME, "message": MESSAGE_MISSING_FULL_NAME}
RETURN_MISSING_MEETING_ID = {"returncode": FAILED, "messageKey": MESSAGE_KEY_MISSING_MEETING_ID, "message": MESSAGE_MISSING_MEETING_ID}

# defaults of the inbound create endpoint
CREATE_DEFAULTS: Dict[str, Any] = {
    "attendeePW": "ap",
    "moderatorPW": "mp",
    "welcome": "Welcome to the meeting!",
    "record": False,
    "duration": 0,
    "maxParticipants": 20,
}

# defaults of meetings created on demand for join and getMeetingInfo
AUTO_CREATE_ATTENDEE_PW = "ap"
AUTO_CREATE_MODERATOR_PW = "mp"
AUTO_CREATE_DURATION = 120
AUTO_CREATE_MAX_PARTICIPANTS = 50
AUTO_CREATE_NAME = "Meeting {}"
AUTO_CREATE_WELCOME = "Welcome to Meeting {}!"

SAMPLE_MEETINGS: Dict[str, Dict[str, str]] = {
    "2": {
        "name": "React Hooks Deep Dive",
        "welcome": "Welcome to React Hooks Deep Dive! Advanced concepts in React hooks and state management.",
    },
}

# approximations for getMeetingInfo fields not read from the server payload
DEFAULT_ATTENDEE_PW = "ap"
DEFAULT_MODERATOR_PW = "mp"
DEFAULT_MAX_USERS = 20
START_TIME_OFFSET_MS = 300000

SHA1 = "sha1"
SHA256 = "sha256"
SHA384 = "sha384"
SHA512 = "sha512"
SHA_BY_STRING = {SHA1: sha1, SHA256: sha256, SHA384: sha384, SHA512: sha512}

# symbols not to be encoded to match bbb's checksum calculation
SAFE_QUOTE_SYMBOLS = "*"

# optional parameters forwarded to the conferencing server
PARAMETERS_CREATE = ["logoutURL", "dialNumber", "voiceBridge", "isBreakout", "parentMeetingID", "sequence", "freeJoin", "moderatorOnlyMessage", "bannerText"]
PARAMETERS_JOIN = ["createTime", "userID", "webVoiceConf", "configToken", "defaultLayout", "avatarURL", "clientURL", "joinViaHtml5", "guest", "role"]
META_PARAMETER_PREFIX = "meta_"

MESSAGE_KEY_INVALID_BODY = "invalidBody"
MESSAGE_INVALID_BODY = "Request body is not valid JSON"
RETURN_INVALID_BODY = {"returncode": FAILED, "messageKey": MESSAGE_KEY_INVALID_BODY, "message": MESSAGE_INVALID_BODY}
