"""
Canned conferencing server answers and connection data shared by the tests.
"""

SERVER_URL = "https://bbb.example.org/bigbluebutton"
API_SECRET = "testsecret"


def xml(body: str) -> str:
    return f"<response>{body}</response>"


NOT_FOUND = xml("<returncode>FAILED</returncode><messageKey>notFound</messageKey><message>A meeting with that ID does not exist</message>")
DUPLICATE = xml("<returncode>FAILED</returncode><messageKey>duplicateWarning</messageKey><message>This conference was already in existence</message>")
CREATED = xml("<returncode>SUCCESS</returncode><meetingID>42</meetingID><attendeePW>ap</attendeePW><moderatorPW>mp</moderatorPW>")
RUNNING = xml("<returncode>SUCCESS</returncode><meetingID>42</meetingID><meetingName>Meeting 42</meetingName><running>true</running><participantCount>3</participantCount><moderatorCount>1</moderatorCount>")
