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
from django.http import FileResponse, HttpRequest, HttpResponse, JsonResponse
from django.utils import timezone
from django.views.decorators.csrf import csrf_exempt
from gateway.classes.api import ClientGatewayRequest, JitsiRequest, method_not_allowed
from os.path import basename, isfile
import gateway.bbb.constants as cst


async def bbb_entrypoint(request: HttpRequest, endpoint: str = "") -> HttpResponse:
    """
    Entrypoint for the BigBlueButton API proxy endpoints.
    """
    gateway = ClientGatewayRequest(request, endpoint)

    if not gateway.is_allowed_endpoint():
        return JsonResponse({"returncode": cst.FAILED, "messageKey": "unsupportedRequest", "message": "This request is not supported."}, status=404)

    # async: workaround for @require_http_methods decorator
    if not gateway.is_allowed_method():
        return method_not_allowed(gateway.allowed_methods(), {"returncode": cst.FAILED, "messageKey": "methodNotAllowed", "message": f"Method {request.method} not allowed"})
    return await gateway.endpoint_delegation()

# async: workaround for @csrf_exempt decorator
bbb_entrypoint.csrf_exempt = True


@csrf_exempt
def jitsi_entrypoint(request: HttpRequest, endpoint: str = "", recording_id: str = "") -> HttpResponse:
    """
    Entrypoint for the Jitsi Meet room endpoints.
    """
    jitsi = JitsiRequest(request, endpoint, recording_id)

    if not jitsi.is_allowed_endpoint():
        return JsonResponse({"success": False, "error": "Endpoint not found"}, status=404)

    if not jitsi.is_allowed_method():
        return method_not_allowed(jitsi.allowed_methods(), {"success": False, "error": f"Method {request.method} not allowed"})
    return jitsi.endpoint_delegation()


@csrf_exempt
def recording_file(request: HttpRequest, file_name: str = "") -> HttpResponse:
    """
    Endpoint for downloading recording video files.
    No security, file names are only known from the recordings list.
    """
    if request.method != "GET":
        return method_not_allowed(["GET"], {"error": f"Method {request.method} not allowed"})

    store = apps.get_app_config("gateway").store
    if not file_name or basename(file_name) != file_name:
        return JsonResponse({"error": "Recording not found"}, status=404)

    path = store.get_file_path(file_name)
    if not isfile(path):
        return JsonResponse({"error": "Recording not found"}, status=404)
    return FileResponse(open(path, "rb"), as_attachment=True, filename=file_name)


@csrf_exempt
def health(request: HttpRequest) -> HttpResponse:
    # health check for monitoring, no outbound calls
    if request.method != "GET":
        return method_not_allowed(["GET"], {"status": "error", "error": f"Method {request.method} not allowed"})

    return JsonResponse({
        "status": "healthy",
        "service": "Jitsi Meet Integration",
        "timestamp": timezone.now().isoformat(),
        "domain": settings.CLASSROOM_JITSI_DOMAIN,
    })
