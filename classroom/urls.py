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

from django.urls import path, re_path
from gateway import views

urlpatterns = [
    re_path(r'^api/jitsi/recordings/(?P<recording_id>[0-9a-zA-Z_-]+)$', views.jitsi_entrypoint, {"endpoint": "recording"}),
    re_path(r'^api/jitsi/(?P<endpoint>[a-z-]+)$', views.jitsi_entrypoint),
    re_path(r'^api/(?P<endpoint>[0-9a-zA-Z]+)$', views.bbb_entrypoint),
    re_path(r'^recordings/(?P<file_name>[^/]+)$', views.recording_file),
    path('health', views.health),
]
