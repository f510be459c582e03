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

from django.conf import settings
from django.core.management.base import BaseCommand
from gateway.task.startup import initialize_sample_meetings


class Command(BaseCommand):
    help = 'Create the sample meetings on the BigBlueButton server.'

    def add_arguments(self, parser):
        parser.add_argument('--timeout', action='store', type=float, help='deadline in seconds', default=settings.CLASSROOM_STARTUP_INIT_TIMEOUT)

    def handle(self, *args, **options):
        self.stdout.write(initialize_sample_meetings(options['timeout']))
