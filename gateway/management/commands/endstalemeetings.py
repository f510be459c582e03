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

from datetime import timedelta
from django.conf import settings
from django.core.management.base import BaseCommand
from gateway.task.housekeeping import end_stale_meetings


class Command(BaseCommand):
    help = 'End meetings running longer than the given number of hours.'

    def add_arguments(self, parser):
        parser.add_argument('--hours', action='store', type=int, help='maximum meeting age in hours', default=settings.CLASSROOM_STALE_MEETING_HOURS)
        parser.add_argument('--dry-run', action='store_true', help='only list stale meetings')

    def handle(self, *args, **options):
        lines = end_stale_meetings(timedelta(hours=options['hours']), dry_run=options['dry_run'])
        if not lines:
            self.stdout.write("No stale meetings found.")
        for line in lines:
            self.stdout.write(line)
