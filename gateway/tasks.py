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

from celery.signals import worker_ready
from celery.utils.log import get_task_logger
from classroom.celery import app
from datetime import timedelta
from django.conf import settings
from gateway.task.housekeeping import end_stale_meetings
from gateway.task.startup import initialize_sample_meetings


logger = get_task_logger(__name__)


@app.task(name="Initialize Sample Meetings", ignore_result=True, queue=settings.CLASSROOM_TASK_QUEUE)
def init_sample_meetings():
    """
    Best effort creation of the sample meetings.
    """
    outcome = initialize_sample_meetings()
    logger.info(outcome)
    return outcome


@app.task(name="End Stale Meetings", ignore_result=True, queue=settings.CLASSROOM_TASK_QUEUE)
def housekeeping_meetings():
    """
    End meetings running longer than CLASSROOM_STALE_MEETING_HOURS.
    """
    lines = end_stale_meetings(timedelta(hours=settings.CLASSROOM_STALE_MEETING_HOURS))
    for line in lines:
        logger.info(line)
    return f"Processed {len(lines)} stale meetings."


@worker_ready.connect
def init_sample_meetings_on_startup(sender=None, **kwargs):
    if settings.CLASSROOM_INIT_SAMPLE_MEETINGS:
        init_sample_meetings.si().apply_async()
