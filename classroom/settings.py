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

from classroom.constants import *  # noqa: F401,F403
from classroom.constants import env, CLASSROOM_LOG_LEVEL, CLASSROOM_TASK_QUEUE


SECRET_KEY = env.str('DJANGO_SECRET_KEY', default='insecure-edugate-development-key')
DEBUG = env.bool('DJANGO_DEBUG', default=False)
ALLOWED_HOSTS = env.list('DJANGO_ALLOWED_HOSTS', default=['*'])

INSTALLED_APPS = [
    'gateway.apps.GatewayAppConfig',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'django.middleware.common.CommonMiddleware',
]

ROOT_URLCONF = 'classroom.urls'
ASGI_APPLICATION = 'classroom.asgi.application'

# no persistent state, meetings live on the conferencing server
DATABASES = {}

LANGUAGE_CODE = 'en-us'
TIME_ZONE = 'UTC'
USE_I18N = False
USE_TZ = True

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'simple': {
            'format': '{asctime} {levelname} {name}: {message}',
            'style': '{',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'simple',
        },
    },
    'loggers': {
        'gateway': {
            'handlers': ['console'],
            'level': CLASSROOM_LOG_LEVEL,
        },
    },
}

CELERY_TASK_DEFAULT_QUEUE = CLASSROOM_TASK_QUEUE
