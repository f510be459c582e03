import environ

# reading .env file
env = environ.Env()
environ.Env.read_env(env.str('ENV_FILE', default='.env'))


######
# EduGate BigBlueButton Settings
######

CLASSROOM_BBB_SERVER_URL = env.str('CLASSROOM_BBB_SERVER_URL', default='https://test-install.blindsidenetworks.com/bigbluebutton')
CLASSROOM_BBB_API_SECRET = env.str('CLASSROOM_BBB_API_SECRET', default='8cd8ef52e8e101574e400365b55e11a6')
CLASSROOM_BBB_CHECKSUM_ALGORITHM = env.str('CLASSROOM_BBB_CHECKSUM_ALGORITHM', default='sha1')
CLASSROOM_BBB_REQUEST_TIMEOUT = env.float('CLASSROOM_BBB_REQUEST_TIMEOUT', default=10.0)

# best effort warm up of the sample meetings
CLASSROOM_INIT_SAMPLE_MEETINGS = env.bool('CLASSROOM_INIT_SAMPLE_MEETINGS', default=False)
CLASSROOM_SAMPLE_INIT_TIMEOUT = env.float('CLASSROOM_SAMPLE_INIT_TIMEOUT', default=5.0)
CLASSROOM_STARTUP_INIT_TIMEOUT = env.float('CLASSROOM_STARTUP_INIT_TIMEOUT', default=8.0)

CLASSROOM_STALE_MEETING_HOURS = env.int('CLASSROOM_STALE_MEETING_HOURS', default=12)

######
# EduGate Jitsi Meet Settings
######

CLASSROOM_JITSI_DOMAIN = env.str('CLASSROOM_JITSI_DOMAIN', default='meet.jit.si')
CLASSROOM_RECORDINGS_DIR = env.path('CLASSROOM_RECORDINGS_DIR', default='recordings').root

######
# EduGate Celery Settings
######

CLASSROOM_TASK_QUEUE = env.str('CLASSROOM_TASK_QUEUE', default='edugate')
CELERY_BROKER_URL = env.str('CELERY_BROKER_URL', default='redis://localhost:6379/0')

CLASSROOM_LOG_LEVEL = env.str('CLASSROOM_LOG_LEVEL', default='INFO')
