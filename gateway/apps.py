from django.apps import AppConfig
from django.conf import settings


class GatewayAppConfig(AppConfig):
    name = "gateway"
    verbose_name = "Conferencing Gateway"

    def ready(self):
        from gateway.store import DemoStore
        # process wide demo registry, handed to the jitsi request handlers
        self.store = DemoStore(settings.CLASSROOM_RECORDINGS_DIR)
