from django.apps import AppConfig


class NotificationsConfig(AppConfig):
    name = "modules.notifications"
    label = "notifications"

    def ready(self) -> None:
        from modules.notifications.handlers import HANDLERS
        from shared.infrastructure.bus import event_bus

        for event_class, handler in HANDLERS:
            event_bus.subscribe(event_class, handler)
