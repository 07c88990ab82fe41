from django.apps import AppConfig


class ReportsConfig(AppConfig):
    name = "modules.reports"
    label = "reports"
