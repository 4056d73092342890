from django.apps import AppConfig
from django.core import checks


class QueryLogAppConfig(AppConfig):
    name = "querylog"
    verbose_name = "query log"

    def ready(self):
        from querylog.checks import check_querylog_settings

        checks.register(check_querylog_settings)
