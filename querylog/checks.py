from django.conf import settings
from django.core.checks import Error
from django.utils.module_loading import import_string


def check_querylog_settings(app_configs, **kwargs):
    errors = []
    try:
        import_string(settings.QUERYLOG_ADAPTER)
    except ImportError as e:
        errors.append(
            Error(
                f"QUERYLOG_ADAPTER “{settings.QUERYLOG_ADAPTER}” cannot be imported: {e}",
                hint="Point it to a database adapter class taking a Django connection.",
                id="querylog.E001",
            )
        )
    if settings.QUERYLOG_DATABASE not in settings.DATABASES:
        errors.append(
            Error(
                f"QUERYLOG_DATABASE “{settings.QUERYLOG_DATABASE}” is not a configured database.",
                hint=f"Use one of {', '.join(sorted(settings.DATABASES))}.",
                id="querylog.E002",
            )
        )
    return errors
