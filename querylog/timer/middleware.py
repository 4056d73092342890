import logging

from django.conf import settings
from django.core.exceptions import MiddlewareNotUsed
from django.db import connections
from django.utils.module_loading import import_string

from querylog.proxy import DatabaseProxy
from querylog.timer import infos


logger = logging.getLogger(__name__)


class QueryLogMiddleware:
    """
    Give each request its own `DatabaseProxy`, available as `request.database`,
    and report the queries it ran once the response is built.
    """

    def __init__(self, get_response=None):
        if not settings.QUERYLOG_ENABLED:
            raise MiddlewareNotUsed
        self.get_response = get_response
        self.adapter_class = import_string(settings.QUERYLOG_ADAPTER)

    def __call__(self, request):
        proxy = DatabaseProxy(self.adapter_class(connections[settings.QUERYLOG_DATABASE]))
        infos.reinit(proxy)
        request.database = proxy
        response = self.get_response(request)
        self.report(request, response, proxy.get_queries())
        return response

    def report(self, request, response, queries):
        for entry in queries:
            if entry.duration >= settings.QUERYLOG_SLOW_QUERY_MS:
                logger.warning("Slow query on %s (%.2fms): %s", request.path, entry.duration, entry.query)
        total = round(sum(entry.duration for entry in queries), 2)
        logger.debug("%s ran %d queries in %.2fms", request.path, len(queries), total)
        if settings.QUERYLOG_SERVER_TIMING:
            timing = f'db;dur={total};desc="{len(queries)} queries"'
            if existing := response.headers.get("Server-Timing"):
                timing = f"{existing}, {timing}"
            response.headers["Server-Timing"] = timing
