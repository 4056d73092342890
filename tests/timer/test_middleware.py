import logging

import pytest
from django.core.exceptions import MiddlewareNotUsed
from django.db import connections
from django.http import HttpResponse

from querylog.proxy import DatabaseProxy
from querylog.timer import infos
from querylog.timer.middleware import QueryLogMiddleware


class FakeAdapter:
    def __init__(self, connection):
        self.connection = connection

    def query(self, sql, error_level):
        return [(1,)]


def run_two_queries(request):
    request.database.query("SELECT pg_sleep(0.25)")
    request.database.query("SELECT 1")
    return HttpResponse("ok")


@pytest.fixture(autouse=True)
def fake_adapter(settings):
    settings.QUERYLOG_ADAPTER = "tests.timer.test_middleware.FakeAdapter"


@pytest.fixture
def perf_counter(mocker):
    return mocker.patch("querylog.proxy.time.perf_counter", side_effect=[0.0, 0.25, 1.0, 1.001])


def test_request_gets_its_own_proxy(rf):
    proxies = []

    def view(request):
        assert isinstance(request.database, DatabaseProxy)
        assert isinstance(request.database.real_conn, FakeAdapter)
        assert infos.get_current_proxy() is request.database
        proxies.append(request.database)
        return HttpResponse("ok")

    middleware = QueryLogMiddleware(view)
    middleware(rf.get("/"))
    middleware(rf.get("/"))

    first, second = proxies
    assert first is not second


def test_proxy_wraps_configured_database(rf, settings):
    settings.QUERYLOG_DATABASE = "default"

    def view(request):
        assert request.database.real_conn.connection is connections["default"]
        return HttpResponse("ok")

    QueryLogMiddleware(view)(rf.get("/"))


def test_server_timing_header(rf, perf_counter):
    response = QueryLogMiddleware(run_two_queries)(rf.get("/"))

    assert response.headers["Server-Timing"] == 'db;dur=251.0;desc="2 queries"'
    assert infos.get_current_timing_info() == {"count": 2, "duration": 251.0}


def test_server_timing_header_keeps_view_metrics(rf, perf_counter):
    def view(request):
        response = run_two_queries(request)
        response.headers["Server-Timing"] = "app;dur=3"
        return response

    response = QueryLogMiddleware(view)(rf.get("/"))

    assert response.headers["Server-Timing"] == 'app;dur=3, db;dur=251.0;desc="2 queries"'


def test_server_timing_disabled(rf, settings):
    settings.QUERYLOG_SERVER_TIMING = False

    response = QueryLogMiddleware(run_two_queries)(rf.get("/"))

    assert "Server-Timing" not in response.headers


def test_slow_queries_are_logged(rf, settings, perf_counter, caplog):
    settings.QUERYLOG_SLOW_QUERY_MS = 100
    caplog.set_level(logging.DEBUG, logger="querylog")

    QueryLogMiddleware(run_two_queries)(rf.get("/dashboard/"))

    messages = [
        (record.levelno, record.getMessage())
        for record in caplog.records
        if record.name == "querylog.timer.middleware"
    ]
    assert messages == [
        (logging.WARNING, "Slow query on /dashboard/ (250.00ms): SELECT pg_sleep(0.25)"),
        (logging.DEBUG, "/dashboard/ ran 2 queries in 251.00ms"),
    ]


def test_no_query(rf):
    response = QueryLogMiddleware(lambda request: HttpResponse("ok"))(rf.get("/"))

    assert response.headers["Server-Timing"] == 'db;dur=0;desc="0 queries"'


def test_disabled(settings):
    settings.QUERYLOG_ENABLED = False

    with pytest.raises(MiddlewareNotUsed):
        QueryLogMiddleware(run_two_queries)


def test_bad_adapter(settings):
    settings.QUERYLOG_ADAPTER = "querylog.backends.does_not_exist.Adapter"

    with pytest.raises(ImportError):
        QueryLogMiddleware(run_two_queries)
