import pytest

from querylog.proxy import DatabaseProxy
from querylog.timer import infos


pytestmark = pytest.mark.no_django_db


def test_no_current_proxy():
    assert infos.get_current_proxy() is None
    assert infos.get_current_timing_info() is None


def test_timing_info(mock_adapter, mocker):
    mocker.patch("querylog.proxy.time.perf_counter", side_effect=[0.0, 0.0015, 1.0, 1.002])
    proxy = DatabaseProxy(mock_adapter)
    infos.reinit(proxy)

    assert infos.get_current_timing_info() == {"count": 0, "duration": 0}

    proxy.query("SELECT 1")
    proxy.prepared_query("SELECT %s", [2])

    assert infos.get_current_proxy() is proxy
    assert infos.get_current_timing_info() == {"count": 2, "duration": 3.5}

    infos.reinit()
    assert infos.get_current_timing_info() is None
