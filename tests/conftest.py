import pytest

from querylog.backends.base import ADAPTER_METHODS
from querylog.timer import infos


@pytest.hookimpl(tryfirst=True)
def pytest_collection_modifyitems(config, items):
    """Automatically add pytest db marker if needed."""
    for item in items:
        markers = {marker.name for marker in item.iter_markers()}
        if "no_django_db" not in markers and "django_db" not in markers:
            item.add_marker(pytest.mark.django_db)


@pytest.fixture
def mock_adapter(mocker):
    return mocker.Mock(spec=sorted(ADAPTER_METHODS))


@pytest.fixture(autouse=True)
def reset_current_proxy():
    infos.reinit()
    yield
    infos.reinit()
