import pytest

from jqgrid_widget.widget import JqGridWidget


@pytest.fixture
def get_request(rf):
    return rf.get("/")


@pytest.fixture
def widget_factory():
    """Build widgets with a fixed id and request url so scripts are predictable"""

    def _factory(**kwargs):
        kwargs.setdefault("widget_id", "grid")
        kwargs.setdefault("request_url", "/grid/")
        return JqGridWidget(**kwargs)

    return _factory
