import logging
import os
import pytest
from satclip.config import get_settings

def pytest_configure():
    # el entorno del desarrollador no debe filtrarse a los tests
    for k in list(os.environ):
        if k.startswith("SATCLIP_"):
            del os.environ[k]

@pytest.fixture(autouse=True)
def _reset_settings_cache():
    # evita fuga de estado entre tests
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()

@pytest.fixture(autouse=True)
def _reset_satclip_logger():
    yield
    lg = logging.getLogger("satclip")
    lg.handlers.clear()
    lg.propagate = True
    lg.setLevel(logging.NOTSET)

def pytest_collection_modifyitems(items):
    for item in items:
        if "integration" in item.keywords and os.environ.get("CI") == "true":
            item.add_marker(pytest.mark.slow)
