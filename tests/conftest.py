import pytest

from restwebapp.client import DataService
from restwebapp.config import AppConfig

from .helpers import FakeSession


@pytest.fixture
def config() -> AppConfig:
    return AppConfig()


@pytest.fixture
def make_service(config):
    def _make(*outcomes, **kwargs) -> DataService:
        return DataService.from_config(config, session=FakeSession(*outcomes), **kwargs)

    return _make
