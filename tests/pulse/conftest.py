import pytest

from soundsupervisor.pulse.config import SupervisorConfig
from tests.pulse.fakes import FakeExecutor


@pytest.fixture
def executor() -> FakeExecutor:
    return FakeExecutor()


@pytest.fixture
def fast_config() -> SupervisorConfig:
    return SupervisorConfig(probe_interval=0, poll_interval=0, max_retries=20)
