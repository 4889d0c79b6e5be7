import pytest

from tests.fakes import FakeNotifier, FakeProgressHost, FakeQuickInputHost


# Fixture: isolate_projectkit_home
# Every test gets its own settings directory
@pytest.fixture(autouse=True, scope="function")
def isolate_projectkit_home(tmp_path, monkeypatch):
    """Point PROJECTKIT_HOME at a temporary directory."""
    home = tmp_path / "projectkit_home"
    monkeypatch.setenv("PROJECTKIT_HOME", str(home))
    return home


@pytest.fixture
def quick_input_host():
    return FakeQuickInputHost()


@pytest.fixture
def progress_host():
    return FakeProgressHost()


@pytest.fixture
def notifier():
    return FakeNotifier()
