import pytest

from chatmd import prefs
from chatmd import heights  # noqa: F401


@pytest.fixture(autouse=True)
def _reset_prefs():
    """Preferences are process-wide; put them back after every test."""
    yield
    for pref in prefs.registered():
        pref.reset()
