import sys
from pathlib import Path

# Ensure `src` is on sys.path for tests when the package is not installed editable.
SRC = Path(__file__).resolve().parent.parent / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

import pytest  # noqa: E402

from salesforce_fieldmap.config import get_settings  # noqa: E402


@pytest.fixture(autouse=True)
def _fresh_settings():
    # Settings are cached; tests that tweak the environment must not leak.
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
