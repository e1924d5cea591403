"""Root pytest configuration.

Test Structure:
    tests/
    ├── unit/              # Fast, isolated tests with mocked collaborators
    └── integration/       # SQLite-backed repository and HTTP API tests

Environment Variables:
    Values from config/.env.dev (or config/.env) are loaded before the
    settings cache is cleared, the same way local development works.
"""

from pathlib import Path

import pytest
from dotenv import load_dotenv

from taskapi_config import clear_settings_cache

PROJECT_ROOT = Path(__file__).resolve().parents[1]

# Load .env.dev for tests (same as local development)
CONFIG_DIR = PROJECT_ROOT / "config"
if (CONFIG_DIR / ".env.dev").exists():
    load_dotenv(CONFIG_DIR / ".env.dev")
elif (CONFIG_DIR / ".env").exists():
    load_dotenv(CONFIG_DIR / ".env")


@pytest.fixture(scope="session", autouse=True)
def configure_app_settings():
    """Start and end the test session with an empty settings cache."""
    clear_settings_cache()
    yield
    clear_settings_cache()
