# tests/api/conftest.py
import pytest
import sys
import os
from pathlib import Path

# Add project root to sys.path
project_root = Path(__file__).parents[2]
sys.path.insert(0, str(project_root))

# Set test environment variables (read when api.utils.config is imported)
os.environ["ENVIRONMENT"] = "development"
os.environ["DEBUG"] = "true"
os.environ["MAX_SESSIONS"] = "5"


@pytest.fixture(autouse=True)
def clean_session_store():
    """Start every API test with an empty design store."""
    from api.utils.sessions import session_store
    session_store.clear()
    yield session_store
    session_store.clear()
