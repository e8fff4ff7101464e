"""
Pytest Configuration and Fixtures
==================================
Shared test fixtures for HakooLab tests.
"""

import os
import sys
import tempfile
from pathlib import Path

import pytest
from sqlalchemy.orm import sessionmaker

# Add project root to path
project_dir = Path(__file__).parent.parent
sys.path.insert(0, str(project_dir))

# Point the app at a throwaway database before anything imports the models
_db_dir = tempfile.mkdtemp(prefix="hakoolab-test-")
os.environ["HAKOOLAB_DATABASE_URL"] = f"sqlite:///{Path(_db_dir) / 'api.db'}"
os.environ["HAKOOLAB_LOCALE"] = "en"
os.environ["HAKOOLAB_LOG_TO_FILE"] = "false"

from hakoolab.core.config import reset_settings  # noqa: E402

reset_settings()

from fastapi.testclient import TestClient  # noqa: E402

from hakoolab.main import app  # noqa: E402
from hakoolab.models import make_engine, init_db  # noqa: E402


@pytest.fixture
def client():
    """FastAPI test client fixture."""
    with TestClient(app) as client:
        yield client


@pytest.fixture
def session_factory(tmp_path):
    """Session factory bound to a fresh SQLite file per test."""
    engine = make_engine(f"sqlite:///{tmp_path / 'test.db'}")
    init_db(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


@pytest.fixture
def sample_water():
    """Sample water analysis for the stability indices."""
    return {
        "ph": 7.8,
        "t_c": 25,
        "tds_mgl": 500,
        "ca_mgl": 120,
        "alk_mgl": 100,
    }
