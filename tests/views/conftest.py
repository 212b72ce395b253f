# Purpose: Pytest fixtures shared across view tests.

import os
import sys

import pytest

# Add project root to sys.path if necessary, depending on test runner setup
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '../..'))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from app import create_app


@pytest.fixture(scope="function")
def app(tmp_path):
    """Creates and configures a new app instance for each test function."""
    instance_path = tmp_path / "instance"
    app = create_app(
        test_config={
            "TESTING": True,
            "SECRET_KEY": "test_secret_key",
            "PROPAGATE_EXCEPTIONS": True,
        },
        instance_path=str(instance_path),
    )
    yield app


@pytest.fixture
def client(app):
    return app.test_client()
