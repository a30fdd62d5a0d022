"""Shared pytest fixtures."""

import pytest

from nano_banana import Settings
from tests.helpers import ENDPOINT


@pytest.fixture
def settings(tmp_path) -> Settings:
    """Settings isolated from the environment and the user's home directory."""
    return Settings(
        api_endpoint=ENDPOINT,
        model_id="google/gemini-2.5-flash-image-preview",
        max_retries=5,
        request_timeout=10.0,
        storage_path=tmp_path / "config.db",
        encryption_key="",
    )
