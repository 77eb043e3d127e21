"""Test configuration and fixtures."""

import logfire
import pytest


@pytest.fixture(scope="session", autouse=True)
def quiet_logfire():
    """Configure Logfire once, with no console output and no cloud sending."""
    logfire.configure(send_to_logfire=False, console=False)
