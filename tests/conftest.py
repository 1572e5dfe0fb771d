"""Pytest configuration and shared fixtures."""

import pytest

# Load environment variables from .env file at test startup
# so VSHELL_* settings are visible before fixtures are created
from dotenv import load_dotenv
load_dotenv()

pytest_plugins = [
    "tests.fixtures.sessions",
    "tests.fixtures.api",
]
