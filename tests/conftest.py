"""Pytest configuration and shared fixtures."""

# Load environment variables from .env file at test startup
from dotenv import load_dotenv
load_dotenv()

# Import all fixtures from the fixture modules
pytest_plugins = [
    "tests.fixtures.core.clocks",
    "tests.fixtures.core.transports",
    "tests.fixtures.core.filesystems",
    "tests.fixtures.api",
]
