"""Test configuration and fixtures for the product catalog."""

import os
from pathlib import Path

os.environ.setdefault("APP_ENVIRONMENT", "test")
os.environ.setdefault("CONFIG_FILE", str(Path(__file__).resolve().parent.parent / "config.yaml"))

from tests.fixtures import *  # noqa: E402,F401,F403
