"""Shared pytest fixtures for the data layer tests."""

from .core import *  # noqa: F401,F403
