"""Tests for the structlog configuration helper."""

from __future__ import annotations

import logging

import pytest
import structlog

from fitbit_gateway.log import configure_logging


@pytest.fixture(autouse=True)
def reset_structlog():
    yield
    structlog.reset_defaults()


def test_configure_logging_accepts_level_names():
    configure_logging("debug")

    assert structlog.is_configured()


def test_configure_logging_accepts_numeric_levels():
    configure_logging(logging.WARNING)

    assert structlog.is_configured()


def test_configure_logging_rejects_unknown_level():
    with pytest.raises(ValueError):
        configure_logging("chatty")
