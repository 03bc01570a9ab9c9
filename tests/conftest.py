import pytest

from fixed_literal.internals import config


@pytest.fixture
def safe_mode(monkeypatch):
    """Turn on bounds checking for indexed access."""
    monkeypatch.setattr(config, "SAFE_MODE", True)


@pytest.fixture
def unsafe_mode(monkeypatch):
    monkeypatch.setattr(config, "SAFE_MODE", False)
