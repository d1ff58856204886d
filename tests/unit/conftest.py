"""Shared fixtures for qoptions unit tests."""
from __future__ import annotations

import pytest
from sample_models import Customer, build_registry

from qoptions import create_query
from qoptions.metadata import ModelRegistry


@pytest.fixture
def registry() -> ModelRegistry:
    return build_registry()


@pytest.fixture
def query(registry: ModelRegistry):
    def _query(model: type = Customer, **kwargs):
        return create_query(model, registry=registry, **kwargs)

    return _query
