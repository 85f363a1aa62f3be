"""Pytest configuration and shared fixtures."""

from __future__ import annotations

from typing import Any

import pytest


@pytest.fixture
def profile_properties() -> dict[str, Any]:
    """Flat user profile properties."""
    return {
        "first_name": {"type": "string", "description": "User's first name"},
        "last_name": {"type": "string"},
        "age": {"type": "integer", "description": "User's age in years"},
    }


@pytest.fixture
def person_definitions() -> dict[str, Any]:
    """A reusable ``person`` definition."""
    return {
        "person": {
            "type": "object",
            "properties": {
                "name": {"type": "string", "description": "Person's name"},
                "age": {"type": "integer", "description": "Person's age"},
            },
            "required": ["name", "age"],
        }
    }
