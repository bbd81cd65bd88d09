"""Fixtures partagées."""

from collections.abc import Callable
from typing import Any

import pytest

from talentia_dedup.matching.schema import Candidate


def candidate(**overrides: Any) -> Candidate:
    values: dict[str, Any] = {
        "id": "candidate-1",
        "first_name": "Juan",
        "last_name": "Perez",
        "maternal_last_name": "Garcia",
        "phone": "987654321",
        "phone_normalized": "987654321",
        "dni": "12345678",
    }
    values.update(overrides)
    return Candidate(**values)


@pytest.fixture
def make_candidate() -> Callable[..., Candidate]:
    return candidate
