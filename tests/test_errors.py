# tests/test_errors.py
"""Tests for the domain error taxonomy."""

import pytest

from inkwell.core.errors import Forbidden, NotFound, Unauthenticated, ValidationFailed


@pytest.mark.parametrize(
    ("error", "status_code"),
    [
        (Unauthenticated(), 401),
        (Forbidden(), 403),
        (NotFound(), 404),
        (ValidationFailed("banner", "Too long."), 422),
    ],
)
def test_status_codes(error, status_code):
    assert error.status_code == status_code


def test_validation_failure_payload_names_the_attribute():
    error = ValidationFailed("role_id", "Not allowed.")

    assert error.to_payload() == {"detail": "Not allowed.", "errors": {"role_id": ["Not allowed."]}}
