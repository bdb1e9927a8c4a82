"""Mutation Outcomes — form state shapes returned to the client."""

from app.core.mutation_outcomes import FieldValidationError, PersistenceError


def test_field_validation_state_carries_errors_and_message():
    outcome = FieldValidationError({"amount": ["bad"]}, "Missing Fields.")
    assert outcome.to_state() == {
        "errors": {"amount": ["bad"]}, "message": "Missing Fields.",
    }


def test_persistence_state_is_message_only():
    assert PersistenceError("Database Error").to_state() == {
        "message": "Database Error",
    }
