"""Mutation Outcomes — the closed set of results an invoice mutation can return.

Invariants:
    - FieldValidationError: input rejected, storage untouched
    - PersistenceError: the single write failed, nothing committed
    - NavigateTo: write committed and view invalidated; terminal
    - Outcomes are values, never raised

Design Decisions:
    - NavigateTo as a value instead of a redirect side effect: the route decides
      how to render it (303 See Other), and tests can assert on it directly
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class FieldValidationError:
    errors: dict[str, list[str]]
    message: str

    def to_state(self) -> dict:
        """Form state shape returned to the client."""
        return {"errors": self.errors, "message": self.message}


@dataclass(frozen=True)
class PersistenceError:
    message: str

    def to_state(self) -> dict:
        return {"message": self.message}


@dataclass(frozen=True)
class NavigateTo:
    path: str


MutationOutcome = FieldValidationError | PersistenceError | NavigateTo
