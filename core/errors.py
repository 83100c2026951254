from __future__ import annotations


class PricingValidationError(ValueError):
    """Invalid calculator input. Carries every violated rule, not just the first."""

    def __init__(self, errors: list[str]):
        self.errors = list(errors)
        super().__init__("; ".join(self.errors))


class NotFoundError(LookupError):
    def __init__(self, kind: str, entity_id: str):
        self.kind = kind
        self.entity_id = entity_id
        super().__init__(f"{kind} {entity_id} not found")


class InvalidTransitionError(RuntimeError):
    def __init__(self, quote_id: str, status: str, action: str):
        self.quote_id = quote_id
        self.status = status
        self.action = action
        super().__init__(f"Cannot {action} quote request {quote_id} (current status: {status})")


class ConcurrentUpdateError(RuntimeError):
    """Record changed between read and write (stale version)."""

    def __init__(self, quote_id: str, expected: int, actual: int):
        self.quote_id = quote_id
        self.expected = expected
        self.actual = actual
        super().__init__(f"Quote request {quote_id} is at version {actual}, expected {expected}")
