"""
Exception types raised by egdb.

Everything derives from EgdbError so callers (and the CLI) can catch one type.
"""


class EgdbError(Exception):
    """Base class for egdb errors."""


class InvalidInputError(EgdbError, ValueError):
    """Arguments violate a precondition (duplicate entities, unknown entities, ...)."""


class RelationComputationError(EgdbError):
    """A relation function failed for a specific pair of entities."""

    def __init__(self, pair: tuple[str, str], message: str):
        self.pair = pair
        super().__init__(f"relation failed for {pair[0]!r} / {pair[1]!r}: {message}")


class APIRequestError(EgdbError):
    """An EpiGraphDB request failed after retries."""

    def __init__(self, endpoint: str, message: str, status_code: int | None = None):
        self.endpoint = endpoint
        self.status_code = status_code
        status = f" (HTTP {status_code})" if status_code is not None else ""
        super().__init__(f"{endpoint}{status}: {message}")


class APIResponseError(EgdbError):
    """An EpiGraphDB response did not have the expected shape."""
