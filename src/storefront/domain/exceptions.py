"""Domain-level exceptions.

Every failure a use case can report is a subclass of DomainException so
the CLI layer can catch them uniformly and the checkout orchestrator can
map them onto a structured result.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A request was malformed or a business rule was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class DependencyError(DomainException):
    """A downstream service or store was unreachable or errored."""


class ProductLookupError(DependencyError):
    """The product catalog could not answer a lookup."""


class ProductUnavailableError(DependencyError):
    """One or more products needed for checkout could not be resolved."""

    def __init__(self, message: str, product_ids: list[int]) -> None:
        super().__init__(message)
        self.product_ids = product_ids


class PersistenceError(DependencyError):
    """A store could not be read or durably written."""
