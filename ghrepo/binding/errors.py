"""Errors raised when binding resources to their owning context."""

from __future__ import annotations


class BindingError(RuntimeError):
    """Base class for binding errors."""


class UnboundResourceError(BindingError):
    """Raised when a resource that needs owning context was never bound."""

    def __init__(self, resource: object, *, needs: str = "a binding context") -> None:
        """Initialise with the offending resource and what it lacked."""
        self.resource = resource
        super().__init__(
            f"{type(resource).__name__} has no {needs}; "
            "bind it before calling methods that reach GitHub"
        )


class ResourceAlreadyBoundError(BindingError):
    """Raised when a bound resource is bound again to a different context."""

    def __init__(self, resource: object) -> None:
        """Initialise with the resource that already has a context."""
        self.resource = resource
        super().__init__(
            f"{type(resource).__name__} is already bound to another context"
        )
