"""Exception types raised by the converter."""


class Doxygen2DocusaurusError(Exception):
    """Base class for converter errors."""


class RendererNotFoundError(Doxygen2DocusaurusError):
    """No renderer is registered for an element kind, nor for its supertypes."""

    def __init__(self, kind: str, direction: str) -> None:
        """Record the element kind and the requested output shape."""
        super().__init__(f"no {direction} renderer for element kind {kind!r}")
        self.kind = kind
        self.direction = direction


class BuildPhaseError(Doxygen2DocusaurusError):
    """A view-model phase was run out of order."""
