"""Errors raised while planning or executing an einsum."""


class EinsumError(ValueError):
    """Base class for every einsum failure."""


class MalformedNotation(EinsumError):
    """Notation string is structurally broken or disagrees with the inputs."""


class UnboundOutputLabel(EinsumError):
    """Output names a label that no input carries."""

    def __init__(self, label, notation):
        super().__init__(f"Output label {label!r} not found in any input of {notation!r}")
        self.label = label
        self.notation = notation


class InconsistentDimension(EinsumError):
    """One label bound to two different extents."""

    def __init__(self, label, expected, actual):
        super().__init__(
            f"Inconsistent dimension for {label!r}: {expected} vs {actual}"
        )
        self.label = label
        self.expected = expected
        self.actual = actual


class ShapeMismatch(EinsumError):
    """A tensor handed to the executor does not fit the plan."""
