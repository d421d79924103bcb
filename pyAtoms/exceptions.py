"""
Exception hierarchy for atomistic system construction and access.

All structural errors are raised eagerly at construction or access time.
The construction errors derive from ValueError, unknown keys from KeyError,
so callers may catch either the specific or the builtin type.
"""


class UnsupportedDimensionError(ValueError):
    """Raised when an operation is not defined for the requested dimension."""

    def __init__(self, n_dimensions: int, supported=(1, 2, 3)):
        """
        Initialize exception.

        Args:
            n_dimensions: The requested dimension.
            supported: Dimensions for which the operation is defined.
        """
        super().__init__(
            f"Unsupported number of dimensions {n_dimensions}, "
            f"expected one of {tuple(supported)}"
        )
        self.n_dimensions = n_dimensions
        self.supported = tuple(supported)


class MissingIdentifierError(ValueError):
    """Raised when an Atom is built without atomic_number or atomic_symbol."""

    def __init__(self, message: str = None):
        super().__init__(
            message
            or "Atom construction requires an identifier, or either "
            "atomic_number or atomic_symbol among its keyword arguments"
        )


class DimensionMismatchError(ValueError):
    """Raised when vectors, boxes or boundary conditions disagree in dimension."""

    def __init__(self, message: str, expected: int = None, got: int = None):
        """
        Initialize exception.

        Args:
            message: Error message
            expected: Optional expected dimension
            got: Optional offending dimension
        """
        super().__init__(message)
        self.expected = expected
        self.got = got


class EmptySystemError(ValueError):
    """Raised when the dimension cannot be inferred from an empty atom collection."""


class UnknownKeyError(KeyError):
    """Raised on strict lookup of a property key that does not exist."""

    def __init__(self, key, owner: str = "object"):
        super().__init__(key)
        self.key = key
        self.owner = owner

    def __str__(self) -> str:
        return f"Unknown key {self.key!r} for {self.owner}"
