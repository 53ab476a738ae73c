"""Exception hierarchy used throughout the package."""


class RestcError(Exception):
    """Base class for all errors raised by this package."""


class ParseException(RestcError, ValueError):
    """Input could not be parsed."""


class DecompressException(RestcError):
    """A compressed stream could not be decompressed."""


class ConstraintException(RestcError):
    """A configured limit or constraint was violated."""


class UnknownPropertyException(RestcError):
    """A JSON property has no matching attribute on the target object."""

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name


class CannotIncrementEndException(RestcError):
    """An attempt was made to advance an exhausted iterator."""


class NoDataException(RestcError):
    """No data is available where some was expected."""