class SuperSorterError(Exception):
    """Base class for everything this package raises on purpose."""


class InvalidInputError(SuperSorterError, ValueError):
    """Rejected dataset or benchmark parameters."""


class InvalidTransitionError(SuperSorterError):
    """An operation that is not allowed in the current session/stepper state."""


class UnknownAlgorithmError(SuperSorterError, KeyError):
    def __init__(self, key):
        super().__init__(key)
        self.key = key

    def __str__(self):
        return f"Unknown algorithm: {self.key!r}"


class ConfigError(SuperSorterError):
    """A settings file exists but holds a value of the wrong type."""
