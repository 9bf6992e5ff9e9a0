"""Exception types raised across the kubesplit pipeline."""


class SetupError(RuntimeError):
    """Fatal startup condition; the run aborts before processing documents."""


class PatternError(ValueError):
    """A --remove entry is not a valid regular expression."""

    def __init__(self, pattern: str, cause: Exception):
        self.pattern = pattern
        self.cause = cause
        super().__init__(f"Invalid regex pattern '{pattern}': {cause}")


class ExtractionError(ValueError):
    """A document cannot be interpreted as a Kubernetes resource mapping."""
