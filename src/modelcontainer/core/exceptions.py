"""
Binding errors.

All of them are raised synchronously at the call site that triggered them
and are never retried.
"""


class BindingError(Exception):
    """Base exception for accessor binding failures."""
    pass


class BindingNotFoundError(BindingError, LookupError):
    """Raised when an accessor or model property name is unknown."""
    pass


class BindingConflictError(BindingError, ValueError):
    """Raised when an accessor name is re-bound to a different model property."""
    pass


class TypeMismatchError(BindingError, TypeError):
    """Raised when stored and output types disagree and no transform is supplied."""
    pass


class DuplicateKeyError(BindingError, KeyError):
    """Raised when adding a format template under a key that already exists."""

    def __str__(self) -> str:
        # KeyError would repr() the message
        return str(self.args[0]) if self.args else ""
