"""
Core infrastructure shared by the binding layer.

Provides:
- Signal: synchronous observer notifications
- ConfigManager / AppConfig: pydantic settings with optional persistence
- setup_logging: loguru sinks
- InstanceFactory: construction capability used by ModelContainer
- Binding error hierarchy
"""
from .events import Signal
from .config import (
    ConfigManager,
    AppConfig,
    BindingSettings,
    FormatSettings,
    LoggingSettings,
    InverseErrorPolicy,
)
from .exceptions import (
    BindingError,
    BindingNotFoundError,
    BindingConflictError,
    TypeMismatchError,
    DuplicateKeyError,
)
from .factory import InstanceFactory
from .logging import setup_logging

__all__ = [
    # Events
    "Signal",

    # Configuration
    "ConfigManager",
    "AppConfig",
    "BindingSettings",
    "FormatSettings",
    "LoggingSettings",
    "InverseErrorPolicy",

    # Errors
    "BindingError",
    "BindingNotFoundError",
    "BindingConflictError",
    "TypeMismatchError",
    "DuplicateKeyError",

    # Construction
    "InstanceFactory",

    # Logging
    "setup_logging",
]
