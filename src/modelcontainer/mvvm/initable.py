"""
Initable Base - shared root of models and view-models.

Provides the `property_changed` signal and `initialize()`, which touches every
declared property once so lazily created state exists before first use.
"""
from typing import Optional
from loguru import logger

from modelcontainer.core.events import Signal
from modelcontainer.mvvm.reflection import PropertyReflector, default_reflector


class InitableBase:
    """
    Base class with property change notification.

    `property_changed` emits the name of the changed property.
    """

    def __init__(self, reflector: Optional[PropertyReflector] = None):
        self._reflector = reflector or default_reflector
        self.property_changed = Signal(f"{type(self).__name__}.property_changed")

    def initialize(self) -> None:
        """Read every declared property once."""
        for info in self._reflector.list_properties(self):
            self._reflector.get_property(self, info.name)
        logger.debug(f"{type(self).__name__} initialized")

    def on_property_changed(self, name: str) -> None:
        self.property_changed.emit(name)

    def refresh(self, name: str) -> None:
        """Re-raise a change notification for `name` without changing anything."""
        self.on_property_changed(name)
