"""
Qt bridge - re-emits view-model changes as a PySide6 signal.

Requires the `qt` extra.

Usage:
    bridge = QtViewModelBridge(view_model)
    bridge.propertyChanged.connect(lambda name, value: label.setText(str(value)))
"""
from typing import Any, Optional
from PySide6.QtCore import QObject, Signal

from modelcontainer.mvvm.viewmodel import ViewModelBase


class QtViewModelBridge(QObject):
    """
    Forwards `ViewModelBase.property_changed` to Qt as (accessor_name, value).

    The value is read through the accessor at emission time.
    """

    # Generic signal emitted for any accessor change: (accessor_name, new_value)
    propertyChanged = Signal(str, object)

    def __init__(self, view_model: ViewModelBase, parent: Optional[QObject] = None):
        super().__init__(parent)
        self._view_model = view_model
        view_model.property_changed.connect(self._forward)

    @property
    def view_model(self) -> ViewModelBase:
        return self._view_model

    def _forward(self, accessor_name: str) -> None:
        value: Any = getattr(self._view_model, accessor_name)
        self.propertyChanged.emit(accessor_name, value)

    def close(self) -> None:
        """Stop forwarding notifications."""
        self._view_model.property_changed.disconnect(self._forward)
