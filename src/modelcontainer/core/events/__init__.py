"""
Event System - synchronous observer notifications.

Usage:
    from modelcontainer.core.events import Signal

    changed = Signal("Changed")
    changed.connect(on_changed)
    changed.emit("name")
"""
from .observer import Signal


__all__ = ["Signal"]
