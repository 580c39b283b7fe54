"""
MVVM Package - model to view-model accessor binding.

Provides:
- ModelBase / ModelProperty: models backed by a named variable store.
- ViewModelBase / Accessor: view-models whose accessors read transformed model properties.
- AccessorRegistry: accessor name <-> model property index.
- FormatTable: display templates with a positional fallback.
- ModelContainer: owns and wires one model and one view-model.
- PropertyReflector / DescriptorReflector: property reflection capability.

The PySide6 bridge lives in `modelcontainer.mvvm.qt` and is not imported here.
"""
from modelcontainer.mvvm.reflection import (
    PropertyInfo,
    PropertyReflector,
    DescriptorReflector,
    ReflectedProperty,
)
from modelcontainer.mvvm.initable import InitableBase
from modelcontainer.mvvm.model import ModelBase, ModelProperty, VariableStore
from modelcontainer.mvvm.registry import AccessorBinding, AccessorRegistry
from modelcontainer.mvvm.formatting import FormatTable
from modelcontainer.mvvm.viewmodel import ViewModelBase, Accessor
from modelcontainer.mvvm.container import ModelContainer

__all__ = [
    # Reflection
    "PropertyInfo",
    "PropertyReflector",
    "DescriptorReflector",
    "ReflectedProperty",

    # Models
    "InitableBase",
    "ModelBase",
    "ModelProperty",
    "VariableStore",

    # ViewModels
    "ViewModelBase",
    "Accessor",
    "AccessorBinding",
    "AccessorRegistry",
    "FormatTable",

    # Container
    "ModelContainer",
]
