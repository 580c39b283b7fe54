"""
ModelContainer - reflective model / view-model binding.

A view-model exposes transformed accessors backed by named properties of a
model and re-broadcasts the model's change notifications to every accessor
that depends on the changed property.

Usage:
    from modelcontainer import ModelBase, ModelProperty, ViewModelBase, Accessor, ModelContainer

    class Person(ModelBase):
        age: int = ModelProperty(default=0)

    class PersonViewModel(ViewModelBase):
        age_text = Accessor("age", transform=str, inverse_transform=int)

    container = ModelContainer(model_type=Person, view_model_type=PersonViewModel)
    container.view_model.age_text = "42"
    container.model.age  # 42
"""
from modelcontainer.core import (
    Signal,
    ConfigManager,
    AppConfig,
    BindingSettings,
    FormatSettings,
    LoggingSettings,
    InverseErrorPolicy,
    BindingError,
    BindingNotFoundError,
    BindingConflictError,
    TypeMismatchError,
    DuplicateKeyError,
    InstanceFactory,
    setup_logging,
)
from modelcontainer.mvvm import (
    PropertyInfo,
    PropertyReflector,
    DescriptorReflector,
    InitableBase,
    ModelBase,
    ModelProperty,
    ViewModelBase,
    Accessor,
    AccessorRegistry,
    FormatTable,
    ModelContainer,
)

__version__ = "0.1.0"

__all__ = [
    # Core
    "Signal",
    "ConfigManager",
    "AppConfig",
    "BindingSettings",
    "FormatSettings",
    "LoggingSettings",
    "InverseErrorPolicy",
    "InstanceFactory",
    "setup_logging",

    # Errors
    "BindingError",
    "BindingNotFoundError",
    "BindingConflictError",
    "TypeMismatchError",
    "DuplicateKeyError",

    # MVVM
    "PropertyInfo",
    "PropertyReflector",
    "DescriptorReflector",
    "InitableBase",
    "ModelBase",
    "ModelProperty",
    "ViewModelBase",
    "Accessor",
    "AccessorRegistry",
    "FormatTable",
    "ModelContainer",
]
