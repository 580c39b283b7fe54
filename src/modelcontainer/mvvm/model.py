"""
Model Base - named variable store with change notification.

Concrete models declare `ModelProperty` descriptors instead of hand-written
backing fields:

    class Person(ModelBase):
        name: str = ModelProperty(default="")
        age: int = ModelProperty(default=0)

    person = Person()
    person.property_changed.connect(print)
    person.age = 42          # prints "age"
"""
from dataclasses import dataclass
from typing import Any, Callable, Dict, Generic, Iterator, Optional, TypeVar
import copy

from modelcontainer.mvvm.initable import InitableBase
from modelcontainer.mvvm.reflection import PropertyReflector, ReflectedProperty

T = TypeVar('T')


@dataclass
class VariableSlot:
    """Current value of a named variable plus the default it was created with."""
    value: Any
    default_value: Any


class VariableStore:
    """
    Mapping of variable name -> VariableSlot.

    A slot, once created, lives as long as the store.
    """

    def __init__(self):
        self._slots: Dict[str, VariableSlot] = {}

    def __contains__(self, name: str) -> bool:
        return name in self._slots

    def __len__(self) -> int:
        return len(self._slots)

    def __iter__(self) -> Iterator[str]:
        return iter(self._slots)

    def find(self, name: str) -> Optional[VariableSlot]:
        return self._slots.get(name)

    def get(self, name: str) -> VariableSlot:
        try:
            return self._slots[name]
        except KeyError:
            raise KeyError(f"Variable '{name}' has not been materialized") from None

    def add(self, name: str, value: Any, default_value: Any) -> VariableSlot:
        if name in self._slots:
            raise KeyError(f"Variable '{name}' already exists")
        slot = VariableSlot(value, default_value)
        self._slots[name] = slot
        return slot


class ModelBase(InitableBase):
    """
    Base class for model classes to inherit from.

    Reading a variable materializes it with its default and never notifies;
    writing always notifies.
    """

    def __init__(self, reflector: Optional[PropertyReflector] = None):
        super().__init__(reflector)
        self._vars = VariableStore()

    def get_value(self, name: str, default: Any = None) -> Any:
        """
        Return variable `name`, creating it with `default` on first access.

        The slot keeps its own copy of `default`, so mutating the live value
        leaves the recorded default untouched.
        """
        slot = self._vars.find(name)
        if slot is None:
            slot = self._vars.add(name, default, copy.deepcopy(default))
        return slot.value

    def set_value(self, name: str, value: Any) -> None:
        """Overwrite (or create) variable `name` and raise a change notification."""
        slot = self._vars.find(name)
        if slot is None:
            self._vars.add(name, value, self._declared_default(name))
        else:
            slot.value = value

        self.on_property_changed(name)

    def get_default_value(self, name: str) -> Any:
        """
        Default value variable `name` was materialized with.

        Raises:
            KeyError: if the variable was never read or written.
        """
        return self._vars.get(name).default_value

    def has_variable(self, name: str) -> bool:
        return name in self._vars

    def _declared_default(self, name: str) -> Any:
        descriptor = getattr(type(self), name, None)
        if isinstance(descriptor, ModelProperty):
            return descriptor.make_default()
        return None


class ModelProperty(ReflectedProperty, Generic[T]):
    """
    Descriptor backed by the owning ModelBase's variable store.

    Args:
        default: Value the variable is materialized with on first read.
            Each model instance gets its own copy.
        default_factory: Zero-argument callable producing the default, called
            once per model instance. Mutually exclusive with `default`.
        value_type: Declared type; falls back to the class annotation, then
            to type(default).
    """

    def __init__(self, default: Any = None, value_type: Optional[type] = None,
                 default_factory: Optional[Callable[[], T]] = None):
        if default is not None and default_factory is not None:
            raise ValueError("cannot specify both default and default_factory")
        super().__init__(default=default, value_type=value_type)
        self.default_factory = default_factory

    def make_default(self) -> Any:
        """A fresh default value for one model instance."""
        if self.default_factory is not None:
            return self.default_factory()
        return copy.deepcopy(self.default)

    def __get__(self, obj: Optional[ModelBase], objtype: type = None) -> T:
        if obj is None:
            return self  # type: ignore
        if obj.has_variable(self.name):
            return obj.get_value(self.name)
        return obj.get_value(self.name, self.make_default())

    def __set__(self, obj: ModelBase, value: T) -> None:
        obj.set_value(self.name, value)
