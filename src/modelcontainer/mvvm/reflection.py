"""
Property Reflection.

Enumerates an object's named, typed properties and reads/writes them by name.
The binding layer consumes this capability through `PropertyReflector`; the
default `DescriptorReflector` understands the descriptors declared in this
package plus builtin `property` objects.

Usage:
    reflector = DescriptorReflector()
    for info in reflector.list_properties(model):
        print(info.name, info.value_type, reflector.get_property(model, info.name))
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Type
import inspect
import typing


@dataclass(frozen=True)
class PropertyInfo:
    """Describes one named, typed property of an object."""
    name: str
    value_type: Any = object
    default: Any = None


class ReflectedProperty:
    """
    Base for data descriptors that describe themselves to the reflector.

    Subclasses get their public name from `__set_name__`.
    """

    def __init__(self, default: Any = None, value_type: Optional[type] = None):
        self.default = default
        self._value_type = value_type
        self.name: str = ""

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name
        if self._value_type is None:
            try:
                annotation = inspect.get_annotations(owner).get(name)
            except Exception:
                annotation = None
            if isinstance(annotation, type):
                self._value_type = annotation

    @property
    def value_type(self) -> Any:
        if self._value_type is not None:
            return self._value_type
        if self.default is not None:
            return type(self.default)
        return object

    def describe(self) -> PropertyInfo:
        return PropertyInfo(self.name, self.value_type, self.default)


def _return_type(fget) -> Any:
    try:
        hints = typing.get_type_hints(fget)
    except Exception:
        # Unresolvable forward references
        return object
    return hints.get("return", object)


class PropertyReflector(ABC):
    """Capability: list, read and write named properties of an object."""

    @abstractmethod
    def list_properties(self, obj: Any) -> List[PropertyInfo]:
        """Return the object's properties in a deterministic order."""
        pass

    @abstractmethod
    def get_property(self, obj: Any, name: str) -> Any:
        pass

    @abstractmethod
    def set_property(self, obj: Any, name: str, value: Any) -> None:
        pass


class DescriptorReflector(PropertyReflector):
    """
    Reflects `ReflectedProperty` descriptors and builtin properties.

    Base classes are scanned first so subclasses override by name while keeping
    the base declaration's position. Private names are skipped. The listing is
    computed once per class.
    """

    def __init__(self):
        self._cache: Dict[Type, List[PropertyInfo]] = {}

    def list_properties(self, obj: Any) -> List[PropertyInfo]:
        cls = type(obj)
        if cls not in self._cache:
            self._cache[cls] = self._scan(cls)
        return list(self._cache[cls])

    def _scan(self, cls: Type) -> List[PropertyInfo]:
        found: Dict[str, PropertyInfo] = {}
        for klass in reversed(cls.__mro__):
            for name, attr in vars(klass).items():
                if name.startswith("_"):
                    continue
                if isinstance(attr, ReflectedProperty):
                    found[name] = attr.describe()
                elif isinstance(attr, property):
                    found[name] = PropertyInfo(name, _return_type(attr.fget))
                elif name in found:
                    # Shadowed by a plain attribute in a subclass
                    del found[name]
        return list(found.values())

    def get_property(self, obj: Any, name: str) -> Any:
        return getattr(obj, name)

    def set_property(self, obj: Any, name: str, value: Any) -> None:
        setattr(obj, name, value)


default_reflector = DescriptorReflector()
