"""
Accessor Registry - which view-model accessors read which model property.

Many accessor names may share one binding (one model property read through
different transforms); each accessor name belongs to exactly one binding.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional

from modelcontainer.core.exceptions import BindingConflictError, BindingNotFoundError
from modelcontainer.mvvm.reflection import PropertyInfo


@dataclass
class AccessorBinding:
    """A model property together with every accessor name bound to it."""
    property: PropertyInfo
    default_value: Any = None
    accessor_names: List[str] = field(default_factory=list)


class AccessorRegistry:
    """Index accessor name -> binding, with a reverse index property name -> binding."""

    def __init__(self):
        self._by_accessor: Dict[str, AccessorBinding] = {}
        self._by_property: Dict[str, AccessorBinding] = {}

    def __contains__(self, accessor_name: str) -> bool:
        return accessor_name in self._by_accessor

    def __len__(self) -> int:
        return len(self._by_accessor)

    def __iter__(self) -> Iterator[AccessorBinding]:
        """Bindings in creation order."""
        return iter(list(self._by_property.values()))

    def add(self, accessor_name: str, prop: PropertyInfo, default_value: Any = None) -> AccessorBinding:
        """
        Bind `accessor_name` to `prop`.

        Joins the existing binding when the property already has one. The
        default value only applies when a fresh binding is created.

        Raises:
            BindingConflictError: if the accessor is bound to another property.
        """
        binding = self._by_accessor.get(accessor_name)
        if binding is not None:
            if binding.property != prop:
                raise BindingConflictError(
                    f"Accessor '{accessor_name}' is already bound to '{binding.property.name}', "
                    f"cannot bind it to '{prop.name}'"
                )
            return binding

        binding = self._by_property.get(prop.name)
        if binding is not None and binding.property != prop:
            raise BindingConflictError(
                f"Property '{prop.name}' is registered with a different descriptor"
            )
        if binding is None:
            binding = AccessorBinding(prop, default_value)
            self._by_property[prop.name] = binding

        binding.accessor_names.append(accessor_name)
        self._by_accessor[accessor_name] = binding
        return binding

    def get(self, accessor_name: str) -> AccessorBinding:
        """
        Raises:
            BindingNotFoundError: if the accessor was never bound.
        """
        try:
            return self._by_accessor[accessor_name]
        except KeyError:
            raise BindingNotFoundError(f"Accessor '{accessor_name}' is not bound") from None

    def find(self, accessor_name: str) -> Optional[AccessorBinding]:
        return self._by_accessor.get(accessor_name)

    def find_by_property(self, property_name: str) -> Optional[AccessorBinding]:
        return self._by_property.get(property_name)

    def accessor_names(self) -> List[str]:
        return list(self._by_accessor)

    def clear(self) -> None:
        self._by_accessor.clear()
        self._by_property.clear()
