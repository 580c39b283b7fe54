"""
MVVM ViewModel Infrastructure.

A view-model exposes accessors computed from the properties of a bound model.
Bindings are created lazily, the first time an accessor is read, and model
change notifications are re-broadcast to every accessor bound to the changed
property.

Example:
    class Counter(ModelBase):
        count: int = ModelProperty(default=0)

    class CounterViewModel(ViewModelBase):
        count = Accessor()
        doubled = Accessor("count", transform=lambda c: c * 2,
                           inverse_transform=lambda d: d // 2)
        label = Accessor("count", transform=str, inverse_transform=int,
                         formatted=True)
        format_templates = {"label": "Clicked {0} times"}

    vm = CounterViewModel(Counter())
    vm.initialize()
    vm.doubled = 10
    vm.count   # 5
    vm.label   # "Clicked 5 times"
"""
from typing import Any, Callable, Dict, List, Optional, Union
import copy
from loguru import logger

from modelcontainer.core.config import AppConfig, BindingSettings, InverseErrorPolicy
from modelcontainer.core.exceptions import BindingNotFoundError, TypeMismatchError
from modelcontainer.mvvm.formatting import FormatTable
from modelcontainer.mvvm.initable import InitableBase
from modelcontainer.mvvm.model import ModelBase
from modelcontainer.mvvm.reflection import PropertyInfo, PropertyReflector, ReflectedProperty
from modelcontainer.mvvm.registry import AccessorBinding, AccessorRegistry

# Zero values for builtin scalars, used when no default is declared
_ZERO_VALUES: Dict[type, Any] = {int: 0, float: 0.0, complex: 0j, bool: False, str: "", bytes: b""}

PolicyLike = Union[InverseErrorPolicy, str]


class ViewModelBase(InitableBase):
    """
    Base class for view-models.

    Accessors are usually declared with the `Accessor` descriptor; the
    `get_value` / `set_value` primitives are available for hand-written
    properties.
    """

    # Seeds every instance's FormatTable: accessor name -> template
    format_templates: Dict[str, str] = {}

    def __init__(self, model: Optional[Any] = None, reflector: Optional[PropertyReflector] = None,
                 config: Optional[AppConfig] = None):
        super().__init__(reflector)
        config = config or AppConfig()
        self._settings: BindingSettings = config.binding
        self._accessors = AccessorRegistry()
        self._model_properties: Dict[str, PropertyInfo] = {}
        self._pending_changes: List[str] = []
        self._model: Optional[Any] = None
        self.format_strings = FormatTable(self.format_templates, separator=config.format.separator)

        if model is not None:
            self.bind(model)

    @property
    def model(self) -> Optional[Any]:
        """The bound model (not owned by the view-model)."""
        return self._model

    @property
    def settings(self) -> BindingSettings:
        return self._settings

    @property
    def accessor_names(self) -> List[str]:
        """Accessor names bound so far, in binding order."""
        return self._accessors.accessor_names()

    @property
    def bindings(self) -> List[AccessorBinding]:
        return list(self._accessors)

    def apply_config(self, config: AppConfig) -> None:
        self._settings = config.binding
        self.format_strings.separator = config.format.separator

    # --- Model attachment ---

    def bind(self, model: Any) -> None:
        """
        Attach to `model`, replacing any previous model and all its bindings.

        The model's properties are enumerated once here; it must expose a
        `property_changed` signal. A failed bind leaves the view-model
        attached to its previous model.

        Raises:
            TypeError: if the model has no `property_changed` signal.
            ValueError: if the reflector reports two properties with one name.
        """
        if getattr(model, "property_changed", None) is None:
            raise TypeError(f"{type(model).__name__} has no property_changed signal")

        properties: Dict[str, PropertyInfo] = {}
        for info in self._reflector.list_properties(model):
            if info.name in properties:
                raise ValueError(f"{type(model).__name__} declares property '{info.name}' more than once")
            properties[info.name] = info

        if self._model is not None:
            self.unbind()

        model.property_changed.connect(self._on_model_property_changed)
        self._model = model
        self._model_properties = properties
        logger.debug(f"{type(self).__name__} bound to {type(model).__name__} ({len(properties)} properties)")

    def unbind(self) -> None:
        """Detach from the current model and forget every binding."""
        if self._model is None:
            return
        self._model.property_changed.disconnect(self._on_model_property_changed)
        logger.debug(f"{type(self).__name__} unbound from {type(self._model).__name__}")
        self._model = None
        self._model_properties = {}
        self._pending_changes.clear()
        self._accessors.clear()

    # --- Accessor primitives ---

    def get_value(self, accessor_name: str, property_name: Optional[str] = None,
                  transform: Optional[Callable[[Any], Any]] = None, *,
                  out_type: Optional[type] = None, stored_type: Optional[type] = None) -> Any:
        """
        Read model property `property_name` on behalf of accessor `accessor_name`.

        Args:
            accessor_name: Name of the view-model accessor.
            property_name: Linked model property; defaults to the accessor name.
            transform: Stored value -> accessor value. None returns the raw value.
            out_type: Accessor type; must equal the stored type when there is no transform.
            stored_type: Expected type of the model property.

        Raises:
            BindingNotFoundError: if the model has no such property.
            BindingConflictError: if the accessor is bound to another property.
            TypeMismatchError: if the declared types, or the value read, disagree
                with `out_type` / `stored_type`.
        """
        model = self._require_model()
        prop = self._resolve_property(property_name or accessor_name)

        is_new = accessor_name not in self._accessors
        strict = self._settings.strict_types
        if is_new and strict:
            self._check_declared_types(accessor_name, prop, transform, out_type, stored_type)

        # Untyped properties can change type between reads
        value = self._reflector.get_property(model, prop.name)
        if strict and transform is None:
            self._check_runtime_type(accessor_name, prop, value, out_type)

        binding = self._accessors.add(accessor_name, prop, self._default_for(model, prop) if is_new else None)
        if is_new:
            logger.debug(f"Bound accessor '{accessor_name}' to {type(model).__name__}.{prop.name}")
            self._replay_pending(binding, accessor_name)

        return value if transform is None else transform(value)

    def set_value(self, accessor_name: str, value: Any,
                  inverse_transform: Optional[Callable[[Any], Any]] = None,
                  on_inverse_error: Optional[PolicyLike] = None) -> None:
        """
        Write `value` through accessor `accessor_name` to its model property.

        The accessor must have been read before; bindings are only created on read.

        Args:
            inverse_transform: Accessor value -> stored value. None stores as-is.
            on_inverse_error: Policy when the inverse transform raises; defaults
                to the configured `inverse_error_policy`.

        Raises:
            BindingNotFoundError: if the accessor was never read.
        """
        model = self._require_model()
        binding = self._accessors.get(accessor_name)
        policy = InverseErrorPolicy(on_inverse_error) if on_inverse_error is not None \
            else self._settings.inverse_error_policy

        if inverse_transform is None:
            stored = value
        else:
            try:
                stored = inverse_transform(value)
            except Exception as e:
                if policy is not InverseErrorPolicy.USE_DEFAULT:
                    raise
                logger.warning(f"Inverse transform of '{accessor_name}' failed for {value!r} ({e}); "
                               f"writing default {binding.default_value!r}")
                stored = copy.deepcopy(binding.default_value)

        self._reflector.set_property(model, binding.property.name, stored)

    def format(self, key: Optional[str], *args: Any) -> str:
        """Render `args` with the format template registered under `key`."""
        return self.format_strings.format(key, *args)

    # --- Notification ---

    def _on_model_property_changed(self, property_name: str) -> None:
        binding = self._accessors.find_by_property(property_name)
        if binding is None:
            if self._settings.replay_pending_changes and property_name in self._model_properties:
                if property_name not in self._pending_changes:
                    self._pending_changes.append(property_name)
            else:
                logger.trace(f"Dropped change of unbound property '{property_name}'")
            return

        for accessor_name in list(binding.accessor_names):
            self.on_property_changed(accessor_name)

    def _replay_pending(self, binding: AccessorBinding, accessor_name: str) -> None:
        name = binding.property.name
        if name in self._pending_changes:
            self._pending_changes.remove(name)
            self.on_property_changed(accessor_name)

    # --- Helpers ---

    def _require_model(self) -> Any:
        if self._model is None:
            raise RuntimeError(f"{type(self).__name__} is not bound to a model")
        return self._model

    def _resolve_property(self, property_name: str) -> PropertyInfo:
        try:
            return self._model_properties[property_name]
        except KeyError:
            raise BindingNotFoundError(
                f"{type(self._model).__name__} has no property '{property_name}'"
            ) from None

    def _default_for(self, model: Any, prop: PropertyInfo) -> Any:
        if isinstance(model, ModelBase) and model.has_variable(prop.name):
            return model.get_default_value(prop.name)
        if prop.default is not None:
            return prop.default
        return _ZERO_VALUES.get(prop.value_type)

    @staticmethod
    def _check_declared_types(accessor_name: str, prop: PropertyInfo, transform: Optional[Callable],
                              out_type: Optional[type], stored_type: Optional[type]) -> None:
        declared = prop.value_type
        if declared is object:
            return
        if stored_type is not None and stored_type is not declared:
            raise TypeMismatchError(
                f"Accessor '{accessor_name}' expects {stored_type.__name__} but "
                f"'{prop.name}' stores {getattr(declared, '__name__', declared)}"
            )
        if transform is None and out_type is not None and out_type is not declared:
            raise TypeMismatchError(
                f"Accessor '{accessor_name}' of type {out_type.__name__} reads "
                f"'{prop.name}' of type {getattr(declared, '__name__', declared)} without a transform"
            )

    @staticmethod
    def _check_runtime_type(accessor_name: str, prop: PropertyInfo, value: Any,
                            out_type: Optional[type]) -> None:
        if out_type is None or prop.value_type is not object or value is None:
            return
        if type(value) is not out_type:
            raise TypeMismatchError(
                f"Accessor '{accessor_name}' of type {out_type.__name__} got "
                f"{type(value).__name__} from '{prop.name}' without a transform"
            )


class Accessor(ReflectedProperty):
    """
    View-model accessor descriptor.

    The accessor name is the attribute name the descriptor is assigned to.

    Args:
        property_name: Linked model property; defaults to the accessor name.
        transform: Stored value -> accessor value.
        inverse_transform: Accessor value -> stored value, used on assignment.
        value_type: Accessor type, checked against the model property when
            there is no transform.
        stored_type: Expected model property type.
        on_inverse_error: Overrides the configured inverse error policy.
        formatted: Pass the read value through the view-model's FormatTable.
        read_only: Reject assignment with AttributeError.

    A class annotation on the accessor is used as `value_type` when none is given.
    """

    def __init__(self, property_name: Optional[str] = None,
                 transform: Optional[Callable[[Any], Any]] = None,
                 inverse_transform: Optional[Callable[[Any], Any]] = None, *,
                 value_type: Optional[type] = None, stored_type: Optional[type] = None,
                 on_inverse_error: Optional[PolicyLike] = None,
                 formatted: bool = False, read_only: bool = False):
        super().__init__(default=None, value_type=value_type)
        self.property_name = property_name
        self.transform = transform
        self.inverse_transform = inverse_transform
        self.stored_type = stored_type
        self.on_inverse_error = on_inverse_error
        self.formatted = formatted
        self.read_only = read_only
        self._out_type = value_type

    def __set_name__(self, owner: type, name: str) -> None:
        super().__set_name__(owner, name)
        # The annotation of a formatted accessor describes the rendered string
        if not self.formatted:
            self._out_type = self._value_type
        if self.property_name is None:
            self.property_name = name

    def __get__(self, obj: Optional[ViewModelBase], objtype: type = None) -> Any:
        if obj is None:
            return self
        value = obj.get_value(self.name, self.property_name, self.transform,
                              out_type=self._out_type, stored_type=self.stored_type)
        if self.formatted:
            return obj.format(self.name, value)
        return value

    def __set__(self, obj: ViewModelBase, value: Any) -> None:
        if self.read_only:
            raise AttributeError(f"Accessor '{self.name}' is read-only")
        obj.set_value(self.name, value, self.inverse_transform, self.on_inverse_error)
