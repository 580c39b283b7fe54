"""
Model Container - owns one model and one view-model and wires them together.
"""
from typing import Any, Generic, Optional, Type, TypeVar, Union
from loguru import logger

from modelcontainer.core.config import AppConfig, ConfigManager
from modelcontainer.core.events import Signal
from modelcontainer.core.factory import InstanceFactory
from modelcontainer.mvvm.initable import InitableBase
from modelcontainer.mvvm.viewmodel import ViewModelBase

TViewModel = TypeVar('TViewModel', bound=ViewModelBase)
TModel = TypeVar('TModel', bound=InitableBase)


class ModelContainer(Generic[TViewModel, TModel]):
    """
    Wrapper for a model / view-model pair.

    Missing instances are created through the factory: the model from
    `model_type()`, the view-model from `view_model_type(model)`. Types come
    from the constructor or from class attributes of a subclass.

    Example:
        class CounterContainer(ModelContainer[CounterViewModel, Counter]):
            model_type = Counter
            view_model_type = CounterViewModel

        container = CounterContainer()
        container.view_model.doubled
    """

    model_type: Optional[Type[TModel]] = None
    view_model_type: Optional[Type[TViewModel]] = None

    def __init__(self, model: Optional[TModel] = None, view_model: Optional[TViewModel] = None, *,
                 model_type: Optional[Type[TModel]] = None,
                 view_model_type: Optional[Type[TViewModel]] = None,
                 factory: Optional[InstanceFactory] = None,
                 config: Optional[Union[AppConfig, ConfigManager]] = None):
        self._factory = factory or InstanceFactory()
        self._config_manager: Optional[ConfigManager] = None
        if isinstance(config, ConfigManager):
            self._config_manager = config
            config = config.data
        self._config: Optional[AppConfig] = config
        if model_type is not None:
            self.model_type = model_type
        if view_model_type is not None:
            self.view_model_type = view_model_type

        self.model_changed = Signal("ModelContainer.model_changed")
        self.view_model_changed = Signal("ModelContainer.view_model_changed")

        self._model: TModel = model if model is not None else self._construct_model()
        self._view_model: TViewModel = self._attach(view_model if view_model is not None
                                                    else self._construct_view_model())

        self._view_model.initialize()
        self._model.initialize()

        if self._config_manager is not None:
            self._config_manager.on_changed.connect(self._on_config_changed)

    @property
    def model(self) -> TModel:
        """The underlying model."""
        return self._model

    @property
    def view_model(self) -> TViewModel:
        """The transformed model."""
        return self._view_model

    def change_model(self, new_model: TModel) -> None:
        """
        Rebind the view-model to `new_model`, rebuilding all bindings.

        If binding fails the container keeps its current model.
        """
        self._view_model.bind(new_model)
        self._model = new_model

        self._view_model.initialize()
        self._model.initialize()
        logger.debug(f"{type(self).__name__} switched model to {type(new_model).__name__}")
        self.model_changed.emit(new_model)

    def change_view_model(self, new_view_model: TViewModel) -> None:
        """Swap the view-model, initializing it against the current model."""
        old = self._view_model
        self._view_model = self._attach(new_view_model)
        if old is not new_view_model:
            old.unbind()

        self._view_model.initialize()
        logger.debug(f"{type(self).__name__} switched view-model to {type(new_view_model).__name__}")
        self.view_model_changed.emit(new_view_model)

    def close(self) -> None:
        """Stop following the config manager."""
        if self._config_manager is not None:
            self._config_manager.on_changed.disconnect(self._on_config_changed)

    def _on_config_changed(self, section: str, key: str, value: Any) -> None:
        self._config = self._config_manager.data
        self._view_model.apply_config(self._config)
        logger.debug(f"{type(self).__name__} applied config change {section}.{key}={value!r}")

    def _attach(self, view_model: TViewModel) -> TViewModel:
        if self._config is not None:
            view_model.apply_config(self._config)
        if view_model.model is not self._model:
            view_model.bind(self._model)
        return view_model

    def _construct_model(self) -> TModel:
        if self.model_type is None:
            raise TypeError(f"{type(self).__name__} needs a model instance or a model_type")
        return self._factory.construct(self.model_type)

    def _construct_view_model(self) -> TViewModel:
        if self.view_model_type is None:
            raise TypeError(f"{type(self).__name__} needs a view-model instance or a view_model_type")
        return self._factory.construct(self.view_model_type, self._model)
