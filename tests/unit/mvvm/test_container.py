"""
Unit Tests for ModelContainer.
"""
import pytest
from unittest.mock import MagicMock

from modelcontainer.core.config import AppConfig, ConfigManager
from modelcontainer.core.factory import InstanceFactory
from modelcontainer.mvvm.container import ModelContainer
from modelcontainer.mvvm.model import ModelBase, ModelProperty
from modelcontainer.mvvm.reflection import DescriptorReflector
from modelcontainer.mvvm.viewmodel import Accessor, ViewModelBase


class Temperature(ModelBase):
    celsius: float = ModelProperty(default=20.0)


class TemperatureViewModel(ViewModelBase):
    celsius = Accessor()
    fahrenheit = Accessor("celsius", transform=lambda c: c * 9 / 5 + 32,
                          inverse_transform=lambda f: (f - 32) * 5 / 9)


class Thermostat(ModelBase):
    celsius: float = ModelProperty(default=18.0)


class RepeatingReflector(DescriptorReflector):
    """Reports every Thermostat property twice."""

    def list_properties(self, obj):
        properties = super().list_properties(obj)
        if isinstance(obj, Thermostat):
            return properties + properties
        return properties


class TemperatureContainer(ModelContainer[TemperatureViewModel, Temperature]):
    model_type = Temperature
    view_model_type = TemperatureViewModel


class TestConstruction:

    def test_creates_missing_instances(self):
        container = TemperatureContainer()

        assert isinstance(container.model, Temperature)
        assert isinstance(container.view_model, TemperatureViewModel)
        assert container.view_model.model is container.model
        assert container.view_model.fahrenheit == 68.0

    def test_initializes_both_sides(self):
        container = TemperatureContainer()

        assert container.view_model.accessor_names == ["celsius", "fahrenheit"]
        assert container.model.has_variable("celsius")

    def test_uses_supplied_model(self):
        model = Temperature()
        model.celsius = 100.0

        container = TemperatureContainer(model)

        assert container.model is model
        assert container.view_model.fahrenheit == 212.0

    def test_rebinds_supplied_view_model_to_container_model(self):
        model = Temperature()
        stray = TemperatureViewModel(Temperature())

        container = TemperatureContainer(model, stray)

        assert container.view_model is stray
        assert stray.model is model

    def test_types_from_keywords(self):
        container = ModelContainer(model_type=Temperature, view_model_type=TemperatureViewModel)
        assert container.view_model.celsius == 20.0

    def test_missing_types_raise(self):
        with pytest.raises(TypeError):
            ModelContainer()
        with pytest.raises(TypeError):
            ModelContainer(model=Temperature())

    def test_factory_is_used(self):
        factory = MagicMock(spec=InstanceFactory)
        factory.construct.side_effect = lambda cls, *args: cls(*args)

        container = TemperatureContainer(factory=factory)

        assert factory.construct.call_args_list[0].args == (Temperature,)
        assert factory.construct.call_args_list[1].args == (TemperatureViewModel, container.model)

    def test_config_is_applied(self):
        config = AppConfig()
        config.format.separator = ";"

        container = TemperatureContainer(config=config)

        assert container.view_model.format("x", 1, 2) == "1;2"


class TestChangeModel:

    def test_reads_reflect_new_model(self):
        container = TemperatureContainer()
        new_model = Temperature()
        new_model.celsius = 0.0

        container.change_model(new_model)

        assert container.model is new_model
        assert container.view_model.fahrenheit == 32.0

    def test_old_model_no_longer_notifies(self):
        container = TemperatureContainer()
        old_model = container.model
        container.change_model(Temperature())

        callback = MagicMock()
        container.view_model.property_changed.connect(callback)
        old_model.celsius = 50.0
        callback.assert_not_called()

        container.model.celsius = 10.0
        assert [c.args[0] for c in callback.call_args_list] == ["celsius", "fahrenheit"]

    def test_writes_go_to_new_model(self):
        container = TemperatureContainer()
        old_model = container.model
        container.change_model(Temperature())

        container.view_model.fahrenheit = 212.0

        assert container.model.celsius == 100.0
        assert old_model.celsius == 20.0

    def test_emits_model_changed(self):
        container = TemperatureContainer()
        callback = MagicMock()
        container.model_changed.connect(callback)
        new_model = Temperature()

        container.change_model(new_model)

        callback.assert_called_once_with(new_model)


    def test_failed_bind_keeps_current_model(self):
        model = Temperature()
        vm = TemperatureViewModel(model, reflector=RepeatingReflector())
        container = TemperatureContainer(model, vm)
        callback = MagicMock()
        container.model_changed.connect(callback)

        with pytest.raises(ValueError):
            container.change_model(Thermostat())

        assert container.model is model
        assert vm.model is model
        assert vm.accessor_names == ["celsius", "fahrenheit"]
        assert vm.fahrenheit == 68.0
        callback.assert_not_called()

    def test_model_without_signal_is_rejected(self):
        container = TemperatureContainer()
        model = container.model

        with pytest.raises(TypeError):
            container.change_model(object())

        assert container.model is model
        assert container.view_model.celsius == 20.0


class TestChangeViewModel:

    def test_swaps_and_initializes(self):
        container = TemperatureContainer()
        old_vm = container.view_model
        new_vm = TemperatureViewModel()

        container.change_view_model(new_vm)

        assert container.view_model is new_vm
        assert new_vm.model is container.model
        assert new_vm.accessor_names == ["celsius", "fahrenheit"]
        assert old_vm.model is None

    def test_old_view_model_stops_listening(self):
        container = TemperatureContainer()
        old_vm = container.view_model
        old_callback = MagicMock()
        old_vm.property_changed.connect(old_callback)

        container.change_view_model(TemperatureViewModel())
        new_callback = MagicMock()
        container.view_model.property_changed.connect(new_callback)
        container.model.celsius = 1.0

        old_callback.assert_not_called()
        assert new_callback.call_count == 2

    def test_emits_view_model_changed(self):
        container = TemperatureContainer()
        callback = MagicMock()
        container.view_model_changed.connect(callback)
        new_vm = TemperatureViewModel(container.model)

        container.change_view_model(new_vm)

        callback.assert_called_once_with(new_vm)


class TestConfigManager:

    def test_config_changes_reach_view_model(self):
        manager = ConfigManager()
        container = TemperatureContainer(config=manager)

        manager.update("format", "separator", "|")

        assert container.view_model.format("x", 1, 2) == "1|2"

    def test_config_follows_swapped_view_model(self):
        manager = ConfigManager()
        container = TemperatureContainer(config=manager)
        container.change_view_model(TemperatureViewModel())

        manager.update("binding", "strict_types", False)

        assert container.view_model.settings.strict_types is False

    def test_close_stops_following(self):
        manager = ConfigManager()
        container = TemperatureContainer(config=manager)

        container.close()
        manager.update("format", "separator", "|")

        assert container.view_model.format("x", 1, 2) == "1 2"
        assert len(manager.on_changed) == 0
