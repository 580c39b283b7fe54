"""
Unit Tests for ModelBase and its named variable store.
"""
import pytest
from unittest.mock import MagicMock

from modelcontainer.mvvm.model import ModelBase, ModelProperty, VariableStore


class Settings(ModelBase):
    volume: int = ModelProperty(default=5)
    name = ModelProperty(default="guest")
    tags = ModelProperty(value_type=list)


class TestVariableStore:

    def test_add_and_get(self):
        store = VariableStore()
        store.add("a", 1, 0)

        assert "a" in store
        assert store.get("a").value == 1
        assert store.get("a").default_value == 0
        assert len(store) == 1

    def test_add_twice_raises(self):
        store = VariableStore()
        store.add("a", 1, 0)
        with pytest.raises(KeyError):
            store.add("a", 2, 0)

    def test_get_missing_raises(self):
        with pytest.raises(KeyError):
            VariableStore().get("missing")


class TestModelBase:

    def test_get_materializes_default_without_notification(self):
        model = Settings()
        callback = MagicMock()
        model.property_changed.connect(callback)

        assert model.volume == 5
        assert model.has_variable("volume")
        assert model.get_default_value("volume") == 5
        callback.assert_not_called()

    def test_set_notifies_every_time(self):
        model = Settings()
        callback = MagicMock()
        model.property_changed.connect(callback)

        model.volume = 7
        model.volume = 7

        assert model.volume == 7
        assert callback.call_count == 2
        callback.assert_called_with("volume")

    def test_set_before_get_keeps_declared_default(self):
        model = Settings()
        model.volume = 9
        assert model.get_default_value("volume") == 5

    def test_untyped_variables(self):
        model = ModelBase()
        assert model.get_value("free", 3) == 3
        model.set_value("other", "x")

        assert model.get_value("other") == "x"
        assert model.get_default_value("other") is None

    def test_default_of_unknown_variable_raises(self):
        with pytest.raises(KeyError):
            Settings().get_default_value("volume")

    def test_slot_survives_and_is_reused(self):
        model = Settings()
        model.name = "alice"
        # A later read with a different default does not reset the slot
        assert model.get_value("name", "bob") == "alice"

    def test_descriptor_types(self):
        assert Settings.volume.value_type is int
        assert Settings.name.value_type is str
        assert Settings.tags.value_type is list

    def test_initialize_materializes_all_properties(self):
        model = Settings()
        model.initialize()
        assert model.has_variable("volume")
        assert model.has_variable("name")
        assert model.has_variable("tags")

    def test_refresh_raises_notification(self):
        model = Settings()
        callback = MagicMock()
        model.property_changed.connect(callback)

        model.refresh("volume")

        callback.assert_called_once_with("volume")


class Basket(ModelBase):
    items = ModelProperty(default=[])
    labels = ModelProperty(default_factory=dict)


class TestMutableDefaults:

    def test_each_model_gets_its_own_default(self):
        first, second = Basket(), Basket()

        first.items.append("x")
        first.labels["a"] = 1

        assert second.items == []
        assert second.labels == {}
        assert Basket.items.default == []

    def test_mutating_value_keeps_recorded_default(self):
        model = Basket()
        model.items.append("x")

        assert model.items == ["x"]
        assert model.get_default_value("items") == []

    def test_default_factory_called_per_instance(self):
        factory = MagicMock(side_effect=list)

        class Tracked(ModelBase):
            seen = ModelProperty(default_factory=factory)

        first, second = Tracked(), Tracked()
        first.seen
        first.seen
        second.seen

        assert factory.call_count == 2
        assert first.seen is not second.seen

    def test_default_and_factory_are_exclusive(self):
        with pytest.raises(ValueError):
            ModelProperty(default=[], default_factory=list)

    def test_set_before_get_records_fresh_default(self):
        model = Basket()
        model.labels = {"k": 2}

        assert model.get_default_value("labels") == {}
