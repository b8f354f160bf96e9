"""Tests for the fluid registry."""

import pytest

from fluid_tracker.domain.codec import RecordDecodeError, pack_words
from fluid_tracker.domain.fluids import WATER, Fluid
from fluid_tracker.services.registry import UNSAVED_INDEX, FluidRegistry
from tests.conftest import RecordingKeyValueStore

KEY = "moist:fluids"
TEA = Fluid.create("Tea", "#a52", 90)
COFFEE = Fluid.create("Coffee", "#630", 80)


def test_ensure_defaults_saves_water() -> None:
    store = RecordingKeyValueStore()
    registry = FluidRegistry(store, KEY)

    registry.ensure_defaults()

    assert store.get(KEY) == WATER.encoded
    assert registry.index_of(WATER) == 0
    assert registry.list_selectable() == [WATER]


def test_save_assigns_sequential_indices() -> None:
    registry = FluidRegistry(RecordingKeyValueStore(), KEY)
    registry.ensure_defaults()

    assert registry.save([TEA, COFFEE]) == [1, 2]
    assert registry.saved == (WATER, TEA, COFFEE)


def test_saving_same_fluid_twice_is_idempotent() -> None:
    store = RecordingKeyValueStore()
    registry = FluidRegistry(store, KEY)

    first = registry.ensure_saved(TEA)
    writes = len(store.writes)
    second = registry.ensure_saved(Fluid.create("Tea", "#A52", 90))

    assert first == second == 0
    assert len(registry.saved) == 1
    assert len(store.writes) == writes


def test_registry_reloads_from_store() -> None:
    store = RecordingKeyValueStore()
    registry = FluidRegistry(store, KEY)
    registry.ensure_defaults()
    registry.save([TEA])

    reloaded = FluidRegistry(store, KEY)

    assert reloaded.saved == (WATER, TEA)
    assert reloaded.index_of(TEA) == 1
    assert reloaded.list_selectable() == [WATER]


def test_show_only_saves_always_shown_fluids() -> None:
    store = RecordingKeyValueStore()
    registry = FluidRegistry(store, KEY)
    lemonade = Fluid.create("Lemonade", "#ff6", 95, always_shown=True)

    registry.show([TEA, lemonade])
    registry.show([TEA])

    assert registry.list_selectable() == [TEA, lemonade]
    assert registry.index_of(TEA) == UNSAVED_INDEX
    assert registry.index_of(lemonade) == 0
    assert store.get(KEY) == lemonade.encoded


def test_resolve_falls_back_to_first_saved_fluid() -> None:
    registry = FluidRegistry(RecordingKeyValueStore(), KEY)

    assert registry.resolve(0) == WATER

    registry.save([TEA])

    assert registry.resolve(0) == TEA
    assert registry.resolve(99) == TEA
    assert registry.resolve(-1) == TEA


def test_malformed_buffer_raises() -> None:
    store = RecordingKeyValueStore({KEY: pack_words(5, 0)})

    with pytest.raises(RecordDecodeError):
        FluidRegistry(store, KEY)


class FailingKeyValueStore(RecordingKeyValueStore):
    """Store whose writes fail until ``failing`` is cleared."""

    def __init__(self) -> None:
        super().__init__()
        self.failing = True

    def set(self, key: str, value: str) -> None:
        if self.failing:
            raise OSError("disk full")
        super().set(key, value)


def test_constructor_built_fluid_reuses_saved_index() -> None:
    registry = FluidRegistry(RecordingKeyValueStore(), KEY)

    assert registry.save([Fluid.create("Tea", "#a52", 90)]) == [0]
    assert registry.save([Fluid("Tea", "#A52", 90, False)]) == [0]
    assert len(registry.saved) == 1


def test_failed_write_does_not_assign_index() -> None:
    store = FailingKeyValueStore()
    registry = FluidRegistry(store, KEY)

    with pytest.raises(OSError):
        registry.save([TEA])

    assert registry.index_of(TEA) == UNSAVED_INDEX
    assert registry.saved == ()
    assert store.get(KEY) is None

    store.failing = False

    assert registry.ensure_saved(TEA) == 0
    assert store.get(KEY) == TEA.encoded
