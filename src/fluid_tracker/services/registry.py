"""Persistent, deduplicated registry of fluids."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from fluid_tracker.domain.fluids import WATER, Fluid, decode_fluids
from fluid_tracker.services.storage import KeyValueStore

logger = logging.getLogger(__name__)

UNSAVED_INDEX = -1


@dataclass
class FluidRegistry:
    """Append-only collection of saved fluids plus the set offered for selection.

    A fluid's index is assigned once, when it is first saved, and equals its
    position in the stored buffer. Entries reference fluids by that index, so
    saved fluids are never reordered or removed.
    """

    store: KeyValueStore
    key: str
    _saved: list[Fluid]
    _indices: dict[Fluid, int]
    _shown: list[Fluid]

    def __init__(self, store: KeyValueStore, key: str) -> None:
        self.store = store
        self.key = key
        self._saved = decode_fluids(store.get(key))
        self._indices = {}
        for index, fluid in enumerate(self._saved):
            self._indices.setdefault(fluid, index)
        self._shown = [fluid for fluid in self._saved if fluid.always_shown]

    @property
    def saved(self) -> tuple[Fluid, ...]:
        return tuple(self._saved)

    def list_selectable(self) -> list[Fluid]:
        """Return the fluids currently offered as choices."""
        return list(self._shown)

    def index_of(self, fluid: Fluid) -> int:
        """Return the saved index of a fluid, or ``UNSAVED_INDEX``."""
        return self._indices.get(fluid, UNSAVED_INDEX)

    def save(self, fluids: Iterable[Fluid]) -> list[int]:
        """Persist fluids that are not yet saved and return each one's index.

        Fluids equal by value to a saved fluid reuse its index. Nothing is
        committed in memory unless the store write succeeds.
        """
        saved = list(self._saved)
        indices_by_fluid = dict(self._indices)
        indices: list[int] = []
        for fluid in fluids:
            index = indices_by_fluid.get(fluid)
            if index is None:
                index = len(saved)
                saved.append(fluid)
                indices_by_fluid[fluid] = index
            indices.append(index)
        if len(saved) > len(self._saved):
            self.store.set(self.key, "".join(fluid.encoded for fluid in saved))
            for fluid in saved[len(self._saved) :]:
                logger.info(
                    "Saved fluid %r at index %d", fluid.name, indices_by_fluid[fluid]
                )
            self._saved = saved
            self._indices = indices_by_fluid
        return indices

    def ensure_saved(self, fluid: Fluid) -> int:
        """Return the fluid's index, saving it first when needed."""
        return self.save([fluid])[0]

    def show(self, fluids: Iterable[Fluid]) -> None:
        """Offer fluids for selection and persist the always-shown ones."""
        to_save: list[Fluid] = []
        for fluid in fluids:
            if fluid in self._shown:
                continue
            self._shown.append(fluid)
            if fluid.always_shown:
                to_save.append(fluid)
        if to_save:
            self.save(to_save)

    def ensure_defaults(self) -> None:
        """Offer the built-in water fluid."""
        self.show([WATER])

    def resolve(self, index: int) -> Fluid:
        """Return the saved fluid at ``index``, or the default fluid if absent."""
        if 0 <= index < len(self._saved):
            return self._saved[index]
        logger.debug("Fluid index %d is not saved; using the default fluid", index)
        return self.default_fluid

    @property
    def default_fluid(self) -> Fluid:
        if self._saved:
            return self._saved[0]
        return WATER
