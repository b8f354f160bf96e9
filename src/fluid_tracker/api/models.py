"""Pydantic models for API request payloads."""

from pydantic import BaseModel, Field

from fluid_tracker.domain.fluids import DEFAULT_COLOR


class FluidCreate(BaseModel):
    """A fluid to offer for selection."""

    name: str = Field(min_length=1)
    color: str = DEFAULT_COLOR
    hydration: float = 100
    always_shown: bool = False


class EntryCreate(BaseModel):
    """An entry registered for today.

    ``fluid_index`` is the position in the selectable fluid list.
    """

    fluid_index: int = Field(ge=0)
    amount: float
    is_oz: bool | None = None


class GoalUpdate(BaseModel):
    """A replacement goal for one day."""

    goal: float
    is_oz: bool | None = None


class PreferencesUpdate(BaseModel):
    """Partial preference update."""

    use_oz: bool | None = None
    use_meridiem: bool | None = None
