"""FastAPI application factory."""

import logging
from dataclasses import asdict

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse

from fluid_tracker.api.models import (
    EntryCreate,
    FluidCreate,
    GoalUpdate,
    PreferencesUpdate,
)
from fluid_tracker.app_logging import configure_logging
from fluid_tracker.config import parse_log_level
from fluid_tracker.containers import AppContainer
from fluid_tracker.domain.calendar import CalendarGrid
from fluid_tracker.domain.codec import RecordDecodeError
from fluid_tracker.domain.entries import format_entry
from fluid_tracker.domain.fluids import Fluid
from fluid_tracker.services.registry import FluidRegistry


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(parse_log_level(container.settings.log_level))
    logger = logging.getLogger(__name__)

    app = FastAPI()
    app.state.container = container

    @app.exception_handler(RecordDecodeError)
    async def record_decode_error(
        request: Request, exc: RecordDecodeError
    ) -> JSONResponse:
        logger.warning("Malformed record for %s: %s", request.url.path, exc)
        return JSONResponse(
            status_code=422,
            content={"detail": f"Malformed stored record: {exc}"},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/fluids")
    async def list_fluids(request: Request) -> dict[str, object]:
        """Return the fluids offered for selection."""
        state_container: AppContainer = request.app.state.container
        registry = state_container.registry
        return {
            "fluids": [
                _fluid_payload(position, fluid, registry)
                for position, fluid in enumerate(registry.list_selectable())
            ]
        }

    @app.post("/fluids", status_code=status.HTTP_201_CREATED)
    async def show_fluid(payload: FluidCreate, request: Request) -> dict[str, object]:
        """Offer a new fluid; always-shown fluids are saved immediately."""
        state_container: AppContainer = request.app.state.container
        registry = state_container.registry
        fluid = Fluid.create(
            payload.name, payload.color, payload.hydration, payload.always_shown
        )
        registry.show([fluid])
        position = registry.list_selectable().index(fluid)
        return _fluid_payload(position, fluid, registry)

    @app.post("/entries", status_code=status.HTTP_201_CREATED)
    async def register_entry(
        payload: EntryCreate, request: Request
    ) -> dict[str, object]:
        """Register an entry for today."""
        state_container: AppContainer = request.app.state.container
        selectable = state_container.registry.list_selectable()
        if payload.fluid_index >= len(selectable):
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail="Unknown fluid"
            )
        prefs = state_container.preferences_service.get_preferences()
        is_oz = prefs.use_oz if payload.is_oz is None else payload.is_oz
        entry = state_container.daily_log_service.register_entry(
            selectable[payload.fluid_index], is_oz, payload.amount
        )
        return asdict(format_entry(entry, prefs.use_oz, prefs.use_meridiem))

    @app.get("/days/{year}/{month}/{day}")
    async def day_view(
        year: int, month: int, day: int, request: Request
    ) -> dict[str, object]:
        """Return the formatted log of one day."""
        state_container: AppContainer = request.app.state.container
        try:
            view = state_container.daily_log_service.get_day_view(year, month, day)
        except RecordDecodeError:
            raise
        except ValueError as exc:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)
            ) from exc
        payload = asdict(view)
        payload["day"] = view.day.isoformat()
        return payload

    @app.put("/days/{year}/{month}/{day}/goal")
    async def set_goal(
        year: int, month: int, day: int, payload: GoalUpdate, request: Request
    ) -> dict[str, object]:
        """Replace the goal of one day."""
        state_container: AppContainer = request.app.state.container
        try:
            log = state_container.daily_log_service.set_goal(
                year, month, day, payload.goal, payload.is_oz
            )
        except RecordDecodeError:
            raise
        except ValueError as exc:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)
            ) from exc
        return {"goal": log.goal, "is_oz": log.is_oz, "total": log.total}

    @app.get("/months/{year}/{month}")
    async def month_grid(year: int, month: int, request: Request) -> dict[str, object]:
        """Return the calendar grid of a month."""
        state_container: AppContainer = request.app.state.container
        try:
            grid = state_container.calendar_service.get_month_grid(year, month)
        except ValueError as exc:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)
            ) from exc
        return _grid_payload(grid)

    @app.get("/preferences")
    async def get_preferences(request: Request) -> dict[str, bool]:
        state_container: AppContainer = request.app.state.container
        return asdict(state_container.preferences_service.get_preferences())

    @app.put("/preferences")
    async def set_preferences(
        payload: PreferencesUpdate, request: Request
    ) -> dict[str, bool]:
        """Update display preferences."""
        state_container: AppContainer = request.app.state.container
        updated = state_container.preferences_service.set_preferences(
            use_oz=payload.use_oz, use_meridiem=payload.use_meridiem
        )
        return asdict(updated)

    return app


def _fluid_payload(
    position: int, fluid: Fluid, registry: FluidRegistry
) -> dict[str, object]:
    return {
        "position": position,
        "name": fluid.name,
        "color": fluid.color,
        "hydration": fluid.hydration,
        "always_shown": fluid.always_shown,
        "saved_index": registry.index_of(fluid),
    }


def _grid_payload(grid: CalendarGrid) -> dict[str, object]:
    return {
        "year": grid.month.year,
        "month": grid.month.month,
        "label": grid.label,
        "leading_blanks": grid.leading_blanks,
        "previous": asdict(grid.month.previous()),
        "next": asdict(grid.month.next()),
        "rows": [
            [
                None
                if cell is None
                else {
                    "day": cell.day,
                    "key": cell.key,
                    "has_data": cell.has_data,
                    "is_today": cell.is_today,
                    "openable": cell.openable,
                }
                for cell in row
            ]
            for row in grid.rows
        ],
    }
