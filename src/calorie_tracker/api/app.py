"""FastAPI application factory."""

import logging
from dataclasses import asdict
from uuid import UUID

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse, Response

from calorie_tracker.api.models import (
    CustomFoodRequest,
    GoalPatchRequest,
    GoalRequest,
    LogEntryRequest,
    PreferencesRequest,
    ProfileRequest,
)
from calorie_tracker.app_logging import configure_logging
from calorie_tracker.containers import AppContainer
from calorie_tracker.domain.errors import LogImportError, ValidationError
from calorie_tracker.domain.goals import Goal, GoalPreview
from calorie_tracker.domain.log import LogEntry
from calorie_tracker.domain.preferences import Preferences
from calorie_tracker.services.session import TrackerSession


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.debug)
    logger = logging.getLogger(__name__)
    search_limit = container.settings.search_result_limit

    app = FastAPI()
    app.state.container = container

    @app.exception_handler(ValidationError)
    async def validation_error_handler(
        request: Request, exc: ValidationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content={"detail": str(exc)},
        )

    @app.exception_handler(LogImportError)
    async def import_error_handler(
        request: Request, exc: LogImportError
    ) -> JSONResponse:
        logger.warning("CSV import rejected: %s", exc)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": "Invalid CSV", "reason": str(exc)},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/foods")
    async def search_foods(
        request: Request, q: str = "", limit: int | None = None
    ) -> dict[str, object]:
        """Search the food catalog."""
        session = _session(request)
        foods = session.search(q, limit or search_limit)
        return {"results": [asdict(food) for food in foods]}

    @app.post("/foods", status_code=status.HTTP_201_CREATED)
    async def add_custom_food(
        payload: CustomFoodRequest, request: Request
    ) -> dict[str, object]:
        """Add a user-submitted food to the catalog."""
        food = _session(request).add_custom_food(payload.model_dump())
        return asdict(food)

    @app.get("/log")
    async def get_log(request: Request) -> dict[str, object]:
        """Return log entries with totals and goal progress."""
        return _log_summary(_session(request))

    @app.post("/log", status_code=status.HTTP_201_CREATED)
    async def add_log_entry(
        payload: LogEntryRequest, request: Request
    ) -> dict[str, object]:
        """Log a portion of a catalog food."""
        session = _session(request)
        food = session.find_food(payload.food)
        if food is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail="Unknown food"
            )
        entry = session.add_entry(food, payload.grams, payload.meal)
        return _entry_payload(entry)

    @app.delete("/log/{entry_id}")
    async def remove_log_entry(entry_id: UUID, request: Request) -> dict[str, object]:
        """Remove an entry; unknown ids are ignored."""
        session = _session(request)
        removed = session.remove_entry(entry_id)
        return {"removed": removed, **_log_summary(session)}

    @app.delete("/log")
    async def clear_log(request: Request) -> dict[str, object]:
        """Remove every log entry."""
        session = _session(request)
        session.clear_log()
        return _log_summary(session)

    @app.get("/log/export")
    async def export_log(request: Request) -> Response:
        """Download the log as CSV."""
        export = _session(request).export_csv()
        return Response(
            content=export.content,
            media_type="text/csv",
            headers={
                "Content-Disposition": f'attachment; filename="{export.filename}"'
            },
        )

    @app.post("/log/import")
    async def import_log(request: Request) -> dict[str, object]:
        """Import a CSV export sent as the raw request body."""
        body = await request.body()
        session = _session(request)
        try:
            text = body.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise LogImportError("File is not UTF-8 text") from exc
        entries = session.import_csv(text)
        return {"imported": len(entries), **_log_summary(session)}

    @app.get("/goal")
    async def get_goal(request: Request) -> dict[str, object]:
        """Return the daily goal."""
        return asdict(_session(request).goal)

    @app.put("/goal")
    async def replace_goal(payload: GoalRequest, request: Request) -> dict[str, object]:
        """Replace the daily goal."""
        goal = _session(request).set_goal(Goal(**payload.model_dump()))
        return asdict(goal)

    @app.patch("/goal")
    async def edit_goal(
        payload: GoalPatchRequest, request: Request
    ) -> dict[str, object]:
        """Edit individual goal fields."""
        goal = _session(request).update_goal(payload.model_dump(exclude_none=True))
        return asdict(goal)

    @app.post("/goal/preview")
    async def preview_goal(
        payload: ProfileRequest, request: Request
    ) -> dict[str, object]:
        """Update biometric inputs and return the derived goal without saving."""
        session = _session(request)
        preview = session.update_profile(payload.model_dump(exclude_none=True))
        return _preview_payload(session, preview)

    @app.post("/goal/commit")
    async def commit_goal(request: Request) -> dict[str, object]:
        """Adopt the goal derived from the current biometric inputs."""
        goal = _session(request).commit_goal_preview()
        return asdict(goal)

    @app.get("/preferences")
    async def get_preferences(request: Request) -> dict[str, object]:
        """Return display preferences."""
        return asdict(_session(request).preferences)

    @app.put("/preferences")
    async def set_preferences(
        payload: PreferencesRequest, request: Request
    ) -> dict[str, object]:
        """Replace display preferences."""
        preferences = _session(request).set_preferences(
            Preferences(**payload.model_dump())
        )
        return asdict(preferences)

    return app


def _session(request: Request) -> TrackerSession:
    container: AppContainer = request.app.state.container
    return container.session


def _entry_payload(entry: LogEntry) -> dict[str, object]:
    payload = asdict(entry)
    payload["id"] = str(entry.id)
    payload["meal"] = entry.meal.value
    return payload


def _log_summary(session: TrackerSession) -> dict[str, object]:
    return {
        "entries": [_entry_payload(entry) for entry in session.entries],
        "totals": asdict(session.totals()),
        "progress": asdict(session.progress()),
        "remaining": asdict(session.remaining()),
        "goal": asdict(session.goal),
    }


def _preview_payload(
    session: TrackerSession, preview: GoalPreview
) -> dict[str, object]:
    profile = asdict(session.profile)
    profile["sex"] = session.profile.sex.value
    return {
        "bmr": preview.bmr,
        "tdee": preview.tdee,
        "goal": asdict(preview.goal),
        "profile": profile,
    }
