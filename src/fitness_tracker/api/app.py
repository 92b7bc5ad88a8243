"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import asdict
from datetime import UTC, date, datetime
from uuid import UUID

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from fitness_tracker.api.models import EntryRequest, ParseAIRequest, ParseRequest
from fitness_tracker.app_logging import configure_logging
from fitness_tracker.containers import AppContainer
from fitness_tracker.errors import (
    ConfigError,
    FormatError,
    LookupUnavailable,
    ParseError,
    SchemaError,
    UnparseableInput,
)
from fitness_tracker.services.parsing import parse_input

_EXAMPLES = {
    "exercise": "bench press 3x8 at 185",
    "cardio": "running 3 miles in 25 minutes",
    "meal": "200g chicken breast and 1 cup rice",
    "weight": "214.5 pounds",
}

_ERROR_STATUS: dict[type[ParseError], int] = {
    UnparseableInput: 422,
    ConfigError: 500,
    FormatError: 502,
    SchemaError: 502,
    LookupUnavailable: 503,
}


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.exception_handler(ParseError)
    async def parse_error_handler(request: Request, exc: ParseError) -> JSONResponse:
        status_code = _ERROR_STATUS.get(type(exc), 500)
        logger.warning("%s on %s: %s", exc.error_type, request.url.path, exc.message)
        return JSONResponse(status_code=status_code, content=_error_body(exc))

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/parse")
    async def parse(payload: ParseRequest) -> dict[str, object]:
        """Parse free text with the pattern-based parsers."""
        record = parse_input(payload.text, payload.type)
        if record is None:
            raise UnparseableInput(_rephrase_message(payload.type))
        return {"success": True, "data": asdict(record)}

    @app.post("/parse-ai")
    async def parse_ai(payload: ParseAIRequest, request: Request) -> dict[str, object]:
        """Extract a food or exercise record with the completion model."""
        state_container: AppContainer = request.app.state.container
        record = await state_container.extraction_service.extract(
            payload.input_text, payload.type, payload.body_weight_kg
        )
        return {"success": True, "data": asdict(record)}

    @app.post("/users/{user_id}/entries", status_code=status.HTTP_201_CREATED)
    async def create_entry(
        user_id: UUID, payload: EntryRequest, request: Request
    ) -> dict[str, object]:
        """Parse free text and store it as the user's entry for a day."""
        state_container: AppContainer = request.app.state.container
        day = payload.day or datetime.now(UTC).date()
        if payload.use_ai and payload.type != "weight":
            record = await state_container.extraction_service.extract(
                payload.text,
                "food" if payload.type == "meal" else "exercise",
                payload.body_weight_kg,
            )
        else:
            record = parse_input(payload.text, payload.type)
            if record is None:
                raise UnparseableInput(_rephrase_message(payload.type))
        entry = state_container.entry_service.save(user_id, day, record)
        return {
            "success": True,
            "data": {"record": asdict(record), "entry": asdict(entry)},
        }

    @app.get("/users/{user_id}/days/{day}/nutrition")
    async def day_nutrition(
        user_id: UUID, day: date, request: Request
    ) -> dict[str, object]:
        """Return planned versus completed macros for a day."""
        state_container: AppContainer = request.app.state.container
        nutrition = state_container.daily_service.get_nutrition(user_id, day)
        return {"success": True, "data": asdict(nutrition)}

    return app


def _rephrase_message(record_type: str) -> str:
    example = _EXAMPLES.get(record_type)
    if example is None:
        return "Could not parse input. Please try rephrasing."
    return (
        f"Could not parse {record_type} input. "
        f"Please try rephrasing, e.g. '{example}'."
    )


def _error_body(exc: ParseError) -> dict[str, object]:
    body: dict[str, object] = {
        "success": False,
        "error": exc.message,
        "errorType": exc.error_type,
    }
    if exc.raw_content is not None:
        body["rawContent"] = exc.raw_content
    return body
