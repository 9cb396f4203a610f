"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator, Sequence
from contextlib import asynccontextmanager
from typing import Any
from uuid import UUID

from fastapi import FastAPI, Request, status
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from pydantic import ValidationError
from pydantic_core import to_jsonable_python

from life_planner.api.models import ChatRequest, chat_response
from life_planner.api.records import router as records_router
from life_planner.app_logging import configure_logging
from life_planner.containers import AppContainer
from life_planner.domain.errors import (
    ConfigurationError,
    ModelCallError,
    RecordNotFoundError,
    UnauthenticatedError,
)
from life_planner.services.calendar import CalendarService
from life_planner.services.chat import (
    GENERIC_ERROR_MESSAGE,
    MISSING_KEY_MESSAGE,
    model_error_message,
)

CALENDAR_FILENAME = "life-planner.ics"
CHAT_PATH = "/api/chat"


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

    app.include_router(records_router)

    @app.exception_handler(UnauthenticatedError)
    async def unauthenticated_handler(
        request: Request, exc: UnauthenticatedError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED, content={"detail": str(exc)}
        )

    @app.exception_handler(RecordNotFoundError)
    async def not_found_handler(
        request: Request, exc: RecordNotFoundError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)}
        )

    @app.exception_handler(ValidationError)
    async def validation_handler(
        request: Request, exc: ValidationError
    ) -> JSONResponse:
        errors = exc.errors(include_url=False, include_context=False)
        return JSONResponse(
            status_code=422, content={"detail": to_jsonable_python(errors)}
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        if request.url.path != CHAT_PATH:
            return await request_validation_exception_handler(request, exc)
        logger.warning("Rejected chat request", extra={"errors": len(exc.errors())})
        return _chat_error(
            status.HTTP_400_BAD_REQUEST, _invalid_chat_message(exc.errors())
        )

    @app.exception_handler(ValueError)
    async def bad_request_handler(request: Request, exc: ValueError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST, content={"detail": str(exc)}
        )

    @app.get("/health")
    async def health(request: Request) -> dict[str, object]:
        """Simple health check endpoint."""
        state_container: AppContainer = request.app.state.container
        return {
            "status": "ok",
            "openai_configured": state_container.chat_service.is_configured,
        }

    @app.post(CHAT_PATH)
    async def chat(payload: ChatRequest, request: Request) -> JSONResponse:
        """Run one assistant turn for a user message."""
        state_container: AppContainer = request.app.state.container
        if not payload.user_id:
            return _chat_error(
                status.HTTP_400_BAD_REQUEST, "Missing required field: userId"
            )
        try:
            owner_id = UUID(payload.user_id)
        except ValueError:
            return _chat_error(status.HTTP_400_BAD_REQUEST, "Invalid userId")
        if not payload.message.strip():
            return _chat_error(
                status.HTTP_400_BAD_REQUEST, "Missing required field: message"
            )
        chat_service = state_container.chat_service
        if not chat_service.is_configured:
            return _chat_error(
                status.HTTP_500_INTERNAL_SERVER_ERROR, MISSING_KEY_MESSAGE
            )

        services = state_container.planner_repositories.for_owner(owner_id)
        try:
            reply = await chat_service.reply(
                payload.message, payload.history(), services
            )
        except ModelCallError as exc:
            logger.exception(
                "Model call failed",
                extra={"owner_id": str(owner_id), "code": exc.code},
            )
            return _chat_error(
                status.HTTP_500_INTERNAL_SERVER_ERROR, model_error_message(exc.code)
            )
        except ConfigurationError as exc:
            return _chat_error(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc))
        except Exception:
            logger.exception("Chat request failed", extra={"owner_id": str(owner_id)})
            return _chat_error(
                status.HTTP_500_INTERNAL_SERVER_ERROR, GENERIC_ERROR_MESSAGE
            )
        return JSONResponse(
            content=to_jsonable_python(
                chat_response(reply.message, reply.actions, reply.conversation)
            )
        )

    @app.get("/api/calendar/{owner_id}")
    async def calendar_export(
        owner_id: UUID, request: Request, include_meals: bool = False
    ) -> Response:
        """Download the owner's schedule as an iCalendar file."""
        state_container: AppContainer = request.app.state.container
        services = state_container.planner_repositories.for_owner(owner_id)
        document = CalendarService(services).export(include_meals=include_meals)
        logger.info(
            "Calendar exported",
            extra={"owner_id": str(owner_id), "include_meals": include_meals},
        )
        return Response(
            content=document,
            media_type="text/calendar",
            headers={
                "Content-Disposition": f'attachment; filename="{CALENDAR_FILENAME}"'
            },
        )

    return app


def _chat_error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=chat_response(message))


def _invalid_chat_message(errors: Sequence[Any]) -> str:
    if not errors:
        return "Invalid chat request"
    first = errors[0]
    field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    return f"Invalid chat request field {field or 'body'}: {first.get('msg', '')}"
