"""
Aramiyot FastAPI Application
Main application entry point for the wellness backend
"""
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from typing import Optional
import uvicorn
from contextlib import asynccontextmanager

from .utils.config import Config, get_config
from .utils.logger import setup_logger
from .auth import SessionManager, auth_router
from .api import chat_stream_router, flows_router, boards_router, library_router, todos_router
from .errors import (
    BoardNotFoundError, FlowError, FlowInputError, GenerationError, InvalidInputError,
    PayloadTooLargeError, StorageError, flatten_validation_errors
)
from .flows import Flows
from .genai import GenerativeClient, GoogleGenerativeClient, StubGenerativeClient
from .services.boards import BoardBackend, create_board_backend
from .storage import LocalStorage

logger = setup_logger(__name__)

GENERIC_ERROR_DETAILS = "An unexpected error occurred. Please try again."


def build_genai_client(config: Config) -> GenerativeClient:
    """Generative backend for the configured provider; the stub when no API key is set"""
    if config.GENAI_PROVIDER == "stub":
        logger.info("Using stub generative backend")
        return StubGenerativeClient()

    if not config.GENAI_API_KEY:
        logger.warning("GENAI_API_KEY is not set, falling back to the stub generative backend")
        return StubGenerativeClient()

    return GoogleGenerativeClient(
        api_key=config.GENAI_API_KEY,
        model=config.GENAI_MODEL,
        api_base=config.GENAI_API_BASE,
        timeout=config.GENAI_TIMEOUT,
    )


def _error(status_code: int, error: str, details=None, headers=None) -> JSONResponse:
    content = {"error": error}
    if details is not None:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content, headers=headers)


def add_exception_handlers(app: FastAPI):
    """Map application errors to ``{"error", "details"}`` JSON responses"""

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return _error(400, "Invalid input", flatten_validation_errors(exc.errors()))

    @app.exception_handler(FlowInputError)
    async def flow_input_handler(request: Request, exc: FlowInputError):
        return _error(400, "Invalid input", exc.details)

    @app.exception_handler(InvalidInputError)
    async def invalid_input_handler(request: Request, exc: InvalidInputError):
        return _error(400, "Invalid input", exc.details)

    @app.exception_handler(PayloadTooLargeError)
    async def payload_too_large_handler(request: Request, exc: PayloadTooLargeError):
        return _error(413, "Payload too large", str(exc))

    @app.exception_handler(BoardNotFoundError)
    async def board_not_found_handler(request: Request, exc: BoardNotFoundError):
        return _error(404, "Board not found", exc.board_id)

    @app.exception_handler(FlowError)
    async def flow_error_handler(request: Request, exc: FlowError):
        logger.error(f"Flow failed on {request.url.path}: {exc}")
        return _error(500, "Failed to process request", GENERIC_ERROR_DETAILS)

    @app.exception_handler(GenerationError)
    async def generation_error_handler(request: Request, exc: GenerationError):
        logger.error(f"Generative backend failed on {request.url.path}: {exc} (status={exc.status_code})")
        return _error(500, "Failed to process request", GENERIC_ERROR_DETAILS)

    @app.exception_handler(StorageError)
    async def storage_error_handler(request: Request, exc: StorageError):
        logger.error(f"Storage failure on {request.url.path}: {exc}")
        return _error(500, "Failed to save data", "Your changes could not be saved. Please try again.")

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return _error(exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.error(f"Internal server error on {request.url.path}: {exc}", exc_info=exc)
        return _error(500, "Internal server error", GENERIC_ERROR_DETAILS)


def create_app(
    config: Optional[Config] = None,
    genai_client: Optional[GenerativeClient] = None,
    board_backend: Optional[BoardBackend] = None,
    storage: Optional[LocalStorage] = None,
) -> FastAPI:
    """
    Build the application with its services

    Every collaborator is created here once and stored on ``app.state``;
    route handlers receive them through dependencies. Tests pass their own
    stub client, storage or board backend.
    """
    config = config or get_config()

    if storage is None:
        storage = LocalStorage(config.LOCAL_STORAGE_PATH, config.LOCAL_STORAGE_QUOTA_BYTES)
    if genai_client is None:
        genai_client = build_genai_client(config)
    if board_backend is None:
        board_backend = create_board_backend(config, storage)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan events"""
        logger.info("Aramiyot application starting up...")
        logger.info(f"Environment: {config.__class__.__name__}")
        logger.info(f"Debug mode: {config.DEBUG}")
        logger.info(f"Generative backend: {genai_client.__class__.__name__}")
        logger.info(f"Boards backend: {board_backend.__class__.__name__}")

        yield

        logger.info("Aramiyot application shutting down...")

    app = FastAPI(
        title="Aramiyot",
        description="Wellness dashboard backend: AI chat, recommendations, boards and library",
        version="1.0.0",
        debug=config.DEBUG,
        lifespan=lifespan
    )

    app.state.config = config
    app.state.storage = storage
    app.state.genai_client = genai_client
    app.state.flows = Flows(genai_client)
    app.state.board_backend = board_backend
    app.state.session_manager = SessionManager(
        secret_key=config.SECRET_KEY,
        session_timeout=config.SESSION_TIMEOUT,
        cookie_secure=not config.DEBUG
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials="*" not in config.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def limit_request_size(request: Request, call_next):
        """Reject declared bodies over MAX_REQUEST_BYTES before they are read"""
        declared = request.headers.get("content-length")
        if declared and declared.isdigit() and int(declared) > config.MAX_REQUEST_BYTES:
            logger.warning(f"Rejected {declared}-byte request to {request.url.path}")
            return _error(413, "Payload too large", str(PayloadTooLargeError(config.MAX_REQUEST_BYTES)))
        return await call_next(request)

    add_exception_handlers(app)

    app.include_router(auth_router)
    app.include_router(chat_stream_router)
    app.include_router(flows_router)
    app.include_router(boards_router)
    app.include_router(library_router)
    app.include_router(todos_router)

    @app.get("/health")
    async def health_check():
        """Health check endpoint for load balancers"""
        return {
            "status": "healthy",
            "service": "Aramiyot",
            "version": "1.0.0",
            "environment": config.__class__.__name__
        }

    @app.get("/api/status")
    async def api_status():
        """API status endpoint"""
        return {
            "api_status": "operational",
            "genai": config.get_genai_config(),
            "genai_backend": genai_client.__class__.__name__,
            "storage": config.get_storage_config()
        }

    return app


app = create_app()


# Development server
if __name__ == "__main__":
    _config = get_config()
    uvicorn.run(
        "aramiyot.main:app",
        host="0.0.0.0",
        port=8000,
        reload=_config.DEBUG,
        log_level="debug" if _config.DEBUG else "info"
    )
