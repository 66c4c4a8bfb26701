"""Main FastAPI application with modularized routes."""
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.routes import generation, tests, viewer
from core.errors import ViewerError
from core.logging_setup import setup_console_logging

setup_console_logging()
log = logging.getLogger(__name__)

app = FastAPI(title="Test Viewer API")

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ViewerError)
async def viewer_error_handler(request: Request, exc: ViewerError) -> JSONResponse:
    """Render viewer errors as ``{"error": message}`` with their status."""
    if exc.status_code >= 500:
        log.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed bodies get the same ``{"error": message}`` shape, as a 400."""
    errors = exc.errors()
    message = "Invalid request"
    if errors:
        field = ".".join(str(part) for part in errors[0].get("loc", ()) if part != "body")
        message = f"Invalid {field}" if field else message
    return JSONResponse(status_code=400, content={"error": message})


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


# Include routers
app.include_router(tests.router)
app.include_router(generation.router)
app.include_router(viewer.router)
