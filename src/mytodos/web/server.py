"""
FastAPI web server for MyTODOs.

This module exposes the in-memory task store as a small REST API:
list, create, update and delete tasks.
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import List, Optional

from fastapi import APIRouter, Depends, FastAPI, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field
import uvicorn

from mytodos import __version__
from mytodos.config import ConfigModel, get_config
from mytodos.errors import NotFoundError, ValidationError
from mytodos.store import TaskStore, get_task_store
from mytodos.task import Task


logger = logging.getLogger(__name__)


class TaskCreateRequest(BaseModel):
    """Request model for creating a new task. Any client-supplied id is ignored."""
    model_config = ConfigDict(populate_by_name=True)

    description: Optional[str] = None
    is_completed: bool = Field(False, alias="isCompleted")
    id: Optional[str] = None


class TaskUpdateRequest(BaseModel):
    """Request model for replacing a task's state."""
    model_config = ConfigDict(populate_by_name=True)

    description: Optional[str] = None
    is_completed: bool = Field(False, alias="isCompleted")


class TaskResponse(BaseModel):
    """Response model for task data."""
    model_config = ConfigDict(populate_by_name=True)

    id: str
    description: str
    is_completed: bool = Field(alias="isCompleted")


class HealthResponse(BaseModel):
    """Response model for health check."""
    model_config = ConfigDict(populate_by_name=True)

    status: str = "healthy"
    timestamp: str
    version: str
    total_tasks: int = Field(alias="totalTasks")


def task_to_response(task: Task) -> TaskResponse:
    """Convert a Task to TaskResponse."""
    return TaskResponse(id=task.id, description=task.description, is_completed=task.is_completed)


router = APIRouter(prefix="/tasks", tags=["tasks"])


@router.get("", response_model=List[TaskResponse])
async def list_tasks(store: TaskStore = Depends(get_task_store)):
    """Get all tasks in insertion order."""
    return [task_to_response(task) for task in store.list()]


@router.post("", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
async def create_task(
    task_data: TaskCreateRequest,
    request: Request,
    response: Response,
    store: TaskStore = Depends(get_task_store),
):
    """Create a new task; the store assigns its id."""
    task = store.create(task_data.description, task_data.is_completed)
    response.headers["Location"] = f"{request.url.path.rstrip('/')}/{task.id}"
    return task_to_response(task)


@router.put("/{task_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def update_task(
    task_id: str,
    task_data: TaskUpdateRequest,
    store: TaskStore = Depends(get_task_store),
):
    """Replace description and completion flag of an existing task."""
    store.update(task_id, task_data.description, task_data.is_completed)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def delete_task(task_id: str, store: TaskStore = Depends(get_task_store)):
    """Delete a task."""
    store.delete(task_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


async def health_check(store: TaskStore = Depends(get_task_store)):
    """Health check endpoint with store status."""
    return HealthResponse(
        timestamp=datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
        version=__version__,
        total_tasks=store.count(),
    )


async def validation_error_handler(request: Request, exc: ValidationError):
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": str(exc)})


async def not_found_handler(request: Request, exc: NotFoundError):
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)})


async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Malformed request bodies are client errors, like a blank description."""
    logger.debug(f"Rejected malformed request to {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "Malformed request body."},
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    logger.info("Starting MyTODOs task store")
    yield
    logger.info("MyTODOs task store stopped")


def create_app(config: Optional[ConfigModel] = None) -> FastAPI:
    """Build the FastAPI application."""
    config = config or get_config()

    app = FastAPI(
        title="MyTODOs API",
        description="In-memory task store for MyTODOs",
        version=__version__,
        lifespan=lifespan,
    )

    # Allow the UI origin(s)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(config.cors_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(NotFoundError, not_found_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)

    app.include_router(router)
    app.include_router(router, prefix="/api")
    app.add_api_route("/health", health_check, methods=["GET"], response_model=HealthResponse)

    return app


app = create_app()


def start_server(host: str = "127.0.0.1", port: int = 5160, debug: bool = False):
    """Start the web server."""
    uvicorn.run(
        "mytodos.web.server:app",
        host=host,
        port=port,
        reload=debug,
        log_level="debug" if debug else "info",
    )


if __name__ == "__main__":
    config = get_config()
    start_server(config.host, config.port)
