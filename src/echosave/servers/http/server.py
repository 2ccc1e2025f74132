"""
Local HTTP API for EchoSave.

Lets editor plugins and other hosts drive code groups over JSON:
- List, save and delete files of a code group
- Delete a whole code group
- Add a local file to the active code group
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List, Optional, Sequence

import uvicorn
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from ...core.commands import UNEXPECTED_NOTICE
from ...core.config import Settings, load_settings
from ...core.errors import InvalidKeyError, LocalIOError, NoActiveGroupError
from ...core.logging import configure_logging
from ...core.repository import GroupRepository
from ...core.results import BackendFailure, Ok, Result
from ...core.runtime import Runtime, create_runtime
from ...core.store import RecordStore
from .models import (
    ActionResponse,
    AddFileRequest,
    GroupListing,
    HealthResponse,
    Notice,
    SaveFileRequest,
    SessionResponse,
)

logger = logging.getLogger(__name__)


class RequestPort:
    """Non-interactive port that records the notices of one request."""

    def __init__(self):
        self.notices: List[Notice] = []

    async def show_info(self, message: str) -> None:
        self.notices.append(Notice(level="info", message=message))

    async def show_error(self, message: str) -> None:
        self.notices.append(Notice(level="error", message=message))

    async def prompt_text(self, prompt: str) -> Optional[str]:
        return None

    async def pick(self, items: Sequence[str], placeholder: str) -> Optional[str]:
        return None

    async def pick_local_file(self) -> Optional[Path]:
        return None

    async def show_document(self, path: Path) -> None:
        return None


class HTTPServer:
    """FastAPI server sharing one store and one session across requests."""

    def __init__(self, settings: Settings, store: Optional[RecordStore] = None):
        self.settings = settings
        self.runtime: Runtime = create_runtime(settings, None, "http", store=store)
        self.app = self._create_app()

    def _repository(self, port: RequestPort) -> GroupRepository:
        return GroupRepository(self.runtime.store, port)

    @staticmethod
    def _respond(result: Result, port: RequestPort) -> ActionResponse:
        if isinstance(result, Ok):
            return ActionResponse(ok=True, notices=port.notices)
        status = 502 if isinstance(result, BackendFailure) else 500
        raise HTTPException(
            status_code=status,
            detail=ActionResponse(ok=False, notices=port.notices).model_dump(),
        )

    def _create_app(self) -> FastAPI:
        """Create and configure FastAPI application."""
        app = FastAPI(
            title="EchoSave HTTP Server",
            version="0.1.0",
            description="HTTP API for sharing code groups of text files"
        )

        # Editor webviews call from their own origins
        app.add_middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_methods=["*"],
            allow_headers=["*"],
        )

        self._register_routes(app)
        return app

    def _register_routes(self, app: FastAPI) -> None:
        """Register API routes."""

        @app.get("/health", response_model=HealthResponse)
        async def health_endpoint() -> HealthResponse:
            return HealthResponse(
                status="healthy",
                service="EchoSave HTTP Server",
                backend_configured=self.runtime.config_error is None,
            )

        @app.get("/groups/{code}", response_model=GroupListing)
        async def list_group(code: str) -> GroupListing:
            """List a group's files and make it the active code group."""
            port = RequestPort()
            try:
                self.runtime.session.set_active(code)
            except InvalidKeyError as e:
                raise HTTPException(status_code=422, detail=str(e))
            files = await self._repository(port).list_files(code)
            ok = not any(n.level == "error" for n in port.notices)
            return GroupListing(ok=ok, code=code, files=files, notices=port.notices)

        @app.put("/groups/{code}/files/{file_name}", response_model=ActionResponse)
        async def save_file(code: str, file_name: str, request: SaveFileRequest) -> ActionResponse:
            port = RequestPort()
            try:
                result = await self._repository(port).save_file(code, file_name, request.content)
            except InvalidKeyError as e:
                raise HTTPException(status_code=422, detail=str(e))
            return self._respond(result, port)

        @app.delete("/groups/{code}/files/{file_name}", response_model=ActionResponse)
        async def delete_file(code: str, file_name: str) -> ActionResponse:
            port = RequestPort()
            result = await self._repository(port).delete_file(code, file_name)
            return self._respond(result, port)

        @app.delete("/groups/{code}", response_model=ActionResponse)
        async def delete_group(code: str) -> ActionResponse:
            port = RequestPort()
            result = await self._repository(port).delete_group(code, self.runtime.session)
            return self._respond(result, port)

        @app.get("/session", response_model=SessionResponse)
        async def get_session() -> SessionResponse:
            return SessionResponse(active_code=self.runtime.session.get_active())

        @app.post("/session/files", response_model=ActionResponse)
        async def add_file_to_active_group(request: AddFileRequest) -> ActionResponse:
            """Read a file from this machine and save it into the active group."""
            port = RequestPort()
            try:
                result = await self.runtime.bind(port).add_file_to_active_group(request.path)
            except NoActiveGroupError as e:
                raise HTTPException(status_code=409, detail=str(e))
            except LocalIOError as e:
                raise HTTPException(status_code=400, detail=str(e))
            except InvalidKeyError as e:
                raise HTTPException(status_code=422, detail=str(e))
            except Exception as e:
                logger.exception("Adding %s failed: %s", request.path, e)
                raise HTTPException(status_code=500, detail=UNEXPECTED_NOTICE)
            return self._respond(result, port)

    async def startup(self):
        """Startup tasks."""
        logger.info("Starting EchoSave HTTP Server")
        logger.info("Supabase URL: %s (table %s)", self.settings.supabase_url or "<unset>", self.settings.table)
        if self.runtime.config_error is not None:
            logger.error("Backend calls will fail: %s", self.runtime.config_error)

    async def shutdown(self):
        """Cleanup tasks."""
        logger.info("Shutting down EchoSave HTTP Server")
        await self.runtime.aclose()


def create_app(settings: Optional[Settings] = None, store: Optional[RecordStore] = None) -> FastAPI:
    """Factory function to create FastAPI application."""
    server = HTTPServer(settings or load_settings(), store=store)

    @server.app.on_event("startup")
    async def startup_event():
        await server.startup()

    @server.app.on_event("shutdown")
    async def shutdown_event():
        await server.shutdown()

    return server.app


def parse_args(argv: Optional[Sequence[str]] = None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="EchoSave HTTP Server")
    parser.add_argument("--config", type=Path, help="Configuration YAML file path")
    parser.add_argument("--env-file", type=Path, help="Path to .env file with Supabase credentials")
    parser.add_argument("--host", default="127.0.0.1", help="Host to bind to (default: 127.0.0.1)")
    parser.add_argument("--port", type=int, default=8812, help="Port to bind to (default: 8812)")
    return parser.parse_args(argv)


def run(argv: Optional[Sequence[str]] = None) -> None:
    """Main entry point."""
    args = parse_args(argv)
    settings = load_settings(args.config, args.env_file)
    configure_logging(settings.log_level)

    app = create_app(settings)
    logger.info("Starting EchoSave HTTP server on %s:%s", args.host, args.port)
    try:
        uvicorn.run(
            app,
            host=args.host,
            port=args.port,
            log_level=settings.log_level.lower(),
        )
    except KeyboardInterrupt:
        logger.info("Server stopped by user")
