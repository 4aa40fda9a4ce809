"""
Web Share
- Serves the uploader page from /
- POST /upload : store a file, answer with a 6-char share code
- GET /download/{code} : stream the file back as an attachment
"""

import logging
from pathlib import Path
from typing import Optional

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.responses import FileResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from webshare.api.routes.files import router as files_router
from webshare.core.config import Settings, settings as default_settings
from webshare.core.logging import configure_logging
from webshare.services.filestore import FileStore
from webshare.services.registry import ShareRegistry
from webshare.services.sharing import ShareService

logger = logging.getLogger(__name__)

def create_app(settings: Optional[Settings] = None, registry: Optional[ShareRegistry] = None) -> FastAPI:
    settings = settings or default_settings
    configure_logging(settings.LOG_DIR, settings.LOG_LEVEL)

    store = FileStore(settings.UPLOAD_DIR)
    try:
        store.ensure_dir()
    except OSError as e:
        logger.critical(f"Could not create uploads directory {store.base_dir}: {e}")
        raise SystemExit(1) from e

    app = FastAPI(title="Web Share", version="0.1.0")
    app.state.settings = settings
    app.state.registry = registry if registry is not None else ShareRegistry()
    app.state.share_service = ShareService(
        app.state.registry,
        store,
        code_bytes=settings.SHARE_CODE_BYTES,
        max_attempts=settings.SHARE_CODE_ATTEMPTS,
    )

    # Errors go back as plain text, not FastAPI's JSON {"detail": ...}
    @app.exception_handler(StarletteHTTPException)
    async def http_error(request, exc):
        return PlainTextResponse(str(exc.detail), status_code=exc.status_code, headers=exc.headers)

    @app.exception_handler(RequestValidationError)
    async def validation_error(request, exc):
        return PlainTextResponse("Invalid file", status_code=400)

    index_html = Path(settings.STATIC_DIR) / "index.html"

    @app.get("/")
    def index():
        return FileResponse(index_html)

    @app.get("/health")
    def health():
        return {"status": "ok", "shares": len(app.state.registry)}

    app.include_router(files_router, tags=["files"])

    logger.info(f"Web share ready, storing uploads in {store.base_dir}")
    return app

def run():
    import uvicorn

    configure_logging(default_settings.LOG_DIR, default_settings.LOG_LEVEL)
    logger.info(f"Web share server starting on :{default_settings.PORT}...")
    logger.info(f"Open http://localhost:{default_settings.PORT} to share a file.")
    uvicorn.run(
        "webshare.main:create_app",
        factory=True,
        host=default_settings.HOST,
        port=default_settings.PORT,
    )

if __name__ == "__main__":
    run()
