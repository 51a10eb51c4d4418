"""FastAPI application serving the console SPA bundle."""

import logging
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import PlainTextResponse, RedirectResponse

from console_server.config import Settings, get_settings
from console_server.static import INDEX_FILE, ConsoleStaticFiles, resolve_static

logger = logging.getLogger(__name__)

STATIC_METHODS = ("GET", "HEAD")

# The fallback answers every method, not only reads.
FALLBACK_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


async def spa_fallback(settings: Settings, files: ConsoleStaticFiles, request: Request):
    """Serve index.html so the client-side router can handle the path."""
    index = await run_in_threadpool(files.find_file, INDEX_FILE)
    if index is not None:
        return files.file_response(*index)
    logger.warning(f"Cannot find {settings.index_path} for {request.method} {request.url.path}")
    return PlainTextResponse(
        f"Cannot find {settings.index_path} (requested {request.url.path})",
        status_code=404,
    )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the app; settings are read from the environment when not given."""
    if settings is None:
        settings = get_settings()

    if not settings.asset_root.is_dir():
        logger.warning(f"Asset root {settings.asset_root.resolve()} does not exist")

    app = FastAPI(
        title="Console Static Server",
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.settings = settings
    files = ConsoleStaticFiles(directory=settings.asset_root, check_dir=False)

    @app.api_route("/{full_path:path}", methods=FALLBACK_METHODS, include_in_schema=False)
    async def serve(request: Request, full_path: str):
        # Stage 1: static files under / and /console
        if request.method in STATIC_METHODS:
            match = await run_in_threadpool(resolve_static, files, request.url.path)
            if match is not None and match.redirect_to is not None:
                location = match.redirect_to
                if request.url.query:
                    location = f"{location}?{request.url.query}"
                return RedirectResponse(location, status_code=301)
            if match is not None:
                return files.file_response(match.full_path, match.stat_result)
        # Stage 2: SPA fallback
        return await spa_fallback(settings, files, request)

    return app


def main():
    settings = get_settings()
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info(f"Serving {settings.asset_root} on port {settings.PORT}")
    uvicorn.run(
        create_app(settings),
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
