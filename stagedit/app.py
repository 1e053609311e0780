"""FastAPI application and server entry point.

Run the server:
    python -m stagedit.app

Environment variables:
    STAGEDIT_PORT: Port to run on (default: 8090)
    STAGEDIT_DATA_DIR: Directory for the applied slot and recent files
"""
import logging
from pathlib import Path

from fastapi import FastAPI

from .api import api_router
from .config import Settings, settings as default_settings
from .service import EditorService


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create the editor API application.

    Args:
        settings: Settings to use, the global settings by default
    """
    app = FastAPI(title="stagedit API", docs_url="/docs")
    app.state.editor_service = EditorService(settings or default_settings)
    app.include_router(api_router)
    return app


def main():
    """Run the API server."""
    import argparse

    import uvicorn

    parser = argparse.ArgumentParser(description="stagedit image edit server")
    parser.add_argument(
        "--port", "-p",
        type=int,
        default=None,
        help=f"HTTP port (default: {default_settings.PORT}, env: STAGEDIT_PORT)"
    )
    parser.add_argument(
        "--host", "-H",
        default=None,
        help=f"Host to bind to (default: {default_settings.HOST}, env: STAGEDIT_HOST)"
    )
    parser.add_argument(
        "--data-dir",
        type=Path,
        default=None,
        help=f"Data directory (default: {default_settings.DATA_DIR}, env: STAGEDIT_DATA_DIR)"
    )
    args = parser.parse_args()

    # CLI args > env vars > defaults (via settings)
    overrides = {}
    if args.data_dir is not None:
        overrides["DATA_DIR"] = args.data_dir
    settings = default_settings.model_copy(update=overrides)
    host = args.host or settings.HOST
    port = args.port or settings.PORT

    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run(create_app(settings), host=host, port=port)


if __name__ == "__main__":
    main()
