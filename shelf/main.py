# shelf/main.py
import logging
from pathlib import Path
from typing import Optional

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates
from starlette.middleware.gzip import GZipMiddleware

from shelf import config
from shelf.db.session import make_engine, make_session_factory
from shelf.library import Library

# ---- Routers ----
from shelf.routers import home as home_router
from shelf.routers import resources as resources_router
from shelf.routers import books as books_router

log = logging.getLogger(__name__)


def create_app(library_path: Optional[str] = None) -> FastAPI:
    """
    Build the app around one Calibre library directory.
    Falls back to CALIBRE_LIBRARY from the environment.
    """
    root = library_path or config.CALIBRE_LIBRARY
    if not root:
        raise RuntimeError("No Calibre library given. Pass a path or set CALIBRE_LIBRARY.")
    root = Path(root)
    db_path = root / "metadata.db"
    if not db_path.is_file():
        raise RuntimeError(f"{db_path} not found. Is {root} a Calibre library?")

    app = FastAPI(title="Shelf")

    # =========================================================================
    # Library
    # =========================================================================
    engine = make_engine(db_path)
    app.state.SessionLocal = make_session_factory(engine)
    app.state.library = Library(root, app.state.SessionLocal, cache_size=config.EPUB_CACHE_SIZE)
    log.info("Serving Calibre library at %s", root)

    app.add_middleware(GZipMiddleware, minimum_size=500)

    # =========================================================================
    # Static & Templates
    # =========================================================================
    app.mount("/assets", StaticFiles(directory=config.ASSETS_DIR), name="assets")
    app.state.templates = Jinja2Templates(directory=config.TEMPLATES_DIR)

    # =========================================================================
    # Routes
    # =========================================================================
    # Order matters: /{slug}/{page:path} would swallow /_/ and /covers/.
    app.include_router(home_router.router)
    app.include_router(resources_router.router)
    app.include_router(books_router.router)

    return app
