from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from fastapi import FastAPI
from fastapi.responses import HTMLResponse
from fastapi.staticfiles import StaticFiles

from lively_langs.api import register_exception_handlers
from lively_langs.database import DATABASE_URL
from lively_langs.languages.router import router as languages_router
from lively_langs.logging_config import get_logger
from lively_langs.store import Store
from lively_langs.words.router import router as words_router

logger = get_logger(__name__)

PACKAGE_DIR = Path(__file__).resolve().parent
DEFAULT_TEMPLATES_PATH = PACKAGE_DIR / "templates"
DEFAULT_STATIC_PATH = PACKAGE_DIR / "static"


def load_index_template(templates_path: Path) -> str:
    """Read the home page template."""
    return (Path(templates_path) / "index.html").read_text(encoding="utf-8")


def create_app(
        database_url: str = DATABASE_URL,
        templates_path: Path = DEFAULT_TEMPLATES_PATH,
        static_path: Path = DEFAULT_STATIC_PATH,
        store: Optional[Store] = None) -> FastAPI:
    """
    Build the application.

    Pass ``store`` to reuse an existing Store (tests); otherwise one is
    created for ``database_url``. The store is opened and closed by the app
    lifespan.
    """
    store = store or Store(database_url)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Initialize database and templates on application startup."""
        await store.init()
        app.state.index_html = load_index_template(templates_path)
        logger.info(f"Using database {store.engine.url.render_as_string(hide_password=True)}")

        yield

        # Cleanup on shutdown
        await store.close()

    app = FastAPI(
        title="Lively Langs",
        description="API for managing languages and their words",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.store = store

    register_exception_handlers(app)

    # Include routers
    app.include_router(languages_router)
    app.include_router(words_router)

    app.mount("/static", StaticFiles(directory=static_path), name="static")

    @app.get("/", response_class=HTMLResponse, include_in_schema=False)
    def home():
        return HTMLResponse(app.state.index_html)

    @app.get("/health")
    def health_check():
        return {"status": "ok"}

    return app
