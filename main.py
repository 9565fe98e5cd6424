import inspect
import logging
import os
from contextlib import asynccontextmanager

from dotenv import load_dotenv

load_dotenv()  # Load environment variables from .env file before anything reads them

from fastapi import FastAPI, Request
from openai import AsyncOpenAI

from routes.chat_route import router as chat_router
from routes.product_route import router as product_router
from services.openai.generation_client import GenerationClient
from services.persistence_client import PersistenceClient
from services.session_store import SessionStore
from utils.database_init import AsyncDatabaseInitializer

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
LOGGER = logging.getLogger(__name__)


def _openai_timeout() -> float:
    raw = os.getenv("OPENAI_TIMEOUT_SECONDS", "60")
    try:
        return float(raw)
    except ValueError as exc:
        raise RuntimeError(f"OPENAI_TIMEOUT_SECONDS={raw!r} is not a number") from exc


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan manager to initialize:
      - the SQLite database (always new on startup, at DATABASE_DIR/app.db)
      - the OpenAI async client
      - the session store shared by the chat and product routes
    and attach them to `app.state`.
    """
    db_initializer = AsyncDatabaseInitializer()

    # This will delete any existing DB at db_path and create a fresh one.
    await db_initializer.ensure_database()
    app.state.db_initializer = db_initializer

    openai_api_key = os.getenv("OPENAI_API_KEY")
    if not openai_api_key:
        raise RuntimeError("OPENAI_API_KEY environment variable is not set")

    try:
        # Generation is single-shot: the SDK must not retry on our behalf.
        openai_client = AsyncOpenAI(max_retries=0, timeout=_openai_timeout())
    except Exception as exc:
        raise RuntimeError("Failed to initialize OpenAI Async client") from exc

    app.state.openai_client = openai_client
    app.state.session_store = SessionStore(
        GenerationClient(openai_client),
        PersistenceClient(db_initializer),
    )

    try:
        yield
    finally:
        await app.state.session_store.drain()

        client = getattr(app.state, "openai_client", None)
        if client is not None:
            aclose = getattr(client, "aclose", None) or getattr(client, "close", None)
            if aclose is not None:
                try:
                    if inspect.iscoroutinefunction(aclose):
                        await aclose()
                    else:
                        result = aclose()
                        if inspect.isawaitable(result):
                            await result
                except Exception as exc:
                    LOGGER.warning("Error while closing OpenAI client: %s", exc)


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application instance.
    """
    app = FastAPI(lifespan=lifespan)

    @app.get("/health")
    async def health(request: Request):
        """
        Simple health check that verifies DB initializer and OpenAI client presence.
        """
        has_db = hasattr(request.app.state, "db_initializer")
        has_openai = (
            hasattr(request.app.state, "openai_client")
            and request.app.state.openai_client is not None
        )
        return {"ok": True, "db_initialized": has_db, "openai_available": has_openai}

    app.include_router(chat_router)
    app.include_router(product_router)

    return app


app = create_app()
