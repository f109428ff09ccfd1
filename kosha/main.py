import logging
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from kosha.api.routes import articles, dictionaries, health, search, transliterate
from kosha.config import get_index_config
from kosha.db.index import IndexStatus, IndexStore
from kosha.logging_config import setup_logging
from kosha.services.lookup import LookupService
from kosha.services.search import SearchService

logger = logging.getLogger(__name__)


def open_index(db_path) -> IndexStore:
    """Open the configured index, creating empty tables so the app can start."""
    store = IndexStore.open(db_path)
    if store.status() is IndexStatus.EMPTY:
        logger.warning(
            f"Index {db_path} is empty. Build it with kosha-build-index; "
            "searches will find nothing until then."
        )
        store.init_bulk_schema()
    return store


def create_app(store: Optional[IndexStore] = None, state=None) -> FastAPI:
    """
    Create the API application.

    When no store is given, the configured index is opened at startup and
    closed at shutdown. An injected store is left open for its owner.
    state is the optional settings store for history and starred articles.
    """
    config = get_index_config()

    app = FastAPI(
        title="Kosha Sanskrit Dictionary",
        description="Search Sanskrit dictionaries in IAST and Devanagari",
        version="1.0.0",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config["cors_origins"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(search.router, prefix="/api/search", tags=["search"])
    app.include_router(
        dictionaries.router, prefix="/api/dictionaries", tags=["dictionaries"]
    )
    app.include_router(articles.router, prefix="/api/articles", tags=["articles"])
    app.include_router(
        transliterate.router, prefix="/api/transliterate", tags=["transliterate"]
    )
    app.include_router(health.router, prefix="/api/health", tags=["health"])

    def attach(index: IndexStore):
        search_service = SearchService(index)
        app.state.store = index
        app.state.search_service = search_service
        app.state.lookup_service = LookupService(search_service, state)

    app.state.search_limit = config["search_limit"]

    if store is not None:
        attach(store)

    @app.on_event("startup")
    def startup_event():
        """Open the index unless one was injected."""
        if store is None:
            logger.info(f"Opening index {config['db_path']}")
            attach(open_index(config["db_path"]))

    @app.on_event("shutdown")
    def shutdown_event():
        if store is None and getattr(app.state, "store", None) is not None:
            app.state.store.close()

    @app.get("/")
    def root():
        return {"name": "kosha", "docs": "/docs"}

    @app.get("/ready")
    def ready():
        """Readiness: the index is open and its full-text tables are built."""
        index = getattr(app.state, "store", None)
        fulltext_ready = index is not None and index.fulltext_ready()
        return {"ready": fulltext_ready}

    return app


def run():
    """Entry point for kosha-serve."""
    config = get_index_config()
    setup_logging(config["log_level"], config["log_file"])
    uvicorn.run(
        "kosha.main:create_app",
        factory=True,
        host=config["host"],
        port=config["port"],
    )


if __name__ == "__main__":
    run()
