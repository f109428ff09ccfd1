"""
Health check endpoints that verify index integrity.
"""

from fastapi import APIRouter, Depends

from kosha.api.dependencies import get_store
from kosha.data.check_index import check_index_content, check_index_schema
from kosha.db.index import IndexStore

router = APIRouter()


@router.get("/")
def health_check():
    """Basic health check."""
    return {"status": "healthy"}


@router.get("/index")
def index_health(store: IndexStore = Depends(get_store)):
    """Detailed index health check."""
    schema_checks = check_index_schema(store)
    content_checks = check_index_content(store)

    is_healthy = (
        schema_checks["schema_valid"]
        and schema_checks["fulltext_ready"]
        and content_checks["has_data"]
    )

    return {
        "status": "healthy" if is_healthy else "unhealthy",
        "index": {
            "path": str(store.path),
            "schema": schema_checks,
            "content": content_checks,
        },
    }
