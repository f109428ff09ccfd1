from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from kosha.api.dependencies import get_lookup_service, get_search_limit
from kosha.config import MAX_SEARCH_LIMIT
from kosha.exceptions import InvalidQueryError
from kosha.services.lookup import LookupService

router = APIRouter()


@router.get("")
def search(
    q: str = Query(..., description="Query in IAST or Devanagari"),
    mode: str = Query("exact", description="exact, prefix, fuzzy or reverse"),
    dict: Optional[List[str]] = Query(None, description="Dictionary codes to search"),
    limit: Optional[int] = Query(None, ge=1, description="Default: KOSHA_SEARCH_LIMIT"),
    default_limit: int = Depends(get_search_limit),
    lookup_service: LookupService = Depends(get_lookup_service),
):
    """Search all dictionaries (or a subset) in both scripts."""
    if not q.strip():
        raise HTTPException(status_code=400, detail="Query must not be empty")

    try:
        result = lookup_service.lookup(q, mode, dict)
    except InvalidQueryError as e:
        raise HTTPException(status_code=400, detail=str(e))

    limit = min(limit or default_limit, MAX_SEARCH_LIMIT)
    total = len(result.results)
    results = result.results[:limit]

    return {
        "query": result.query,
        "mode": result.mode.value,
        "terms": result.terms,
        "dictionaries": result.dict_codes(),
        "count": len(results),
        "total": total,
        "truncated": total > limit,
        "results": [r.to_dict() for r in results],
    }
