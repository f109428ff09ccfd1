from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from kosha.api.dependencies import get_lookup_service, get_search_service
from kosha.exceptions import StateUnavailableError
from kosha.models import SearchResult
from kosha.services.content import clean_markup, highlight_spans
from kosha.services.lookup import LookupService
from kosha.services.search import SearchService

router = APIRouter()


def find_article(search_service: SearchService, article_id: int) -> SearchResult:
    results = search_service.get_article(article_id)
    if not results:
        raise HTTPException(status_code=404, detail=f"Article {article_id} not found")
    return results[0]


# Declared before /{article_id} so "contents" is not parsed as an id
@router.get("/contents")
def get_article_contents(
    ids: List[int] = Query(..., description="Article ids"),
    search_service: SearchService = Depends(get_search_service),
):
    """Batch-fetch article contents; unknown ids are left out."""
    contents = search_service.get_article_contents(ids)
    return {
        "contents": {str(k): v for k, v in contents.items()},
        "count": len(contents),
    }


@router.get("/{article_id}")
def get_article(
    article_id: int,
    plain: bool = False,
    q: Optional[str] = None,
    search_service: SearchService = Depends(get_search_service),
    lookup_service: LookupService = Depends(get_lookup_service),
):
    """Get one article with its dictionary and headword."""
    article = find_article(search_service, article_id)
    content = clean_markup(article.content) if plain else article.content
    response = article.to_dict()
    response["content"] = content
    response["starred"] = lookup_service.is_starred(article_id)
    if q:
        response["highlights"] = [list(span) for span in highlight_spans(content, q)]
    return response


@router.post("/{article_id}/star")
def toggle_star(
    article_id: int,
    search_service: SearchService = Depends(get_search_service),
    lookup_service: LookupService = Depends(get_lookup_service),
):
    """Star the article, or unstar it if it is already starred."""
    article = find_article(search_service, article_id)
    try:
        starred = lookup_service.toggle_starred(article)
    except StateUnavailableError as e:
        raise HTTPException(status_code=503, detail=str(e))
    return {"article_id": article_id, "starred": starred}
