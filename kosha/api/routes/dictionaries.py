from fastapi import APIRouter, Depends

from kosha.api.dependencies import get_search_service
from kosha.services.search import SearchService

router = APIRouter()


@router.get("")
def list_dictionaries(search_service: SearchService = Depends(get_search_service)):
    """List all indexed dictionaries, favorites first."""
    dictionaries = search_service.list_dictionaries()
    return {
        "dictionaries": [d.to_dict() for d in dictionaries],
        "count": len(dictionaries),
    }
