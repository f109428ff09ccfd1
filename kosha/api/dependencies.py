"""
Request dependencies: services shared through app.state.
"""

from fastapi import Request

from kosha.db.index import IndexStore
from kosha.services.lookup import LookupService
from kosha.services.search import SearchService


def get_store(request: Request) -> IndexStore:
    return request.app.state.store


def get_search_service(request: Request) -> SearchService:
    return request.app.state.search_service


def get_lookup_service(request: Request) -> LookupService:
    return request.app.state.lookup_service


def get_search_limit(request: Request) -> int:
    return request.app.state.search_limit
