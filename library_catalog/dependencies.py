# library_catalog/dependencies.py
from .ai import GenerationClient
from .catalog.facade import LibraryFacade

# Process-wide instances; tests swap them through app.dependency_overrides
_facade = LibraryFacade()
_generation_client = GenerationClient()


def get_facade() -> LibraryFacade:
    return _facade


def get_generation_client() -> GenerationClient:
    return _generation_client
