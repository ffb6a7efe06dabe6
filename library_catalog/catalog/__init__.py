"""
Catalog package for the library service.

This package holds the book entity, the in-memory store, the
decorated presentational views and the facade that mediates between
them, plus the REST routes that expose the facade (``router``, wired
up in ``main``). Only ``LibraryFacade`` is meant to be used from
outside the package; the store can be swapped for a durable backend
by handing a different store to the facade.
"""

from .facade import LibraryFacade  # noqa: F401
