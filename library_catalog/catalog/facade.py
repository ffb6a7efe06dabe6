"""
Single entry point to the catalog.

Routes and the assistant call ``LibraryFacade`` and nothing else: the
facade alone knows how books are stored and how decorated views are
assembled, so either side can change without touching callers.
"""

from __future__ import annotations

import logging
from decimal import Decimal, InvalidOperation
from typing import Callable, List, Optional, Union

from .decorators import BasicBook, BestsellerBook, BookView, FeaturedBook, format_view
from .schemas import Book
from .store import BookStore

__all__ = ["LibraryFacade"]

logger = logging.getLogger(__name__)

PriceLike = Union[Decimal, float, int, str]


def _to_price(price: PriceLike) -> Decimal:
    try:
        value = price if isinstance(price, Decimal) else Decimal(str(price))
    except InvalidOperation:
        raise ValueError(f"Price must be a non-negative amount, got {price!r}") from None
    if not value.is_finite() or value < 0:
        raise ValueError(f"Price must be a non-negative amount, got {price!r}")
    return value


class LibraryFacade:
    """Mediates every catalog operation.

    The store is kept in ``_store`` and only ``LibraryFacade`` is listed
    in ``__all__``. Python enforces neither; both mark what callers
    should not reach for. Routes map books to the wire format with
    ``schemas.to_dto``, which exposes no store or decoration types.

    Parameters
    ----------
    store : Optional[BookStore]
        Backing store. A fresh in-memory store is created when omitted.
    """

    def __init__(self, store: Optional[BookStore] = None) -> None:
        self._store = store if store is not None else BookStore()

    def add_book(self, title: str, author: str, price: PriceLike, description: str = "") -> Book:
        """Validate and persist a new book.

        Returns
        -------
        Book
            The stored record including its assigned ``id``.

        Raises
        ------
        ValueError
            If ``price`` is negative or not a number.
        """
        logger.info("[FACADE] LibraryFacade.add_book() called")
        book = Book(title=title, author=author, price=_to_price(price), description=description or "")
        stored = self._store.create(book)
        logger.info("[FACADE] Book %s added through facade", stored.id)
        return stored

    def get_all_books(self) -> List[Book]:
        return self._store.find_all()

    def get_book(self, book_id: int) -> Optional[Book]:
        """Return the book with ``book_id`` or ``None`` when unknown."""
        return self._store.find_by_id(book_id)

    def update_book(self, book_id: int, book: Book) -> bool:
        """Replace the fields of an existing book.

        ``book.id`` is ignored; the record keeps ``book_id``. Returns
        ``False`` without touching the store when ``book_id`` is unknown.
        """
        logger.info("[FACADE] LibraryFacade.update_book(%s) called", book_id)
        replacement = book.model_copy(update={"price": _to_price(book.price)})
        updated = self._store.update(book_id, replacement)
        if updated is None:
            logger.info("[FACADE] Book %s not found, nothing updated", book_id)
            return False
        return True

    def delete_book(self, book_id: int) -> bool:
        logger.info("[FACADE] LibraryFacade.delete_book(%s) called", book_id)
        deleted = self._store.delete(book_id)
        if not deleted:
            logger.info("[FACADE] Book %s not found, nothing deleted", book_id)
        return deleted

    def get_featured_books(self) -> List[str]:
        logger.info("[DECORATOR] Applying FeaturedBook to catalog")
        return self._render(lambda book: FeaturedBook(BasicBook(book)))

    def get_bestseller_books(self) -> List[str]:
        logger.info("[DECORATOR] Applying BestsellerBook to catalog")
        return self._render(lambda book: BestsellerBook(BasicBook(book)))

    def _render(self, wrap: Callable[[Book], BookView]) -> List[str]:
        return [format_view(wrap(book)) for book in self._store.find_all()]
