"""
Keyed in-memory store backing the catalog facade.
"""

from typing import Dict, List, Optional

from .schemas import Book


class BookStore:
    """In-memory keyed store of ``Book`` records.

    Ids are assigned on ``create`` starting at 1 and never reused.
    ``find_all`` returns records in insertion order. Records are copied
    on the way in and out so callers cannot mutate stored state.
    """

    def __init__(self) -> None:
        self._books: Dict[int, Book] = {}
        self._next_book_id = 1

    def create(self, book: Book) -> Book:
        stored = book.model_copy(update={"id": self._next_book_id})
        self._books[stored.id] = stored
        self._next_book_id += 1
        return stored.model_copy()

    def find_all(self) -> List[Book]:
        return [b.model_copy() for b in self._books.values()]

    def find_by_id(self, book_id: int) -> Optional[Book]:
        book = self._books.get(book_id)
        return book.model_copy() if book is not None else None

    def update(self, book_id: int, book: Book) -> Optional[Book]:
        if book_id not in self._books:
            return None
        stored = book.model_copy(update={"id": book_id})
        self._books[book_id] = stored
        return stored.model_copy()

    def delete(self, book_id: int) -> bool:
        return self._books.pop(book_id, None) is not None

    def __len__(self) -> int:
        return len(self._books)
