"""
Route definitions for the catalogue API.

Endpoints under /books:
- GET    /books              : list every book in insertion order
- POST   /books              : add a book
- GET    /books/featured     : featured views, one line per book
- GET    /books/bestsellers  : bestseller views (10% markup), one line per book
- GET    /books/{book_id}    : get one book
- PUT    /books/{book_id}    : replace a book's fields
- DELETE /books/{book_id}    : remove a book

Every route goes through ``LibraryFacade``; descriptions and decorated
views never appear in the JSON representation of a book.
"""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status

from ..dependencies import get_facade
from ..models import BookDto, CreateBookRequest, UpdateBookRequest
from .facade import LibraryFacade
from .schemas import to_dto, to_entity

router = APIRouter(prefix="/books", tags=["catalog"])


def _not_found(book_id: int) -> HTTPException:
    return HTTPException(status_code=404, detail=f"Book {book_id} not found")


@router.get("", response_model=List[BookDto])
def list_books(facade: LibraryFacade = Depends(get_facade)) -> List[BookDto]:
    return [to_dto(b) for b in facade.get_all_books()]


@router.post("", response_model=BookDto)
def add_book(req: CreateBookRequest, facade: LibraryFacade = Depends(get_facade)) -> BookDto:
    try:
        book = facade.add_book(req.title, req.author, req.price, req.description or "")
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return to_dto(book)


# Declared before /{book_id} so the literal paths win
@router.get("/featured", response_model=List[str])
def featured_books(facade: LibraryFacade = Depends(get_facade)) -> List[str]:
    return facade.get_featured_books()


@router.get("/bestsellers", response_model=List[str])
def bestseller_books(facade: LibraryFacade = Depends(get_facade)) -> List[str]:
    return facade.get_bestseller_books()


@router.get("/{book_id}", response_model=BookDto)
def get_book(book_id: int, facade: LibraryFacade = Depends(get_facade)) -> BookDto:
    book = facade.get_book(book_id)
    if book is None:
        raise _not_found(book_id)
    return to_dto(book)


@router.put("/{book_id}", response_model=BookDto)
def update_book(
    book_id: int,
    req: UpdateBookRequest,
    facade: LibraryFacade = Depends(get_facade),
) -> BookDto:
    try:
        updated = facade.update_book(book_id, to_entity(req))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if not updated:
        raise _not_found(book_id)
    return to_dto(facade.get_book(book_id))


@router.delete("/{book_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_book(book_id: int, facade: LibraryFacade = Depends(get_facade)) -> Response:
    if not facade.delete_book(book_id):
        raise _not_found(book_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
