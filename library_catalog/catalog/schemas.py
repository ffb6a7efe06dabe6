"""
Pydantic schema definitions for the catalog module.

The ``Book`` model is the stored entity: it carries a ``description``
used by the decorated views and keeps ``price`` as a ``Decimal`` so
that markups are computed without binary floating point drift. The
wire representation is ``BookDto`` (see ``models``), which omits the
description; ``to_dto`` and ``to_entity`` translate between the two.
"""

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from ..models import BookDto, CreateBookRequest


class Book(BaseModel):
    """A single book record.

    ``id`` is assigned by the store on creation and is ``None`` for a
    record that has not been persisted yet. ``price`` must be
    non-negative. ``description`` defaults to an empty string so that
    decorated views always have some text to annotate.
    """

    id: Optional[int] = None
    title: str
    author: str
    price: Decimal = Field(ge=0)
    description: str = ""


def to_dto(book: Book) -> BookDto:
    return BookDto(id=book.id, title=book.title, author=book.author, price=float(book.price))


def to_entity(req: CreateBookRequest) -> Book:
    # Route floats through str so 9.99 stays Decimal("9.99")
    return Book(
        title=req.title,
        author=req.author,
        price=Decimal(str(req.price)),
        description=req.description or "",
    )
