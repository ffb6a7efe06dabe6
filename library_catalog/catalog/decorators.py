"""
Presentational views of a book built by stacking wrapper layers.

Every view answers two questions: ``describe()`` and ``price_of()``.
``BasicBook`` answers them straight from a ``Book``. Each
``BookDecorator`` wraps exactly one inner view and composes its own
transform with the inner result, so layers stack in any order::

    BestsellerBook(FeaturedBook(BasicBook(book))).describe()
    # "[BESTSELLER] [FEATURED] <book.description>"

A new layer only needs to subclass ``BookDecorator`` and implement the
two methods; nothing else changes. Views never mutate the book they
were built from.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import ROUND_HALF_EVEN, Context, Decimal, getcontext, localcontext
from typing import Union

from .schemas import Book

BESTSELLER_MARKUP = Decimal("1.10")
CENT = Decimal("0.01")


def _exact_context(a: Decimal, b: Decimal) -> Context:
    """Context wide enough that ``a * b`` is never rounded."""
    digits = len(a.as_tuple().digits) + len(b.as_tuple().digits)
    ctx = getcontext().copy()
    ctx.prec = max(ctx.prec, digits)
    return ctx


class BookView(ABC):
    @abstractmethod
    def describe(self) -> str:
        ...

    @abstractmethod
    def price_of(self) -> Decimal:
        ...


class BasicBook(BookView):
    """Forwards the underlying book's description and price unchanged."""

    def __init__(self, book: Book) -> None:
        self._book = book

    def describe(self) -> str:
        return self._book.description

    def price_of(self) -> Decimal:
        return self._book.price


class BookDecorator(BookView):
    """Base for layers that wrap another ``BookView``.

    By default both answers are delegated to the inner view, so a
    subclass overrides only what it changes.
    """

    def __init__(self, inner: BookView) -> None:
        self._inner = inner

    def describe(self) -> str:
        return self._inner.describe()

    def price_of(self) -> Decimal:
        return self._inner.price_of()


class FeaturedBook(BookDecorator):
    def describe(self) -> str:
        return "[FEATURED] " + self._inner.describe()


class BestsellerBook(BookDecorator):
    """Bestseller label plus a 10% markup on the inner price."""

    def describe(self) -> str:
        return "[BESTSELLER] " + self._inner.describe()

    def price_of(self) -> Decimal:
        price = self._inner.price_of()
        with localcontext(_exact_context(price, BESTSELLER_MARKUP)):
            return price * BESTSELLER_MARKUP


def format_price(price: Union[Decimal, float, int]) -> str:
    """Render a price in dollars and cents, rounding half to even.

    Only the rendered text is rounded; the price itself is untouched.
    """
    value = price if isinstance(price, Decimal) else Decimal(str(price))
    # Room for every integer digit plus the cents
    ctx = Context(prec=max(getcontext().prec, value.adjusted() + 3))
    return str(value.quantize(CENT, rounding=ROUND_HALF_EVEN, context=ctx))


def format_view(view: BookView) -> str:
    return f"{view.describe()} - ${format_price(view.price_of())}"
