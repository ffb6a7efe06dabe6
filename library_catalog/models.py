# library_catalog/models.py
from typing import Optional
from pydantic import BaseModel, Field


class CreateBookRequest(BaseModel):
    title: str
    author: str
    price: float = Field(ge=0, allow_inf_nan=False)
    description: Optional[str] = Field(
        default=None,
        description=(
            "Blurb used by the featured/bestseller views. "
            "Never returned in the JSON representation of a book."
        ),
    )


class UpdateBookRequest(CreateBookRequest):
    pass


class BookDto(BaseModel):
    id: Optional[int] = None
    title: str
    author: str
    price: float


class AskRequest(BaseModel):
    prompt: Optional[str] = None


class AskAnswer(BaseModel):
    answer: str
