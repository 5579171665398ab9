from pydantic import Field

from app.schemas.base import CamelModel


class CategoryIn(CamelModel):
    name: str = Field(..., min_length=1)
    slug: str = ""
    icon: str = ""
    display_order: int = 0


class CategoryUpdate(CamelModel):
    name: str | None = Field(None, min_length=1)
    slug: str | None = None
    icon: str | None = None
    display_order: int | None = None


class CategoryOut(CamelModel):
    id: int
    name: str
    slug: str
    icon: str
    display_order: int
