# backend/schemas/shoe.py
from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, HttpUrl, TypeAdapter, field_validator

from models.shoe import TAGS, ShoeCategory

_http_url = TypeAdapter(HttpUrl)


# Base configuration for ORM compatibility
class ORMBase(BaseModel):
    model_config = ConfigDict(from_attributes=True)


class ImageIn(BaseModel):
    caption: str = Field(..., max_length=32, examples=["Front view"])
    content_type: str = Field(..., max_length=16, examples=["image/png"])


class ModelIn(BaseModel):
    label: str = Field(..., min_length=1, examples=["Air Max 90"])
    color: Optional[str] = None


# Shared scalar attributes of create and update requests
class ShoeBase(BaseModel):
    rating: int = Field(..., ge=0, le=5)
    category: Optional[ShoeCategory] = None
    price: Decimal = Field(..., ge=0, max_digits=8, decimal_places=2)
    discount_rate: Decimal = Field(Decimal("0"), ge=0, lt=1, max_digits=4, decimal_places=3)
    available: bool = False
    release_date: Optional[date] = None
    homepage: Optional[str] = None
    tags: List[str] = Field(default_factory=list)

    @field_validator("category", mode="before")
    @classmethod
    def _category(cls, value):
        if value is None or isinstance(value, ShoeCategory):
            return value
        category = ShoeCategory.from_text(value)
        if category is None:
            raise ValueError(f"unknown category {value!r}")
        return category

    @field_validator("homepage")
    @classmethod
    def _homepage(cls, value):
        if value is not None:
            _http_url.validate_python(value)
        return value

    @field_validator("tags", mode="before")
    @classmethod
    def _tags(cls, value):
        if value is None:
            return []
        if len({str(tag).upper() for tag in value}) != len(value):
            raise ValueError("tags must be unique")
        for tag in value:
            if str(tag).upper() not in TAGS:
                raise ValueError(f"unknown tag {tag!r}")
        return [str(tag).upper() for tag in value]


# Request body for a new shoe
class ShoeCreate(ShoeBase):
    article_code: str = Field(..., min_length=1, examples=["SH005-RECL"])
    model: ModelIn
    images: Optional[List[ImageIn]] = None


# Request body for PUT; the article code cannot be changed
class ShoeUpdate(ShoeBase):
    pass


class ModelOut(ORMBase):
    label: str
    color: Optional[str] = None


class ImageOut(ORMBase):
    caption: str
    content_type: str


class ShoeOut(ORMBase):
    id: int
    version: int
    article_code: str
    rating: int
    category: Optional[ShoeCategory] = None
    price: Decimal
    discount_rate: Decimal
    available: bool
    release_date: Optional[date] = None
    homepage: Optional[str] = None
    tags: List[str] = []
    model: Optional[ModelOut] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ShoeDetailOut(ShoeOut):
    images: List[ImageOut] = []


class PageInfo(BaseModel):
    size: int
    number: int
    total_elements: int
    total_pages: int


# Paginated response for shoe searches
class ShoePage(BaseModel):
    content: List[ShoeOut]
    page: PageInfo


class CountOut(BaseModel):
    count: int
