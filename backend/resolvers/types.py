# backend/resolvers/types.py
from datetime import date
from decimal import Decimal
from typing import List, Optional

import strawberry

from models.shoe import Shoe, ShoeCategory
from services.exceptions import NotFoundError

Category = strawberry.enum(ShoeCategory, name="Category")


def to_shoe_id(id: strawberry.ID) -> int:
    """Numeric shoe id of a GraphQL ID; unusable ids are unknown shoes."""
    try:
        return int(id)
    except ValueError:
        raise NotFoundError(f"There is no shoe with the id {id}.")


@strawberry.type(name="Model")
class ModelType:
    label: str
    color: Optional[str] = None


@strawberry.type(name="Image")
class ImageType:
    caption: str
    content_type: str


@strawberry.type(name="Shoe")
class ShoeType:
    id: strawberry.ID
    version: int
    article_code: str
    rating: int
    category: Optional[Category]
    price: Decimal
    available: bool
    release_date: Optional[date]
    homepage: Optional[str]
    tags: List[str]
    model: Optional[ModelType]
    images: List[ImageType]
    rate: strawberry.Private[Decimal]

    @strawberry.field
    def discount_rate(self, short: Optional[bool] = None) -> str:
        unit = "%" if short is None or short else "Prozent"
        return f"{self.rate} {unit}"

    @classmethod
    def from_orm(cls, shoe: Shoe) -> "ShoeType":
        model = shoe.model
        return cls(
            id=strawberry.ID(str(shoe.id)),
            version=shoe.version,
            article_code=shoe.article_code,
            rating=shoe.rating,
            category=shoe.category,
            price=shoe.price,
            available=shoe.available,
            release_date=shoe.release_date,
            homepage=shoe.homepage,
            tags=shoe.tags,
            model=ModelType(label=model.label, color=model.color) if model else None,
            images=[ImageType(caption=i.caption, content_type=i.content_type) for i in shoe.images],
            rate=shoe.discount_rate if shoe.discount_rate is not None else Decimal(0),
        )


@strawberry.input
class SearchParamsInput:
    article_code: Optional[str] = None
    rating: Optional[int] = None
    category: Optional[Category] = None
    price: Optional[Decimal] = None
    available: Optional[bool] = None
    release_date: Optional[str] = None
    homepage: Optional[str] = None
    model: Optional[str] = None
    sport: Optional[bool] = None
    vintage: Optional[bool] = None
    streetware: Optional[bool] = None

    def to_search_params(self) -> dict:
        """Textual search parameters as they arrive over REST."""
        params = {}
        for name, value in vars(self).items():
            if value is None:
                continue
            if isinstance(value, bool):
                params[name] = "true" if value else "false"
            elif isinstance(value, ShoeCategory):
                params[name] = value.value
            else:
                params[name] = str(value)
        return params


@strawberry.input
class ModelInput:
    label: str
    color: Optional[str] = None


@strawberry.input
class ImageInput:
    caption: str
    content_type: str


@strawberry.input
class ShoeInput:
    article_code: str
    rating: int
    price: Decimal
    model: ModelInput
    category: Optional[Category] = None
    discount_rate: Optional[Decimal] = None
    available: Optional[bool] = None
    release_date: Optional[date] = None
    homepage: Optional[str] = None
    tags: Optional[List[str]] = None
    images: Optional[List[ImageInput]] = None


@strawberry.input
class ShoeUpdateInput:
    id: strawberry.ID
    version: int
    rating: int
    price: Decimal
    category: Optional[Category] = None
    discount_rate: Optional[Decimal] = None
    available: Optional[bool] = None
    release_date: Optional[date] = None
    homepage: Optional[str] = None
    tags: Optional[List[str]] = None


@strawberry.type
class CreatePayload:
    id: int


@strawberry.type
class UpdatePayload:
    version: int


@strawberry.type
class DeletePayload:
    success: bool
