# backend/models/shoe.py
import enum

from sqlalchemy import (
    Column, Integer, String, Text, Boolean, Date, DateTime, Numeric, LargeBinary,
    ForeignKey, CheckConstraint, Identity, Enum, JSON, func,
)
from sqlalchemy.orm import relationship
from sqlalchemy.types import TypeDecorator

from database import Base


class ShoeCategory(str, enum.Enum):
    SNEAKER = "Sneaker"
    RUNNING_SHOE = "RunningShoe"
    CASUAL_SHOE = "CasualShoe"
    SKATE_SHOE = "SkateShoe"
    TENNIS_SHOE = "TennisShoe"

    @classmethod
    def from_text(cls, text):
        """Case-insensitive lookup by value or name, None if nothing matches."""
        if text is None:
            return None
        wanted = str(text).strip().lower()
        for category in cls:
            if wanted in (category.value.lower(), category.name.lower()):
                return category
        return None


# Fixed tag vocabulary
TAGS = ("SPORT", "VINTAGE", "STREETWARE")


class TagList(TypeDecorator):
    """JSON array of tags. A missing array is read back as an empty list."""

    impl = JSON
    cache_ok = True

    def process_result_value(self, value, dialect):
        return list(value) if value else []


# Represents a single shoe of the catalog
class Shoe(Base):
    __tablename__ = "shoe"

    id = Column(Integer, Identity(start=1000), primary_key=True)
    # Optimistic locking counter, bumped once per successful update
    version = Column(Integer, nullable=False, default=0, server_default="0")

    article_code = Column(Text, unique=True, nullable=False, index=True)
    rating = Column(Integer, CheckConstraint("rating >= 0 AND rating <= 5"), nullable=False)
    category = Column(
        Enum(ShoeCategory, values_callable=lambda obj: [e.value for e in obj], native_enum=False, length=16),
        nullable=True,
    )
    price = Column(Numeric(8, 2), nullable=False)
    discount_rate = Column(Numeric(4, 3), nullable=False, default=0)
    available = Column(Boolean, nullable=False, default=False)
    release_date = Column(Date, nullable=True)
    homepage = Column(Text, nullable=True)
    tags = Column(TagList, nullable=True)

    created_at = Column(DateTime, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)

    model = relationship(
        "ShoeModel", back_populates="shoe", uselist=False,
        cascade="all, delete-orphan", passive_deletes=True, lazy="joined",
    )
    images = relationship(
        "Image", back_populates="shoe", order_by="Image.id",
        cascade="all, delete-orphan", passive_deletes=True,
    )
    file = relationship(
        "ShoeFile", back_populates="shoe", uselist=False,
        cascade="all, delete-orphan", passive_deletes=True,
    )

    def __repr__(self):
        return f"<Shoe id={self.id} version={self.version} article_code={self.article_code!r}>"


# Model name and color of a shoe (exactly one per shoe)
class ShoeModel(Base):
    __tablename__ = "shoe_model"

    id = Column(Integer, Identity(start=1000), primary_key=True)
    label = Column(Text, nullable=False)
    color = Column(Text, nullable=True)
    shoe_id = Column(Integer, ForeignKey("shoe.id", ondelete="CASCADE"), unique=True, nullable=False)

    shoe = relationship("Shoe", back_populates="model")


# Image descriptors attached to a shoe
class Image(Base):
    __tablename__ = "image"

    id = Column(Integer, Identity(start=1000), primary_key=True)
    caption = Column(String(32), nullable=False)
    content_type = Column(String(16), nullable=False)
    shoe_id = Column(Integer, ForeignKey("shoe.id", ondelete="CASCADE"), index=True, nullable=False)

    shoe = relationship("Shoe", back_populates="images")


# Uploaded binary file of a shoe (at most one per shoe)
class ShoeFile(Base):
    __tablename__ = "shoe_file"

    id = Column(Integer, Identity(start=1000), primary_key=True)
    data = Column(LargeBinary, nullable=False)
    filename = Column(Text, nullable=False)
    mimetype = Column(Text, nullable=True)
    shoe_id = Column(Integer, ForeignKey("shoe.id", ondelete="CASCADE"), unique=True, index=True, nullable=False)

    shoe = relationship("Shoe", back_populates="file")
