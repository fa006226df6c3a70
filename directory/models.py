# directory/models.py
"""SQLAlchemy ORM models for persisted entities.

Defines the `Listing` model (one directory entry) and its lookup indexes.
"""
from sqlalchemy import Boolean, CheckConstraint, Column, Integer, JSON, Text, Numeric, TIMESTAMP, func, Index
from sqlalchemy.dialects.postgresql import JSONB
from .db import Base

class Listing(Base):
    __tablename__ = "listings"
    id = Column(Text, primary_key=True)
    name = Column(Text, nullable=False)
    city = Column(Text, nullable=False)
    region = Column(Text)
    street = Column(Text)
    phone = Column(Text)
    website = Column(Text)
    rating = Column(Numeric(3, 2))
    review_count = Column(Integer)
    images = Column(JSON().with_variant(JSONB, "postgresql"), nullable=False, default=list)
    is_active = Column(Boolean, nullable=False, default=True)
    slug = Column(Text, nullable=False, unique=True, index=True)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True), server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        CheckConstraint("rating IS NULL OR (rating >= 0 AND rating <= 5)", name="ck_listings_rating"),
        CheckConstraint("review_count IS NULL OR review_count >= 0", name="ck_listings_review_count"),
    )

Index("idx_listings_active_city", Listing.is_active, Listing.city)
Index("idx_listings_active_region", Listing.is_active, Listing.region)
Index("idx_listings_rating", Listing.rating)
