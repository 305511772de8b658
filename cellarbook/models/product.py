from sqlalchemy import (
    Column,
    Integer,
    Float,
    String,
    Text,
    Boolean,
    Date,
    DateTime,
    ForeignKey,
    Index,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship
from datetime import datetime
from cellarbook.core.database import Base


def _unique(values):
    seen = set()
    result = []
    for value in values or []:
        if value not in seen:
            seen.add(value)
            result.append(value)
    return result


class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    owner_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )

    name = Column(String, nullable=False, index=True)
    description = Column(Text)
    price = Column(Float)

    liked = Column(Boolean, default=False, nullable=False)
    bought = Column(Boolean, default=False, nullable=False)
    reviewed = Column(Boolean, default=False, nullable=False)
    interested = Column(Boolean, default=False, nullable=False)
    pickup_status = Column(Boolean, default=False, nullable=False)
    kosher = Column(Boolean, default=False, nullable=False)

    type = Column(String, index=True)  # whisky, wine, ...
    country = Column(String)
    wine_type = Column(String)  # red, white, ... (wine only)
    alcohol_percent = Column(Float)

    stock = Column(Integer)
    quantity_bought = Column(Integer)
    quantity_left = Column(Integer)

    date_of_purchase = Column(Date)
    pickup_range = Column(String)  # "Feb-March"

    picture = Column(Text)  # base64 payload, never parsed
    url = Column(String)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )

    owner = relationship("User", back_populates="products")
    grape_entries = relationship(
        "ProductGrape",
        back_populates="product",
        cascade="all, delete-orphan",
        order_by="ProductGrape.id",
    )
    tag_entries = relationship(
        "ProductTag",
        back_populates="product",
        cascade="all, delete-orphan",
        order_by="ProductTag.id",
    )
    order_items = relationship("OrderItem", back_populates="product")

    __table_args__ = (
        UniqueConstraint("owner_id", "name", name="uq_products_owner_name"),
        Index("ix_products_owner_created", "owner_id", "created_at"),
        Index("ix_products_owner_bought", "owner_id", "bought"),
    )

    @property
    def grape_type(self):
        return [entry.value for entry in self.grape_entries]

    @grape_type.setter
    def grape_type(self, values):
        self.grape_entries = [ProductGrape(value=v) for v in _unique(values)]

    @property
    def tags(self):
        return [entry.value for entry in self.tag_entries]

    @tags.setter
    def tags(self, values):
        self.tag_entries = [ProductTag(value=v) for v in _unique(values)]

    def __repr__(self):
        return f"<Product(id={self.id}, name={self.name}, owner_id={self.owner_id})>"


class ProductGrape(Base):
    __tablename__ = "product_grapes"

    id = Column(Integer, primary_key=True, index=True)
    product_id = Column(
        Integer, ForeignKey("products.id", ondelete="CASCADE"), nullable=False
    )
    value = Column(String, nullable=False, index=True)

    product = relationship("Product", back_populates="grape_entries")

    def __repr__(self):
        return f"<ProductGrape(product_id={self.product_id}, value={self.value})>"


class ProductTag(Base):
    __tablename__ = "product_tags"

    id = Column(Integer, primary_key=True, index=True)
    product_id = Column(
        Integer, ForeignKey("products.id", ondelete="CASCADE"), nullable=False
    )
    value = Column(String, nullable=False, index=True)

    product = relationship("Product", back_populates="tag_entries")

    def __repr__(self):
        return f"<ProductTag(product_id={self.product_id}, value={self.value})>"
