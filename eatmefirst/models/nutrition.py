"""Nutrition facts attached to an inventory item."""

from sqlalchemy import Column, Float, ForeignKey, Integer
from sqlalchemy.orm import relationship

from eatmefirst.database import Base


class ProductNutrition(Base):
    """Per-100g nutrition values, usually prefilled from a barcode lookup."""

    __tablename__ = "product_nutrition"

    id = Column(Integer, primary_key=True, index=True)
    product_id = Column(
        Integer,
        ForeignKey("products.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    calories = Column(Float, nullable=True)  # kcal
    protein = Column(Float, nullable=True)  # grams
    carbs = Column(Float, nullable=True)  # grams
    fat = Column(Float, nullable=True)  # grams

    # Relationships
    product = relationship("InventoryItem", back_populates="nutrition")
