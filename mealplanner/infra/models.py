from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from mealplanner.infra.db import Base


class Meal(Base):
    __tablename__ = "meals"
    id = Column(Integer, primary_key=True, index=True)
    meal_name = Column(String(200), nullable=False)
    relative_effort = Column(Integer, nullable=False)
    last_planned = Column(DateTime, nullable=True, index=True)
    red_meat = Column(Boolean, nullable=False, default=False)
    url = Column(Text, nullable=True)

    ingredients = relationship(
        "Ingredient", back_populates="meal", cascade="all, delete-orphan",
        passive_deletes=True, order_by="Ingredient.id",
    )
    steps = relationship(
        "Step", back_populates="meal", cascade="all, delete-orphan",
        passive_deletes=True, order_by="Step.step_number",
    )


class Ingredient(Base):
    __tablename__ = "ingredients"
    id = Column(Integer, primary_key=True, index=True)
    meal_id = Column(Integer, ForeignKey("meals.id", ondelete="CASCADE"), nullable=False, index=True)
    quantity = Column(Float, nullable=True)
    unit = Column(String(50), nullable=True)
    name = Column(Text, nullable=False)

    meal = relationship("Meal", back_populates="ingredients")


class Step(Base):
    __tablename__ = "recipe_steps"
    __table_args__ = (UniqueConstraint("meal_id", "step_number", name="uq_recipe_steps_meal_step"),)
    id = Column(Integer, primary_key=True, index=True)
    meal_id = Column(Integer, ForeignKey("meals.id", ondelete="CASCADE"), nullable=False, index=True)
    step_number = Column(Integer, nullable=False)
    instruction = Column(Text, nullable=False)

    meal = relationship("Meal", back_populates="steps")
