"""Ingredient domain entity: owning meal, quantity, unit and free-text name."""
from typing import Optional


class Ingredient:
    def __init__(self, name: str = "", unit: str = "", quantity: Optional[float] = None,
                 id: int = 0, meal_id: int = 0):
        self.id = id
        self.meal_id = meal_id
        self.quantity = quantity
        self.unit = unit
        self.name = name

    def __str__(self) -> str:
        qty = "" if self.quantity is None else f"{self.quantity:g} "
        unit = f"{self.unit} " if self.unit else ""
        return f"{qty}{unit}{self.name}".strip()

    __repr__ = __str__

    @staticmethod
    def from_record(record):
        '''Creates an Ingredient from an ORM row (or any object with the same attributes).'''
        return Ingredient(
            name=record.name,
            unit=record.unit or "",
            quantity=record.quantity,
            id=record.id or 0,
            meal_id=record.meal_id or 0,
        )

    def to_dict(self):
        return {
            "id": self.id,
            "mealId": self.meal_id,
            "quantity": self.quantity,
            "unit": self.unit,
            "name": self.name,
        }
