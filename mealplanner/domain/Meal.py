"""Meal domain entity: name, relative effort, red-meat flag, last planned date, ingredients, steps."""
from datetime import datetime
from typing import List, Optional

from mealplanner.domain.Ingredient import Ingredient
from mealplanner.domain.Step import Step
from mealplanner.utilities.constants import EATING_OUT_NAME


class Meal:
    def __init__(self, name: str = "", relative_effort: int = 0, red_meat: bool = False,
                 last_planned: Optional[datetime] = None, url: str = "", id: int = 0,
                 ingredients: Optional[List[Ingredient]] = None, steps: Optional[List[Step]] = None):
        self.id = id
        self.name = name
        self.relative_effort = relative_effort
        self.last_planned = last_planned
        self.red_meat = red_meat
        self.url = url or ""
        self.ingredients = ingredients[:] if ingredients else []
        self.steps = steps[:] if steps else []

    def __str__(self) -> str:
        flag = " (red meat)" if self.red_meat else ""
        return f"#{self.id} {self.name} - effort {self.relative_effort}{flag}"

    __repr__ = __str__

    @staticmethod
    def eating_out():
        """The fixed Friday placeholder. It has no id and is never persisted."""
        return Meal(name=EATING_OUT_NAME)

    @property
    def is_placeholder(self) -> bool:
        return self.id == 0 and self.name == EATING_OUT_NAME

    @staticmethod
    def from_record(record):
        '''Builds a Meal, with its ingredients and steps, from an ORM row.'''
        meal = Meal(
            name=record.meal_name,
            relative_effort=record.relative_effort,
            red_meat=bool(record.red_meat),
            last_planned=record.last_planned,
            url=record.url or "",
            id=record.id,
        )
        meal.ingredients = [Ingredient.from_record(i) for i in record.ingredients]
        meal.steps = [Step.from_record(s) for s in record.steps]
        return meal

    def to_dict(self):
        return {
            "id": self.id,
            "mealName": self.name,
            "relativeEffort": self.relative_effort,
            "lastPlanned": self.last_planned.isoformat() if self.last_planned else None,
            "redMeat": self.red_meat,
            "url": self.url,
            "ingredients": [i.to_dict() for i in self.ingredients],
            "steps": [s.to_dict() for s in self.steps],
        }
