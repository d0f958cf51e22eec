"""Shopping list builder.

Provides build_shopping_list(meals): the ingredient names a set of meals needs.
"""
from typing import Iterable, List

from mealplanner.domain.Meal import Meal


def build_shopping_list(meals: Iterable[Meal]) -> List[str]:
    """Unique ingredient names across `meals`, sorted alphabetically.

    Names are compared after trimming; quantities and units are not summed.
    """
    names = set()
    for meal in meals:
        for ingredient in meal.ingredients:
            name = (ingredient.name or '').strip()
            if name:
                names.add(name)
    return sorted(names)
