"""Plan domain entity: weekday name -> selected Meal (or the Friday placeholder)."""
from mealplanner.utilities.constants import WEEKDAYS


class Plan:
    def __init__(self, meals=None):
        self.meals = dict(meals or {})

    def __contains__(self, day):
        return day in self.meals

    def __getitem__(self, day):
        return self.meals[day]

    def __setitem__(self, day, meal):
        self.meals[day] = meal

    def __len__(self):
        return len(self.meals)

    def get(self, day, default=None):
        return self.meals.get(day, default)

    def days(self):
        """(day, meal) pairs in calendar order, skipping days without a meal."""
        return [(d, self.meals[d]) for d in WEEKDAYS if self.meals.get(d) is not None]

    def meal_ids(self):
        return [m.id for _, m in self.days() if m.id]

    def red_meat_count(self) -> int:
        return sum(1 for _, m in self.days() if m.red_meat)

    def to_dict(self):
        return {day: meal.to_dict() for day, meal in self.days()}
