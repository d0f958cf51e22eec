"""Domain errors raised by the store and the planning logic."""


class MealPlannerError(Exception):
    pass


class MealNotFoundError(MealPlannerError):
    def __init__(self, meal_id):
        super().__init__(f"meal {meal_id} does not exist")
        self.meal_id = meal_id


class IngredientNotFoundError(MealPlannerError):
    def __init__(self, ingredient_id, meal_id=None):
        super().__init__(f"ingredient {ingredient_id} not found")
        self.ingredient_id = ingredient_id
        self.meal_id = meal_id


class StepNotFoundError(MealPlannerError):
    def __init__(self, step_id, meal_id=None):
        super().__init__(f"step {step_id} not found")
        self.step_id = step_id
        self.meal_id = meal_id


class NoEligibleMealError(MealPlannerError):
    """The store has no meal matching the requested criteria."""


class PlanGenerationError(MealPlannerError):
    """A weekday could not be filled; `day` names it."""

    def __init__(self, day: str, reason: str):
        super().__init__(f"failed picking {day} meal: {reason}")
        self.day = day
        self.reason = reason


class PlanReconstructionError(MealPlannerError):
    pass


class InvalidStepOrderError(MealPlannerError):
    """A reorder request that is not a permutation of the meal's step ids."""
