"""Rebuild the current week's plan from the most recently planned meals."""
from typing import Sequence

from mealplanner.domain.Meal import Meal
from mealplanner.domain.Plan import Plan
from mealplanner.domain.errors import PlanReconstructionError
from mealplanner.utilities.constants import EATING_OUT_DAY, RECONSTRUCT_MIN_DAYS, WEEKDAYS


def reconstruct_plan(meals: Sequence[Meal]) -> Plan:
    """Lay `meals` out on Monday..Sunday in the order given.

    Friday is never taken by a stored meal: the meal that would land there
    moves to Saturday and everything after it shifts one day. Meals that
    would fall past Sunday are dropped.

    Raises PlanReconstructionError when fewer than RECONSTRUCT_MIN_DAYS days
    end up filled (placeholder included).
    """
    plan = Plan()
    slot = 0
    for meal in meals:
        if slot >= len(WEEKDAYS):
            break
        if WEEKDAYS[slot] == EATING_OUT_DAY:
            plan[EATING_OUT_DAY] = Meal.eating_out()
            slot += 1
            if slot >= len(WEEKDAYS):
                break
        plan[WEEKDAYS[slot]] = meal
        slot += 1

    if EATING_OUT_DAY not in plan:
        plan[EATING_OUT_DAY] = Meal.eating_out()

    if len(plan) < RECONSTRUCT_MIN_DAYS:
        raise PlanReconstructionError(
            f"only {len(plan)} days could be restored from {len(meals)} planned meals"
        )
    return plan
