"""Weekly plan generation.

Each weekday draws one random meal from the store within that day's effort
range. Friday is always eating out. Once a red-meat meal is on the plan the
remaining days only draw meals without red meat. A meal appears at most once
per week, and nothing planned within the last RECENCY_DAYS days is eligible.
"""
import logging
from datetime import datetime, timedelta
from typing import Iterable, Optional

from mealplanner.domain.Meal import Meal
from mealplanner.domain.Plan import Plan
from mealplanner.domain.errors import NoEligibleMealError, PlanGenerationError
from mealplanner.utilities.constants import EATING_OUT_DAY, EFFORT_RANGES, RECENCY_DAYS, WEEKDAYS

logger = logging.getLogger(__name__)


def generate_weekly_plan(repository, skip_days: Optional[Iterable[str]] = None,
                         now: Optional[datetime] = None) -> Plan:
    """Build a fresh plan for Monday..Sunday.

    `repository` only needs
    `pick_meal(min_effort, max_effort, exclude_red_meat, cutoff, exclude_ids)`.
    Days listed in `skip_days` are left out of the plan entirely.
    """
    skip = set(skip_days or ())
    cutoff = (now or datetime.now()) - timedelta(days=RECENCY_DAYS)
    plan = Plan()
    has_red_meat = False

    for day in WEEKDAYS:
        if day in skip:
            continue
        if day == EATING_OUT_DAY:
            plan[day] = Meal.eating_out()
            continue
        low, high = EFFORT_RANGES[day]
        try:
            meal = repository.pick_meal(low, high, has_red_meat, cutoff, exclude_ids=plan.meal_ids())
        except NoEligibleMealError as e:
            logger.warning("No meal for %s (effort %d-%d, red meat excluded: %s)", day, low, high, has_red_meat)
            raise PlanGenerationError(day, str(e)) from e
        if meal.red_meat:
            has_red_meat = True
        plan[day] = meal

    logger.debug("Generated plan: %s", {d: m.name for d, m in plan.days()})
    return plan
