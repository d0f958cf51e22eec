import logging
from datetime import datetime, timedelta
from typing import Iterable, List, Optional

from sqlalchemy import false, func, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from mealplanner.domain.Meal import Meal
from mealplanner.domain.errors import (
    IngredientNotFoundError,
    MealNotFoundError,
    NoEligibleMealError,
)
from mealplanner.infra import models
from mealplanner.infra.db import transaction
from mealplanner.utilities.constants import RECONSTRUCT_LIMIT
from mealplanner.utilities.validators import IngredientInput, MealInput

logger = logging.getLogger(__name__)


class MealRepository:
    def __init__(self, session: Session):
        self.session = session

    def _query(self):
        return self.session.query(models.Meal).options(
            selectinload(models.Meal.ingredients),
            selectinload(models.Meal.steps),
        )

    def _get_row(self, meal_id: int) -> models.Meal:
        row = self.session.get(models.Meal, meal_id)
        if row is None:
            raise MealNotFoundError(meal_id)
        return row

    # --- Reads ----------------------------------------------------------
    def get_all_meals(self) -> List[Meal]:
        """All meals with ingredients and steps, A -> Z by name (case-insensitive)."""
        meals = [Meal.from_record(r) for r in self._query().all()]
        meals.sort(key=lambda m: m.name.lower())
        return meals

    def get_meal(self, meal_id: int) -> Meal:
        return Meal.from_record(self._get_row(meal_id))

    def get_meals_by_ids(self, ids: Iterable[int]) -> List[Meal]:
        """Meals for the given ids, in the order asked for; unknown ids are ignored."""
        ids = list(ids)
        if not ids:
            return []
        rows = self._query().filter(models.Meal.id.in_(ids)).all()
        by_id = {r.id: r for r in rows}
        return [Meal.from_record(by_id[i]) for i in dict.fromkeys(ids) if i in by_id]

    def pick_meal(self, min_effort: int, max_effort: int, exclude_red_meat: bool, cutoff: datetime,
                  exclude_ids: Iterable[int] = ()) -> Meal:
        """One random meal with effort in [min_effort, max_effort] not planned since `cutoff`.

        Meals in `exclude_ids` (already on this week's plan) are skipped.
        Raises NoEligibleMealError when nothing matches.
        """
        query = self.session.query(models.Meal).filter(
            models.Meal.relative_effort.between(min_effort, max_effort),
            or_(models.Meal.last_planned.is_(None), models.Meal.last_planned < cutoff),
        )
        if exclude_red_meat:
            query = query.filter(models.Meal.red_meat == false())
        exclude_ids = list(exclude_ids)
        if exclude_ids:
            query = query.filter(models.Meal.id.notin_(exclude_ids))
        row = query.order_by(func.random()).limit(1).first()
        if row is None:
            raise NoEligibleMealError(
                f"no meal with effort {min_effort}-{max_effort}"
                f"{' without red meat' if exclude_red_meat else ''} available"
            )
        return Meal.from_record(row)

    def swap_meal(self, current_id: int) -> Meal:
        """A random meal other than `current_id`."""
        row = (
            self.session.query(models.Meal)
            .filter(models.Meal.id != current_id)
            .order_by(func.random())
            .limit(1)
            .first()
        )
        if row is None:
            raise NoEligibleMealError(f"no meal other than {current_id} to swap in")
        return Meal.from_record(row)

    def get_last_planned_meals(self, limit: int = RECONSTRUCT_LIMIT) -> List[Meal]:
        """The most recently planned meals, newest first (ties broken by id)."""
        rows = (
            self._query()
            .filter(models.Meal.last_planned.isnot(None))
            .order_by(models.Meal.last_planned.desc(), models.Meal.id.asc())
            .limit(limit)
            .all()
        )
        return [Meal.from_record(r) for r in rows]

    # --- Writes ---------------------------------------------------------
    def create_meal(self, data: MealInput) -> Meal:
        """Insert the meal, its ingredients and its steps in one transaction."""
        row = models.Meal(
            meal_name=data.name,
            relative_effort=data.relative_effort,
            red_meat=data.red_meat,
            url=data.url,
        )
        row.ingredients = [
            models.Ingredient(name=i.name, quantity=i.quantity, unit=i.unit)
            for i in data.ingredients
        ]
        row.steps = [
            models.Step(step_number=n, instruction=text)
            for n, text in enumerate(data.steps, start=1)
        ]
        try:
            with transaction(self.session):
                self.session.add(row)
        except SQLAlchemyError as e:
            logger.error("create_meal: error inserting meal %r: %s", data.name, e)
            raise
        self.session.refresh(row)
        logger.info("Created meal %s (%s) with %d ingredients, %d steps",
                    row.id, row.meal_name, len(row.ingredients), len(row.steps))
        return Meal.from_record(row)

    def delete_meal(self, meal_id: int) -> None:
        row = self._get_row(meal_id)
        try:
            with transaction(self.session):
                self.session.delete(row)
        except SQLAlchemyError as e:
            logger.error("delete_meal: error deleting meal %s: %s", meal_id, e)
            raise
        logger.info("Deleted meal %s", meal_id)

    def _get_ingredient_row(self, meal_id: int, ingredient_id: int) -> models.Ingredient:
        self._get_row(meal_id)
        row = (
            self.session.query(models.Ingredient)
            .filter(models.Ingredient.id == ingredient_id, models.Ingredient.meal_id == meal_id)
            .first()
        )
        if row is None:
            raise IngredientNotFoundError(ingredient_id, meal_id)
        return row

    def update_ingredient(self, meal_id: int, ingredient_id: int, data: IngredientInput) -> Meal:
        row = self._get_ingredient_row(meal_id, ingredient_id)
        try:
            with transaction(self.session):
                row.name = data.name
                row.quantity = data.quantity
                row.unit = data.unit
        except SQLAlchemyError as e:
            logger.error("update_ingredient: error updating ingredient %s of meal %s: %s",
                         ingredient_id, meal_id, e)
            raise
        self.session.expire_all()
        return self.get_meal(meal_id)

    def delete_ingredient(self, meal_id: int, ingredient_id: int) -> Meal:
        row = self._get_ingredient_row(meal_id, ingredient_id)
        try:
            with transaction(self.session):
                self.session.delete(row)
        except SQLAlchemyError as e:
            logger.error("delete_ingredient: error deleting ingredient %s of meal %s: %s",
                         ingredient_id, meal_id, e)
            raise
        self.session.expire_all()
        return self.get_meal(meal_id)

    def update_last_planned(self, meal_ids: Iterable[int], when: Optional[datetime] = None) -> int:
        """Stamp `last_planned` on the given meals, in plan order; all or nothing.

        The first meal gets `when`, each later one a second less, so reading
        them back newest first (get_last_planned_meals) returns the plan order.
        """
        ids = list(dict.fromkeys(meal_ids))
        if not ids:
            return 0
        when = when or datetime.now()
        rows = {r.id: r for r in self.session.query(models.Meal).filter(models.Meal.id.in_(ids))}
        missing = [i for i in ids if i not in rows]
        if missing:
            raise MealNotFoundError(missing[0])
        try:
            with transaction(self.session):
                for index, meal_id in enumerate(ids):
                    rows[meal_id].last_planned = when - timedelta(seconds=index)
        except SQLAlchemyError as e:
            logger.error("update_last_planned: error updating meals %s: %s", ids, e)
            raise
        self.session.expire_all()
        logger.info("Marked %d meals as planned at %s", len(ids), when.isoformat())
        return len(ids)
