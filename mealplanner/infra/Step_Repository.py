import logging
from typing import Iterable, List, Optional

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from mealplanner.domain.Step import Step
from mealplanner.domain.errors import InvalidStepOrderError, MealNotFoundError, StepNotFoundError
from mealplanner.infra import models
from mealplanner.infra.db import transaction

logger = logging.getLogger(__name__)


class StepRepository:
    """Recipe steps of a meal, numbered 1..n without gaps."""

    def __init__(self, session: Session):
        self.session = session

    def _ensure_meal(self, meal_id: int) -> None:
        if self.session.get(models.Meal, meal_id) is None:
            raise MealNotFoundError(meal_id)

    def _rows(self, meal_id: int) -> List[models.Step]:
        return (
            self.session.query(models.Step)
            .filter(models.Step.meal_id == meal_id)
            .order_by(models.Step.step_number)
            .all()
        )

    def _get_row(self, meal_id: int, step_id: int) -> models.Step:
        row = (
            self.session.query(models.Step)
            .filter(models.Step.id == step_id, models.Step.meal_id == meal_id)
            .first()
        )
        if row is None:
            raise StepNotFoundError(step_id, meal_id)
        return row

    def _next_number(self, meal_id: int) -> int:
        current = (
            self.session.query(func.max(models.Step.step_number))
            .filter(models.Step.meal_id == meal_id)
            .scalar()
        )
        return (current or 0) + 1

    def _renumber(self, ordered: List[models.Step]) -> None:
        """Number `ordered` 1..n inside the caller's transaction.

        Numbers go to negatives first, then to their final values, so no
        intermediate state collides with the unique constraint.
        """
        for position, row in enumerate(ordered, start=1):
            row.step_number = -position
        self.session.flush()
        for position, row in enumerate(ordered, start=1):
            row.step_number = position
        self.session.flush()

    def get_steps(self, meal_id: int) -> List[Step]:
        self._ensure_meal(meal_id)
        return [Step.from_record(r) for r in self._rows(meal_id)]

    def add_step(self, meal_id: int, instruction: str, step_number: Optional[int] = None) -> Step:
        """Append a step, or insert it at `step_number` and shift the later steps down."""
        self._ensure_meal(meal_id)
        next_number = self._next_number(meal_id)
        position = step_number or next_number
        if not 1 <= position <= next_number:
            raise InvalidStepOrderError(
                f"step number {position} is out of range 1-{next_number} for meal {meal_id}"
            )
        row = models.Step(meal_id=meal_id, step_number=next_number, instruction=instruction)
        try:
            with transaction(self.session):
                self.session.add(row)
                self.session.flush()
                if position < next_number:
                    ordered = [r for r in self._rows(meal_id) if r is not row]
                    ordered.insert(position - 1, row)
                    self._renumber(ordered)
        except SQLAlchemyError as e:
            logger.error("add_step: error adding step to meal %s: %s", meal_id, e)
            raise
        self.session.refresh(row)
        return Step.from_record(row)

    def add_steps(self, meal_id: int, instructions: Iterable[str]) -> List[Step]:
        """Append all instructions after the current last step, in one transaction."""
        self._ensure_meal(meal_id)
        start = self._next_number(meal_id)
        rows = [
            models.Step(meal_id=meal_id, step_number=n, instruction=text)
            for n, text in enumerate(instructions, start=start)
        ]
        if not rows:
            return []
        try:
            with transaction(self.session):
                self.session.add_all(rows)
        except SQLAlchemyError as e:
            logger.error("add_steps: error adding %d steps to meal %s: %s", len(rows), meal_id, e)
            raise
        for row in rows:
            self.session.refresh(row)
        logger.info("Added %d steps to meal %s", len(rows), meal_id)
        return [Step.from_record(r) for r in rows]

    def update_step(self, meal_id: int, step_id: int, instruction: str,
                    step_number: Optional[int] = None) -> Step:
        """Change the instruction; a `step_number` moves the step to that position."""
        row = self._get_row(meal_id, step_id)
        ordered = self._rows(meal_id)
        if step_number and not 1 <= step_number <= len(ordered):
            raise InvalidStepOrderError(
                f"step number {step_number} is out of range 1-{len(ordered)} for meal {meal_id}"
            )
        try:
            with transaction(self.session):
                row.instruction = instruction
                if step_number and step_number != row.step_number:
                    ordered.remove(row)
                    ordered.insert(step_number - 1, row)
                    self._renumber(ordered)
        except SQLAlchemyError as e:
            logger.error("update_step: error updating step %s of meal %s: %s", step_id, meal_id, e)
            raise
        self.session.refresh(row)
        return Step.from_record(row)

    def delete_step(self, meal_id: int, step_id: int) -> None:
        """Delete one step and close the gap it leaves in the numbering."""
        row = self._get_row(meal_id, step_id)
        removed = row.step_number
        try:
            with transaction(self.session):
                self.session.delete(row)
                self.session.flush()
                later = (
                    self.session.query(models.Step)
                    .filter(models.Step.meal_id == meal_id, models.Step.step_number > removed)
                    .order_by(models.Step.step_number)
                    .all()
                )
                # ascending, one row at a time: the (meal_id, step_number) pair stays unique
                for step in later:
                    step.step_number -= 1
                    self.session.flush()
        except SQLAlchemyError as e:
            logger.error("delete_step: error deleting step %s of meal %s: %s", step_id, meal_id, e)
            raise

    def reorder_steps(self, meal_id: int, step_ids: List[int]) -> List[Step]:
        """Renumber the steps 1..n in the order of `step_ids`.

        `step_ids` must name every step of the meal exactly once.
        """
        self._ensure_meal(meal_id)
        rows = {r.id: r for r in self._rows(meal_id)}
        if len(step_ids) != len(set(step_ids)) or set(step_ids) != set(rows):
            raise InvalidStepOrderError(
                f"step ids {step_ids} are not a reordering of the steps of meal {meal_id}"
            )
        try:
            with transaction(self.session):
                self._renumber([rows[i] for i in step_ids])
        except SQLAlchemyError as e:
            logger.error("reorder_steps: error reordering steps of meal %s: %s", meal_id, e)
            raise
        self.session.expire_all()
        return self.get_steps(meal_id)

    def delete_all_steps(self, meal_id: int) -> int:
        self._ensure_meal(meal_id)
        try:
            with transaction(self.session):
                deleted = (
                    self.session.query(models.Step)
                    .filter(models.Step.meal_id == meal_id)
                    .delete(synchronize_session=False)
                )
        except SQLAlchemyError as e:
            logger.error("delete_all_steps: error deleting steps of meal %s: %s", meal_id, e)
            raise
        self.session.expire_all()
        return deleted
