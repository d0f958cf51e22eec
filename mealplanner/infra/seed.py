"""Load meals and ingredients from the `Meal_db.csv` export."""
import csv
import logging
from datetime import datetime
from fractions import Fraction
from pathlib import Path
from typing import Optional, Tuple

from sqlalchemy.orm import Session

from mealplanner.infra import models
from mealplanner.infra.db import transaction
from mealplanner.utilities.constants import RED_MEAT_KEYWORDS, SEED_DATE_FORMAT

logger = logging.getLogger(__name__)


def parse_quantity(token: str) -> Optional[float]:
    """'2' -> 2.0, '1.5' -> 1.5, '1/2' -> 0.5; anything else -> None."""
    try:
        return float(Fraction(token))
    except (ValueError, ZeroDivisionError):
        return None


def parse_ingredient(text: str) -> Tuple[Optional[float], str, str]:
    """Split '<quantity> <unit> <name...>' into its parts.

    Strings with fewer than three words, or whose first word is not a number,
    are kept whole as the ingredient name.
    """
    tokens = text.split()
    if len(tokens) < 3:
        return None, "", text.strip()
    quantity = parse_quantity(tokens[0])
    if quantity is None:
        return None, "", text.strip()
    return quantity, tokens[1], " ".join(tokens[2:])


def is_red_meat(meal_name: str) -> bool:
    lower = meal_name.lower()
    return any(kw in lower for kw in RED_MEAT_KEYWORDS)


def _parse_last_planned(value: str) -> Optional[datetime]:
    value = value.strip()
    if not value:
        return None
    try:
        return datetime.strptime(value, SEED_DATE_FORMAT)
    except ValueError:
        logger.warning("Ignoring unparseable last_planned value %r", value)
        return None


def seed_from_csv(session: Session, path) -> int:
    """Insert every meal of the CSV once, one ingredient per row.

    Columns: meal name, ingredient, relative effort, last planned. Meals whose
    name is already stored are left untouched. Returns the number of meals added.
    """
    path = Path(path)
    existing = {name for (name,) in session.query(models.Meal.meal_name)}
    added = {}

    with transaction(session), path.open(newline="", encoding="utf-8") as fh:
        reader = csv.reader(fh)
        next(reader, None)  # header
        for line_no, record in enumerate(reader, start=2):
            if len(record) < 4:
                logger.debug("Skipping short row %d in %s", line_no, path.name)
                continue
            name, ingredient, effort, last_planned = (v.strip() for v in record[:4])
            if not name or name in existing:
                continue
            try:
                relative_effort = int(effort)
            except ValueError:
                logger.warning("Skipping row %d: effort %r is not an integer", line_no, effort)
                continue

            meal = added.get(name)
            if meal is None:
                meal = models.Meal(
                    meal_name=name,
                    relative_effort=relative_effort,
                    last_planned=_parse_last_planned(last_planned),
                    red_meat=is_red_meat(name),
                )
                session.add(meal)
                added[name] = meal

            if ingredient:
                quantity, unit, ing_name = parse_ingredient(ingredient)
                meal.ingredients.append(models.Ingredient(quantity=quantity, unit=unit, name=ing_name))

    logger.info("Seeded %d meals from %s", len(added), path)
    return len(added)
