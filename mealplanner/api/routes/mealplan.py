import logging
from datetime import date
from typing import Optional

from fastapi import APIRouter, Body, Depends, Query, Response

from mealplanner.api.routes.meals import get_meal_repository, swap
from mealplanner.domain.Plan import Plan
from mealplanner.domain.errors import PlanReconstructionError
from mealplanner.infra.Meal_Repository import MealRepository
from mealplanner.infra.pdf_utils import generate_pdf_for_plan
from mealplanner.logic.export.ics import monday_of, plan_to_ics
from mealplanner.logic.planning.generator import generate_weekly_plan
from mealplanner.logic.planning.reconstruct import reconstruct_plan
from mealplanner.logic.shopping.list_builder import build_shopping_list
from mealplanner.utilities.validators import (
    FinalizePlanInput,
    GeneratePlanInput,
    ReplaceMealInput,
    ShoppingListInput,
    SwapMealInput,
)

router = APIRouter(tags=["mealplan"])
logger = logging.getLogger(__name__)


def current_plan(repo: MealRepository) -> Plan:
    """The last finalized week if it can be rebuilt, otherwise a freshly generated one."""
    try:
        return reconstruct_plan(repo.get_last_planned_meals())
    except PlanReconstructionError as e:
        logger.info("No recent plan to restore (%s); generating a new one", e)
        return generate_weekly_plan(repo)


@router.get("/api/mealplan")
def get_meal_plan(repo: MealRepository = Depends(get_meal_repository)):
    return current_plan(repo).to_dict()


@router.post("/api/mealplan/generate")
def generate_meal_plan(payload: Optional[GeneratePlanInput] = Body(None),
                       repo: MealRepository = Depends(get_meal_repository)):
    skip_days = payload.skip_days if payload else []
    plan = generate_weekly_plan(repo, skip_days=skip_days)
    logger.info("Generated meal plan (skipped: %s): %s",
                ", ".join(skip_days) or "none", {d: m.name for d, m in plan.days()})
    return plan.to_dict()


@router.post("/api/mealplan/finalize")
def finalize_meal_plan(payload: FinalizePlanInput,
                       repo: MealRepository = Depends(get_meal_repository)):
    updated = repo.update_last_planned(payload.meal_ids())
    return {"message": "Meal plan finalized", "updated": updated}


@router.post("/api/mealplan/swap")
def swap_plan_meal(payload: SwapMealInput, repo: MealRepository = Depends(get_meal_repository)):
    return swap(payload, repo)


@router.post("/api/mealplan/replace")
def replace_plan_meal(payload: ReplaceMealInput,
                      repo: MealRepository = Depends(get_meal_repository)):
    meal = repo.get_meal(payload.new_meal_id)
    logger.info("Replaced %s with meal %s", payload.day, meal.id)
    return meal.to_dict()


@router.get("/api/mealplan/ics")
def export_ics(monday: Optional[date] = Query(None),
               repo: MealRepository = Depends(get_meal_repository)):
    monday = monday or monday_of(date.today())
    body = plan_to_ics(current_plan(repo), monday)
    return Response(
        content=body,
        media_type="text/calendar",
        headers={
            "Content-Disposition": f"attachment; filename=meal_plan_{monday:%Y%m%d}.ics"
        },
    )


@router.get("/api/mealplan/pdf")
def export_pdf(monday: Optional[date] = Query(None),
               repo: MealRepository = Depends(get_meal_repository)):
    monday = monday or monday_of(date.today())
    pdf_bytes = generate_pdf_for_plan(current_plan(repo), monday)
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={
            "Content-Disposition": f"attachment; filename=meal_plan_{monday:%Y%m%d}.pdf"
        },
    )


@router.post("/api/shoppinglist")
def shopping_list(payload: ShoppingListInput,
                  repo: MealRepository = Depends(get_meal_repository)):
    meals = repo.get_meals_by_ids(payload.plan)
    logger.debug("Retrieved %d meals for shopping list", len(meals))
    items = build_shopping_list(meals)
    logger.info("Generated shopping list with %d items", len(items))
    return items
