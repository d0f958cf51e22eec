import logging

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session

from mealplanner.domain.errors import NoEligibleMealError
from mealplanner.infra.Meal_Repository import MealRepository
from mealplanner.infra.db import get_db
from mealplanner.utilities.validators import IngredientInput, MealInput, SwapMealInput

router = APIRouter(prefix="/api/meals", tags=["meals"])
logger = logging.getLogger(__name__)


def get_meal_repository(db: Session = Depends(get_db)) -> MealRepository:
    return MealRepository(db)


def swap(payload: SwapMealInput, repo: MealRepository):
    try:
        meal = repo.swap_meal(payload.meal_id)
    except NoEligibleMealError as e:
        raise HTTPException(status_code=500, detail=f"Error swapping meal: {e}")
    logger.info("Swapped meal %s%s for %s", payload.meal_id,
                f" on {payload.day}" if payload.day else "", meal.id)
    return meal.to_dict()


@router.get("")
def list_meals(repo: MealRepository = Depends(get_meal_repository)):
    return [m.to_dict() for m in repo.get_all_meals()]


@router.post("", status_code=201)
def create_meal(payload: MealInput, repo: MealRepository = Depends(get_meal_repository)):
    return repo.create_meal(payload).to_dict()


@router.post("/swap")
def swap_meal(payload: SwapMealInput, repo: MealRepository = Depends(get_meal_repository)):
    return swap(payload, repo)


@router.get("/{meal_id}")
def get_meal(meal_id: int, repo: MealRepository = Depends(get_meal_repository)):
    return repo.get_meal(meal_id).to_dict()


@router.delete("/{meal_id}", status_code=204)
def delete_meal(meal_id: int, repo: MealRepository = Depends(get_meal_repository)):
    repo.delete_meal(meal_id)
    return Response(status_code=204)


@router.put("/{meal_id}/ingredients/{ingredient_id}")
def update_ingredient(meal_id: int, ingredient_id: int, payload: IngredientInput,
                      repo: MealRepository = Depends(get_meal_repository)):
    return repo.update_ingredient(meal_id, ingredient_id, payload).to_dict()


@router.delete("/{meal_id}/ingredients/{ingredient_id}")
def delete_ingredient(meal_id: int, ingredient_id: int,
                      repo: MealRepository = Depends(get_meal_repository)):
    return repo.delete_ingredient(meal_id, ingredient_id).to_dict()
