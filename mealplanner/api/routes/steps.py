import json
import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import ValidationError
from sqlalchemy.orm import Session

from mealplanner.infra.Step_Repository import StepRepository
from mealplanner.infra.db import get_db
from mealplanner.logic.steps.parser import parse_steps_from_text
from mealplanner.utilities.validators import BulkStepsInput, ReorderStepsInput, StepInput

router = APIRouter(prefix="/api/meals/{meal_id}/steps", tags=["steps"])
logger = logging.getLogger(__name__)


def get_step_repository(db: Session = Depends(get_db)) -> StepRepository:
    return StepRepository(db)


async def _bulk_instructions(request: Request):
    """Instructions from a JSON body ({"text"} or {"instructions"}) or from raw pasted text."""
    raw = await request.body()
    if "application/json" in request.headers.get("content-type", ""):
        try:
            payload = BulkStepsInput.model_validate(json.loads(raw or b"{}"))
        except (ValueError, ValidationError) as e:
            raise HTTPException(status_code=400, detail=f"Invalid JSON payload: {e}")
        if payload.instructions:
            return payload.instructions
        if payload.text:
            return parse_steps_from_text(payload.text)
        raise HTTPException(status_code=400, detail="Either 'text' or 'instructions' must be provided")

    text = raw.decode("utf-8", errors="replace")
    if not text.strip():
        raise HTTPException(status_code=400, detail="Empty request body")
    return parse_steps_from_text(text)


@router.get("")
def list_steps(meal_id: int, repo: StepRepository = Depends(get_step_repository)):
    return [s.to_dict() for s in repo.get_steps(meal_id)]


@router.post("", status_code=201)
def add_step(meal_id: int, payload: StepInput, repo: StepRepository = Depends(get_step_repository)):
    return repo.add_step(meal_id, payload.instruction, payload.step_number).to_dict()


@router.post("/bulk", status_code=201)
async def add_steps_bulk(meal_id: int, request: Request,
                         repo: StepRepository = Depends(get_step_repository)):
    instructions = [i.strip() for i in await _bulk_instructions(request) if i and i.strip()]
    if not instructions:
        raise HTTPException(status_code=400, detail="No valid steps found in the input")
    return [s.to_dict() for s in repo.add_steps(meal_id, instructions)]


@router.put("/reorder")
def reorder_steps(meal_id: int, payload: ReorderStepsInput,
                  repo: StepRepository = Depends(get_step_repository)):
    return [s.to_dict() for s in repo.reorder_steps(meal_id, payload.step_ids)]


@router.put("/{step_id}")
def update_step(meal_id: int, step_id: int, payload: StepInput,
                repo: StepRepository = Depends(get_step_repository)):
    return repo.update_step(meal_id, step_id, payload.instruction, payload.step_number).to_dict()


@router.delete("/{step_id}")
def delete_step(meal_id: int, step_id: int, repo: StepRepository = Depends(get_step_repository)):
    repo.delete_step(meal_id, step_id)
    return {"message": "Step deleted"}


@router.delete("")
def delete_all_steps(meal_id: int, repo: StepRepository = Depends(get_step_repository)):
    deleted = repo.delete_all_steps(meal_id)
    return {"message": "All steps deleted", "deleted": deleted}
