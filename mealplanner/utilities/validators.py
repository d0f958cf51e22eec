"""
Request schemas using Pydantic.

Field names follow the JSON the frontend sends (camelCase); snake_case and the
capitalised ingredient keys of older clients are accepted as well.
"""
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from typing import Any, Dict, List, Optional

from mealplanner.utilities.constants import WEEKDAYS


class IngredientInput(BaseModel):
    """Schema for one ingredient of a meal."""
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., min_length=1, validation_alias=AliasChoices('name', 'Name'))
    quantity: Optional[float] = Field(None, validation_alias=AliasChoices('quantity', 'Quantity'))
    unit: str = Field('', max_length=50, validation_alias=AliasChoices('unit', 'Unit'))

    @field_validator('name', 'unit')
    @classmethod
    def strip_whitespace(cls, v):
        """Remove leading/trailing whitespace."""
        if isinstance(v, str):
            return v.strip()
        return v

    @field_validator('quantity', mode='before')
    @classmethod
    def blank_quantity(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator('unit', mode='before')
    @classmethod
    def none_unit(cls, v):
        return '' if v is None else v


class MealInput(BaseModel):
    """Schema for creating a meal with its ingredients and (optionally) steps."""
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., validation_alias=AliasChoices('mealName', 'meal_name', 'name'))
    relative_effort: int = Field(0, ge=0, validation_alias=AliasChoices('relativeEffort', 'relative_effort'))
    red_meat: bool = Field(False, validation_alias=AliasChoices('redMeat', 'red_meat'))
    url: Optional[str] = None
    ingredients: List[IngredientInput] = Field(default_factory=list)
    steps: List[str] = Field(default_factory=list)

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        if not v or not v.strip():
            raise ValueError('Meal name is required')
        return v.strip()

    @field_validator('url')
    @classmethod
    def blank_url(cls, v):
        if v is None:
            return None
        return v.strip() or None

    @field_validator('steps')
    @classmethod
    def validate_steps(cls, v):
        """Filter out empty steps."""
        return [step.strip() for step in v if step and step.strip()]


class StepInput(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    instruction: str = Field(..., min_length=1)
    step_number: Optional[int] = Field(None, validation_alias=AliasChoices('stepNumber', 'step_number'))

    @field_validator('instruction')
    @classmethod
    def validate_instruction(cls, v):
        if not v.strip():
            raise ValueError('Instruction cannot be empty')
        return v.strip()


class BulkStepsInput(BaseModel):
    """Either free text to be parsed into steps, or already split instructions."""
    text: Optional[str] = None
    instructions: List[str] = Field(default_factory=list)


class ReorderStepsInput(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    step_ids: List[int] = Field(..., validation_alias=AliasChoices('stepIds', 'step_ids'))

    @field_validator('step_ids')
    @classmethod
    def validate_step_ids(cls, v):
        if not v:
            raise ValueError('No step IDs provided')
        return v


class SwapMealInput(BaseModel):
    meal_id: int
    day: Optional[str] = None


class ReplaceMealInput(BaseModel):
    day: str
    new_meal_id: int


class GeneratePlanInput(BaseModel):
    skip_days: List[str] = Field(default_factory=list)

    @field_validator('skip_days')
    @classmethod
    def validate_days(cls, v):
        unknown = [d for d in v if d not in WEEKDAYS]
        if unknown:
            raise ValueError(f"Unknown weekday(s): {', '.join(unknown)}")
        return v


class FinalizePlanInput(BaseModel):
    """Plan as sent back by the frontend: day -> meal object (or bare meal id)."""
    plan: Dict[str, Any] = Field(default_factory=dict)

    def meal_ids(self) -> List[int]:
        """Meal ids in plan order: Monday..Sunday first, then any other keys as sent."""
        days = [d for d in WEEKDAYS if d in self.plan]
        days += [d for d in self.plan if d not in days]
        ids = []
        for day in days:
            value = self.plan[day]
            if isinstance(value, dict):
                value = value.get('id')
            try:
                meal_id = int(value)
            except (TypeError, ValueError):
                continue
            # 0 is the "Eating out" placeholder
            if meal_id > 0 and meal_id not in ids:
                ids.append(meal_id)
        return ids


class ShoppingListInput(BaseModel):
    plan: List[int] = Field(default_factory=list)
