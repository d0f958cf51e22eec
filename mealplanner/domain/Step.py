"""Step domain entity: one numbered instruction of a meal's recipe."""


class Step:
    def __init__(self, instruction: str = "", step_number: int = 0, id: int = 0, meal_id: int = 0):
        self.id = id
        self.meal_id = meal_id
        self.step_number = step_number
        self.instruction = instruction

    def __str__(self) -> str:
        return f"{self.step_number}. {self.instruction}"

    __repr__ = __str__

    @staticmethod
    def from_record(record):
        return Step(
            instruction=record.instruction,
            step_number=record.step_number,
            id=record.id,
            meal_id=record.meal_id,
        )

    def to_dict(self):
        return {
            "id": self.id,
            "mealId": self.meal_id,
            "stepNumber": self.step_number,
            "instruction": self.instruction,
        }
