"""Pydantic models for API request bodies."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from health_tracker.domain.entries import FoodDraft, HydrationDraft, SupplementDraft

Meal = Literal["breakfast", "lunch", "dinner", "snack"]
Frequency = Literal["daily", "weekly", "as-needed"]
TimeOfDay = Literal["morning", "afternoon", "evening"]
DrinkType = Literal["water", "coffee", "tea", "juice", "other"]


class CamelModel(BaseModel):
    """Base model accepting camelCase or snake_case keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SignupRequest(CamelModel):
    """Account creation payload."""

    email: str = Field(min_length=1)
    password: str = Field(min_length=1)
    name: str | None = None


class FoodEntryCreate(CamelModel):
    """New food entry payload."""

    name: str = Field(min_length=1)
    calories: int = Field(ge=0)
    protein: int = Field(default=0, ge=0)
    carbs: int = Field(default=0, ge=0)
    fat: int = Field(default=0, ge=0)
    meal: Meal = "breakfast"

    def to_draft(self) -> FoodDraft:
        return FoodDraft(
            name=self.name,
            calories=self.calories,
            protein=self.protein,
            carbs=self.carbs,
            fat=self.fat,
            meal=self.meal,
        )


class SupplementCreate(CamelModel):
    """New supplement payload."""

    name: str = Field(min_length=1)
    dosage: str = ""
    frequency: Frequency = "daily"
    time_of_day: list[TimeOfDay] = Field(default_factory=list)

    def to_draft(self) -> SupplementDraft:
        return SupplementDraft(
            name=self.name,
            dosage=self.dosage,
            frequency=self.frequency,
            time_of_day=tuple(dict.fromkeys(self.time_of_day)),
        )


class SupplementUpdate(CamelModel):
    """Partial supplement update; only provided fields are applied."""

    name: str | None = Field(default=None, min_length=1)
    dosage: str | None = None
    frequency: Frequency | None = None
    time_of_day: list[TimeOfDay] | None = None
    taken: bool | None = None

    def changes(self) -> dict[str, object]:
        return self.model_dump(by_alias=True, exclude_unset=True, exclude_none=True)


class HydrationEntryCreate(CamelModel):
    """New drink payload."""

    amount: float = Field(gt=0)
    type: DrinkType = "water"

    def to_draft(self) -> HydrationDraft:
        return HydrationDraft(amount=self.amount, type=self.type)


class HydrationGoalUpdate(CamelModel):
    """Hydration goal payload in litres."""

    goal: float = Field(gt=0)


class NutritionGoals(CamelModel):
    """Daily calorie and macro targets."""

    calories: int = Field(gt=0)
    protein: int = Field(gt=0)
    carbs: int = Field(gt=0)
    fat: int = Field(gt=0)


class ProfileUpdate(CamelModel):
    """Profile fields to merge into the stored profile."""

    name: str | None = None
    nutrition_goals: NutritionGoals | None = None

    def changes(self) -> dict[str, object]:
        return self.model_dump(by_alias=True, exclude_unset=True, exclude_none=True)
