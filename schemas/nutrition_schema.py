"""Nutrition value schema shared by foods, meals, plans and daily totals."""

from typing import Iterable, Optional

from pydantic import BaseModel, Field


class NutritionInfo(BaseModel):
    """Macro and micro nutrient amounts for one serving, meal or day.

    Values add pointwise (`a + b`); absent optional fields count as 0 in a sum.
    """

    calories: float = Field(0.0, ge=0, examples=[450.0], description="Energy in kcal")
    protein: float = Field(0.0, ge=0, examples=[30.0], description="Protein in grams")
    carbs: float = Field(0.0, ge=0, examples=[45.0], description="Carbohydrates in grams")
    fat: float = Field(0.0, ge=0, examples=[15.0], description="Fat in grams")
    fiber: float = Field(0.0, ge=0, examples=[6.0], description="Fiber in grams")
    sugar: Optional[float] = Field(None, ge=0, examples=[8.0], description="Sugar in grams")
    sodium: Optional[float] = Field(None, ge=0, examples=[600.0], description="Sodium in milligrams")

    @classmethod
    def zero(cls) -> "NutritionInfo":
        return cls(sugar=0.0, sodium=0.0)

    def __add__(self, other):
        if not isinstance(other, NutritionInfo):
            return NotImplemented
        return NutritionInfo(
            calories=self.calories + other.calories,
            protein=self.protein + other.protein,
            carbs=self.carbs + other.carbs,
            fat=self.fat + other.fat,
            fiber=self.fiber + other.fiber,
            sugar=(self.sugar or 0.0) + (other.sugar or 0.0),
            sodium=(self.sodium or 0.0) + (other.sodium or 0.0),
        )

    def __radd__(self, other):
        # lets the builtin sum() start from 0
        if other == 0:
            return self + NutritionInfo.zero()
        return NotImplemented

    def scaled(self, factor: float) -> "NutritionInfo":
        """Return a copy with every amount multiplied by `factor`."""
        return NutritionInfo(
            calories=self.calories * factor,
            protein=self.protein * factor,
            carbs=self.carbs * factor,
            fat=self.fat * factor,
            fiber=self.fiber * factor,
            sugar=None if self.sugar is None else self.sugar * factor,
            sodium=None if self.sodium is None else self.sodium * factor,
        )

    def rounded(self, ndigits: int = 1) -> "NutritionInfo":
        """Round every amount to eliminate floating point noise."""
        return NutritionInfo(
            calories=round(self.calories, ndigits),
            protein=round(self.protein, ndigits),
            carbs=round(self.carbs, ndigits),
            fat=round(self.fat, ndigits),
            fiber=round(self.fiber, ndigits),
            sugar=None if self.sugar is None else round(self.sugar, ndigits),
            sodium=None if self.sodium is None else round(self.sodium, ndigits),
        )


def sum_nutrition(items: Iterable[NutritionInfo]) -> NutritionInfo:
    """Fold nutrition records with `+`, starting from the all-zero record."""
    total = NutritionInfo.zero()
    for item in items:
        total = total + item
    return total
