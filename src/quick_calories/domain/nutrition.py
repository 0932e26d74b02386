"""Models for AI nutrition estimates."""

from pydantic import BaseModel, ConfigDict, Field


class NutritionEstimate(BaseModel):
    """Structured nutrition payload returned by the estimation model."""

    model_config = ConfigDict(frozen=True, strict=True)

    food_name: str
    calories: int = Field(ge=0)
    protein: float = Field(ge=0.0)
    carbs: float = Field(ge=0.0)
    fat: float = Field(ge=0.0)

    def scaled(self, servings: float) -> "NutritionEstimate":
        """Return the estimate multiplied by a serving count."""
        return NutritionEstimate(
            food_name=self.food_name,
            calories=int(self.calories * servings),
            protein=self.protein * servings,
            carbs=self.carbs * servings,
            fat=self.fat * servings,
        )


class CompletionMessage(BaseModel):
    """Assistant message inside a completion choice."""

    content: str


class CompletionChoice(BaseModel):
    """Single completion choice."""

    message: CompletionMessage


class CompletionEnvelope(BaseModel):
    """Subset of the chat-completions response body the parser relies on."""

    choices: list[CompletionChoice]
