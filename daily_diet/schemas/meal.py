from datetime import datetime, timezone

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, StrictBool, field_validator, model_validator
from pydantic.alias_generators import to_camel

from ..models.meal import TITLE_MAX_LENGTH

_IN_DIET_ALIASES = AliasChoices("in_diet", "isDiet", "inDiet")


def _as_naive_utc(value: datetime | None) -> datetime | None:
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


class MealCreate(BaseModel):
    title: str = Field(min_length=1, max_length=TITLE_MAX_LENGTH)
    description: str | None = None
    in_diet: StrictBool = Field(validation_alias=_IN_DIET_ALIASES)
    created_at: datetime | None = None

    @field_validator("created_at")
    @classmethod
    def _normalize_created_at(cls, value: datetime | None) -> datetime | None:
        return _as_naive_utc(value)


class MealUpdate(BaseModel):
    title: str | None = Field(default=None, min_length=1, max_length=TITLE_MAX_LENGTH)
    description: str | None = None
    in_diet: StrictBool | None = Field(default=None, validation_alias=_IN_DIET_ALIASES)

    @model_validator(mode="after")
    def _reject_nulled_required(self) -> "MealUpdate":
        for name in ("title", "in_diet"):
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True)


class MealRead(BaseModel):
    id: str
    title: str
    description: str | None = None
    in_diet: bool
    created_at: datetime

    class Config:
        from_attributes = True


class MealListResponse(BaseModel):
    data: list[MealRead]


class MealDetailResponse(BaseModel):
    data: MealRead | None = None


class MealMetrics(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    total_meals: int = 0
    total_diet_meals: int = 0
    total_non_diet_meals: int = 0
    diet_sequence_record: int = 0
