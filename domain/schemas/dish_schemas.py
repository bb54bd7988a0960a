from pydantic import AliasChoices, BaseModel, Field, field_validator
from typing import Optional, List, Dict, Any


def _stringify_id(value: Any) -> Any:
    """Dish ids are stored as strings; numeric ids from clients are converted."""
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return str(value)
    return value


class DishCreate(BaseModel):
    """Schema for creating a dish.

    Vote counters, the vote ledger and timestamps are always initialized by the
    service, so caller-supplied values for them are ignored. Any other fields
    are kept and stored on the record as given.
    """

    model_config = {"extra": "allow"}

    id: str = Field(..., min_length=1, description="Dish identifier (primary key)")
    name: str = Field(..., description="Display name")
    description: str = Field(default="", description="Display description")
    meals: List[Any] = Field(
        default_factory=list, description="Meals this dish is served at"
    )

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v):
        return _stringify_id(v)


class DishReplace(BaseModel):
    """Schema for overwriting a dish's display fields and counters"""

    name: str = Field(..., description="Display name")
    description: str = Field(default="", description="Display description")
    good: int = Field(default=0, ge=0, description="Good vote counter")
    bad: int = Field(default=0, ge=0, description="Bad vote counter")
    meals: List[Any] = Field(default_factory=list)

    @field_validator("description", mode="before")
    @classmethod
    def none_description_is_empty(cls, v):
        return "" if v is None else v

    @field_validator("good", "bad", mode="before")
    @classmethod
    def none_counter_is_zero(cls, v):
        return 0 if v is None else v

    @field_validator("meals", mode="before")
    @classmethod
    def none_meals_is_empty(cls, v):
        return [] if v is None else v


class DishVoteRequest(BaseModel):
    """Vote on a dish whose id is given by the URL"""

    user_email: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("userEmail", "voterId", "user_email"),
        description="Voter identifier, usually an email address",
    )
    vote: str = Field(..., min_length=1, description='"good" or "bad"')


class VoteRequest(DishVoteRequest):
    """Vote on a dish identified in the request body"""

    dish_id: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("dishId", "dish_id"),
        description="Dish identifier",
    )

    @field_validator("dish_id", mode="before")
    @classmethod
    def coerce_dish_id(cls, v):
        return _stringify_id(v)


class DishResponse(BaseModel):
    """Dish as persisted in the record store"""

    id: str
    name: Optional[str] = None
    description: Optional[str] = None
    meals: List[Any] = Field(default_factory=list)
    good: int = 0
    bad: int = 0
    user_votes: Dict[str, str] = Field(default_factory=dict, alias="userVotes")
    created_at: Optional[str] = Field(None, alias="createdAt")
    updated_at: Optional[str] = Field(None, alias="updatedAt")

    model_config = {"populate_by_name": True, "from_attributes": True, "extra": "allow"}

    @field_validator("meals", "user_votes", mode="before")
    @classmethod
    def missing_collections(cls, v, info):
        if v is None:
            return {} if info.field_name == "user_votes" else []
        return v

    @field_validator("good", "bad", mode="before")
    @classmethod
    def missing_counters(cls, v):
        return 0 if v is None else v
