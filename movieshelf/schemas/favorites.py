from pydantic import BaseModel, Field, ConfigDict, field_validator
from pydantic.alias_generators import to_camel
from datetime import datetime
from typing import List, Optional

from movieshelf.schemas.validation import SafeStringMixin


class FavoriteAdd(BaseModel, SafeStringMixin):
    """Schema for adding a movie to favorites (camelCase or snake_case keys)"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    movie_id: int = Field(..., ge=1, description="TMDB movie ID")
    title: str = Field(..., min_length=1, max_length=500)
    poster_path: Optional[str] = Field(None, max_length=500)
    rating: Optional[str] = Field(None, max_length=20, description="Display rating, e.g. \"7.8\"")

    @field_validator('title')
    @classmethod
    def clean_title(cls, v):
        return cls.validate_no_script(v)

    # The client sends vote_average as a number
    @field_validator('rating', mode='before')
    @classmethod
    def rating_as_text(cls, v):
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v


class FavoriteSync(BaseModel):
    """Favorites a client collected while signed out"""
    favorites: List[FavoriteAdd] = Field(default_factory=list, max_length=1000)


class FavoriteResponse(BaseModel):
    """Schema for favorite movie response"""
    id: int
    user_id: int
    movie_id: int
    title: str
    poster_path: Optional[str]
    rating: Optional[str]
    created_at: datetime
    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)
