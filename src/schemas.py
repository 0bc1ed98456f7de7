from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Credential(BaseModel):
    username: str = Field("", json_schema_extra={"example": "kanmu"})
    password: str = Field("", json_schema_extra={"example": "gocon2025"})

    model_config = ConfigDict(from_attributes=True)


class Recipe(BaseModel):
    id: int
    name: str
    description: str
    # shorter blurb shown on dashboard cards
    summary: str = ""
    emoji: str = ""
    image: bytes = Field(default=b"", repr=False)
    content_type: str = "image/jpeg"
    steps: List[str] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


class DashboardRecipe(BaseModel):
    id: int
    name: str
    description: str
    emoji: str


class DashboardData(BaseModel):
    title: str
    welcome_message: str
    recipes: List[DashboardRecipe] = Field(default_factory=list)


class RecipeDetail(BaseModel):
    id: int
    name: str
    description: str
    emoji: str
    steps: List[str] = Field(default_factory=list)
    show_download: bool = False


class LoginData(BaseModel):
    error: Optional[str] = None
