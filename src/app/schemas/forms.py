from __future__ import annotations

from typing import Any, Type, TypeVar

from pydantic import BaseModel, Field, ValidationError, field_validator

from src.app.domain.errors import FormValidationError
from src.app.services.ingredients import split_ingredients

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"

_FIELD_MESSAGES = {
    "email": "Please enter your email",
    "password": "Please enter your password",
    "title": "Please enter recipe title",
    "description": "Please enter description",
    "ingredients": "Please enter ingredient",
}

FormT = TypeVar("FormT", bound=BaseModel)


class CredentialsForm(BaseModel):
    email: str = Field(..., min_length=1, pattern=EMAIL_PATTERN)
    password: str = Field(..., min_length=1)

    @field_validator("email", mode="before")
    @classmethod
    def _strip_email(cls, value: Any) -> Any:
        return value.strip() if isinstance(value, str) else value


class RecipeDraft(BaseModel):
    title: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    ingredients: list[str] = Field(..., min_length=1)

    @field_validator("title", "description", mode="before")
    @classmethod
    def _strip(cls, value: Any) -> Any:
        return value.strip() if isinstance(value, str) else value

    @field_validator("ingredients")
    @classmethod
    def _entries_required(cls, value: list[str]) -> list[str]:
        # entries are stored as typed; blank-only ones count as missing
        if any(not item.strip() for item in value):
            raise ValueError("every ingredient entry is required")
        return value


class RecipeEditForm(BaseModel):
    title: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    ingredients: str = Field(..., min_length=1)

    @field_validator("title", "description", "ingredients", mode="before")
    @classmethod
    def _strip(cls, value: Any) -> Any:
        return value.strip() if isinstance(value, str) else value

    @field_validator("ingredients")
    @classmethod
    def _at_least_one(cls, value: str) -> str:
        if not split_ingredients(value):
            raise ValueError("at least one ingredient is required")
        return value

    def changes(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "description": self.description,
            "ingredients": split_ingredients(self.ingredients),
        }


def validate_form(model: Type[FormT], data: dict[str, Any]) -> FormT:
    """Run the form layer checks; raises FormValidationError with field messages."""
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        errors: list[str] = []
        for item in exc.errors():
            name = str(item["loc"][0]) if item.get("loc") else ""
            message = _FIELD_MESSAGES.get(name, item.get("msg", "Invalid value"))
            if name == "email" and item.get("type") == "string_pattern_mismatch":
                message = "Please enter a valid email"
            if message not in errors:
                errors.append(message)
        raise FormValidationError(errors) from exc
