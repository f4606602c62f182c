from __future__ import annotations

from datetime import date
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


# Column order of the friends table, shared by the repo and as_row()
FRIEND_COLUMNS: tuple[str, ...] = ("name", "gender", "birth_date", "company", "title", "phone", "wechat")
REQUIRED_FIELDS: tuple[str, ...] = ("name", "gender", "birth_date")
OPTIONAL_FIELDS: tuple[str, ...] = ("company", "title", "phone", "wechat")

_GENDER_ALIASES = {
    "male": "male",
    "m": "male",
    "男": "male",
    "female": "female",
    "f": "female",
    "女": "female",
}


class FriendRecord(BaseModel):
    """One person extracted from free text; immutable once validated."""

    name: str = Field(min_length=1, description="Full name or the form of address used in the text")
    gender: Literal["male", "female"] = Field(description="Gender, either male or female")
    birth_date: date = Field(description="Birth date as YYYY-MM-DD; estimate from the stated age when no exact date is given")
    company: str | None = Field(default=None, description="Company name, null when not mentioned")
    title: str | None = Field(default=None, description="Job title, null when not mentioned")
    phone: str | None = Field(default=None, description="Mobile phone number, null when not mentioned")
    wechat: str | None = Field(default=None, min_length=1, description="WeChat ID, null when not mentioned")

    model_config = ConfigDict(extra="ignore", frozen=True)

    @field_validator("gender", mode="before")
    @classmethod
    def _canonical_gender(cls, value: Any) -> Any:
        if isinstance(value, str):
            return _GENDER_ALIASES.get(value.strip().lower(), value)
        return value

    @field_validator("company", "title", "phone", "wechat", mode="before")
    @classmethod
    def _numbers_as_text(cls, value: Any) -> Any:
        # Models sometimes emit phone numbers as JSON numbers
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("wechat")
    @classmethod
    def _wechat_not_blank(cls, value: str | None) -> str | None:
        if value is not None and not value.strip():
            raise ValueError("wechat must be non-empty when present")
        return value

    def as_row(self) -> tuple:
        """Values in FRIEND_COLUMNS order; None stays None (SQL NULL)."""
        return (
            self.name,
            self.gender,
            self.birth_date.isoformat(),
            self.company,
            self.title,
            self.phone,
            self.wechat,
        )
