from __future__ import annotations

"""Schema constants and Pydantic models for the per-phrase score table."""

from typing import Optional

from pydantic import BaseModel, Field, ValidationInfo, field_validator

DTYPES = {
    "phrase": "string",
    "description": "string",
    "notes": "UInt8",
    "tries": "UInt16",
    "right": "UInt16",
    "wrong": "UInt16",
    "needs_practice": "boolean",
    "last_start_note": "UInt8",
}


class PhraseScoreRow(BaseModel):
    phrase: str
    description: str
    notes: int = Field(ge=2, le=255)
    tries: int = Field(ge=1, le=65535)
    right: int = Field(ge=0, le=65535)
    wrong: int = Field(ge=0, le=65535)
    needs_practice: bool
    last_start_note: Optional[int] = Field(default=None, ge=0, le=127)

    @field_validator("right")
    @classmethod
    def _right_le_tries(cls, v: int, info: ValidationInfo) -> int:
        tries = int(info.data.get("tries", 0))
        if v > tries:
            raise ValueError("right must be <= tries")
        return v

    @field_validator("wrong")
    @classmethod
    def _counts_add_up(cls, v: int, info: ValidationInfo) -> int:
        if int(info.data.get("right", 0)) + v != int(info.data.get("tries", 0)):
            raise ValueError("right + wrong must equal tries")
        return v
