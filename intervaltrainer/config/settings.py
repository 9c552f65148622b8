from __future__ import annotations

"""Question generation hyperparameters using Pydantic."""

from pydantic import BaseModel, Field


class ChooserSettings(BaseModel):
    """Bounds and tuning for question generation.

    - min_choices: candidate pool size to reach before sampling
    - max_question_tries: rounds before a question is declared unavailable
    - max_fresh_tries: fresh phrases drawn per round while topping up the pool
    - max_search_nodes: enumeration budget before falling back to a random walk
    - practice_window: a phrase needs practice until its last N attempts were right
    """

    min_choices: int = Field(3, ge=1)
    max_question_tries: int = Field(100, ge=1)
    max_fresh_tries: int = Field(100, ge=1)
    max_search_nodes: int = Field(50000, ge=1)
    practice_window: int = Field(3, ge=1)
