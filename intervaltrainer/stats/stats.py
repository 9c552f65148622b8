from __future__ import annotations

"""Score table helpers: pandas frame and text summary."""

from typing import List

import pandas as pd

from .schema import DTYPES, PhraseScoreRow
from .score_keeper import ScoreKeeper


def _empty_df() -> pd.DataFrame:
    return pd.DataFrame({k: pd.Series(dtype=v) for k, v in DTYPES.items()})


def score_frame(rows: List[PhraseScoreRow]) -> pd.DataFrame:
    """Validate score rows and return a DataFrame with fixed dtypes plus accuracy.

    - Re-validates plain dicts through Pydantic.
    - Adds 'acc' = right / tries as float32.
    """
    if not rows:
        df = _empty_df()
        df["acc"] = pd.Series(dtype="float32")
        return df
    parsed = [r if isinstance(r, PhraseScoreRow) else PhraseScoreRow.model_validate(r) for r in rows]
    df = pd.DataFrame([r.model_dump() for r in parsed])
    for col, dt in DTYPES.items():
        df[col] = df[col].astype(dt)
    df = df[list(DTYPES.keys())]
    df["acc"] = (df["right"].astype("float32") / df["tries"].astype("float32")).astype("float32")
    return df


def format_summary(keeper: ScoreKeeper) -> str:
    """Return a human-readable summary of the score table."""
    lines = [keeper.score_text() or "No phrases answered yet."]
    for row in keeper.score_rows():
        flag = " *" if row.needs_practice else ""
        lines.append(f"{row.description}: {row.right}/{row.tries}{flag}")
    return "\n".join(lines)
