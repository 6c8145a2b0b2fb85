import logging

import numpy as np
import pandas as pd

from final_grade.solver import solve

logger = logging.getLogger(__name__)

# ------------------------
# CSV helpers (UI-side)
# ------------------------
WEIGHT_ALIASES = ("final weight", "final_weight", "final exam weight")


def _normalise_cols(df: pd.DataFrame) -> pd.DataFrame:
    df = df.copy()
    df.columns = [str(c).strip().lower() for c in df.columns]
    # allow "final weight" and friends
    for alias in WEIGHT_ALIASES:
        if alias in df.columns and "weight" not in df.columns:
            df = df.rename(columns={alias: "weight"})
    return df


def read_csv_upload(uploaded_file) -> pd.DataFrame:
    # keep cells as text so "86,5" reaches the solver untouched
    df = pd.read_csv(uploaded_file, dtype=str, keep_default_na=False)
    return _normalise_cols(df)


def validate_scenarios_csv(df: pd.DataFrame) -> pd.DataFrame:
    required = {"current", "desired", "weight"}
    missing = required - set(df.columns)
    if missing:
        raise ValueError(f"Missing columns: {sorted(missing)}. Expected: Current, Desired, Weight.")
    out = df[["current", "desired", "weight"]].copy()
    out = out.rename(columns={"current": "Current", "desired": "Desired", "weight": "Weight"})
    return out


def solve_frame(df: pd.DataFrame) -> pd.DataFrame:
    """
    Run the solver on every (Current, Desired, Weight) row.

    Adds Status, Required (rounded, NaN unless computed), Interpretation
    and Errors columns. Rows never raise; bad rows come back as
    "not ready" or "invalid".
    """
    statuses, required, interpretations, errors = [], [], [], []
    for _, row in df.iterrows():
        result = solve(row.get("Current"), row.get("Desired"), row.get("Weight"))
        statuses.append(result.status)
        if result.is_computed:
            required.append(result.required_final_rounded)
            interpretations.append(result.interpretation.message)
        else:
            required.append(np.nan)
            interpretations.append("")
        errors.append(" ".join(result.errors))

    logger.info("Solved %d uploaded rows", len(statuses))

    out = df.copy()
    out["Status"] = statuses
    out["Required"] = np.array(required, dtype=float)
    out["Interpretation"] = interpretations
    out["Errors"] = errors
    return out
