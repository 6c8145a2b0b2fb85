import logging
from dataclasses import dataclass, field
from decimal import Context, Decimal, ROUND_HALF_UP
from enum import Enum
from typing import List, Optional

import numpy as np

logger = logging.getLogger(__name__)

PROMPT = (
    "Enter your current grade, desired grade, and the final exam weight "
    "to see the required score."
)

CURRENT_RANGE_ERROR = "Current grade must be between 0 and 100."
DESIRED_RANGE_ERROR = "Desired grade must be between 0 and 100."
WEIGHT_RANGE_ERROR = "Final exam weight must be between 0 (exclusive) and 100 (inclusive)."


class Interpretation(Enum):
    SECURED = "You already secured your desired grade, so any score on the final will do."
    UNREACHABLE = "It is not possible to reach your desired grade with the given final exam weight."
    REQUIRED = "You need at least this score on the final exam."

    @property
    def message(self) -> str:
        return self.value


@dataclass(frozen=True)
class CalculationResult:
    ready: bool
    errors: List[str] = field(default_factory=list)
    required_final: Optional[float] = None
    required_final_rounded: Optional[float] = None
    interpretation: Optional[Interpretation] = None
    steps: List[str] = field(default_factory=list)

    @property
    def status(self) -> str:
        if not self.ready:
            return "not ready"
        if self.errors:
            return "invalid"
        return "computed"

    @property
    def is_computed(self) -> bool:
        return self.status == "computed"


# ------------------------
# Parsing & rounding
# ------------------------
# enough digits to quantize any finite float to 0.01
_WIDE = Context(prec=400)


def round_2dp_half_up(x: float) -> float:
    if not np.isfinite(x):
        return x
    return float(Decimal(str(x)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP, context=_WIDE))


def parse_percentage(text) -> Optional[float]:
    """
    Locale-tolerant parse of a percentage field.

    "86,5" and "86.5" both give 86.5. Empty, unparseable and non-finite
    input ("", None, "abc", "inf") all give None.
    """
    if text is None:
        return None
    text = str(text).strip()
    if text == "":
        return None
    # float() takes "8_0" as 80, a number field should not
    if "_" in text:
        return None
    try:
        value = float(text.replace(",", ".", 1))
    except ValueError:
        return None
    if not np.isfinite(value):
        return None
    return value


def format_number(x: float) -> str:
    # 80.0 -> "80", 0.2 -> "0.2", 1e-05 -> "0.00001"
    x = float(x)
    if not np.isfinite(x):
        return repr(x)
    if x.is_integer() and abs(x) < 1e21:
        return str(int(x))
    text = repr(x)
    if "e" in text and 1e-6 <= abs(x) < 1e21:
        text = format(Decimal(text), "f")
    return text


# ------------------------
# Core logic
# ------------------------
def validate_inputs(current: float, desired: float, weight: float) -> List[str]:
    errors = []
    if current < 0 or current > 100:
        errors.append(CURRENT_RANGE_ERROR)
    if desired < 0 or desired > 100:
        errors.append(DESIRED_RANGE_ERROR)
    if weight <= 0 or weight > 100:
        errors.append(WEIGHT_RANGE_ERROR)
    return errors


def required_final_score(current: float, desired: float, weight: float) -> float:
    """
    desired = current * (1 - w) + final * w
    => final = (desired - current * (1 - w)) / w

    weight is a percentage in (0, 100].
    """
    w = weight / 100
    non_final_weight = 1 - w
    # a subnormal weight can underflow w to 0.0
    with np.errstate(divide="ignore", invalid="ignore"):
        return float(np.float64(desired - current * non_final_weight) / np.float64(w))


def interpret(required_rounded: float) -> Interpretation:
    if required_rounded <= 0:
        return Interpretation.SECURED
    elif required_rounded > 100:
        return Interpretation.UNREACHABLE
    return Interpretation.REQUIRED


def derivation_steps(current: float,
                     desired: float,
                     weight: float,
                     required_rounded: float) -> List[str]:
    w = weight / 100
    non_final_weight = 1 - w
    c, d = format_number(current), format_number(desired)
    nfw = format_number(non_final_weight)
    return [
        "Formula: desired = current × (1 − w) + final × w",
        "Rearrange: final = (desired − current × (1 − w)) ÷ w",
        f"Inputs: current = {c}%, desired = {d}%, w = {format_number(weight)}% (= {format_number(w)})",
        f"Compute: (1 − w) = {nfw}",
        f"final = ({d} − {c} × {nfw}) ÷ {format_number(w)}",
        f"final ≈ {format_number(required_rounded)}%",
    ]


def solve(current_text, desired_text, weight_text) -> CalculationResult:
    current = parse_percentage(current_text)
    desired = parse_percentage(desired_text)
    weight = parse_percentage(weight_text)

    if current is None or desired is None or weight is None:
        logger.debug("Inputs incomplete, nothing to compute")
        return CalculationResult(ready=False)

    errors = validate_inputs(current, desired, weight)
    if errors:
        logger.debug("Rejected inputs (%s, %s, %s): %s", current, desired, weight, errors)
        return CalculationResult(ready=True, errors=errors)

    required = required_final_score(current, desired, weight)
    required_rounded = round_2dp_half_up(required)
    interpretation = interpret(required_rounded)

    logger.debug(
        "Required final for (%s, %s, %s) is %s (%s)",
        current, desired, weight, required_rounded, interpretation.name,
    )

    return CalculationResult(
        ready=True,
        errors=[],
        required_final=required,
        required_final_rounded=required_rounded,
        interpretation=interpretation,
        steps=derivation_steps(current, desired, weight, required_rounded),
    )


# ------------------------
# Display helpers
# ------------------------
def has_inputs(*fields) -> bool:
    return any(f not in (None, "") for f in fields)


def headline_percentage(result: CalculationResult) -> str:
    # negative requirements show as 0.00%, the result keeps the signed value
    if not result.is_computed:
        return ""
    return f"{max(0.0, result.required_final_rounded):.2f}%"


def is_warning(result: CalculationResult) -> bool:
    return result.is_computed and result.required_final > 100
