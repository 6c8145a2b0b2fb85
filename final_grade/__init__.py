from final_grade.solver import (
    CalculationResult,
    Interpretation,
    has_inputs,
    headline_percentage,
    is_warning,
    solve,
)

__all__ = [
    "CalculationResult",
    "Interpretation",
    "has_inputs",
    "headline_percentage",
    "is_warning",
    "solve",
]
