from .charts import (
    create_institution_map,
    create_type_chart,
    create_carnegie_chart,
    create_enrollment_chart,
    create_budget_chart,
    create_wi_courses_chart,
    create_comparison_chart,
)

__all__ = [
    "create_institution_map",
    "create_type_chart",
    "create_carnegie_chart",
    "create_enrollment_chart",
    "create_budget_chart",
    "create_wi_courses_chart",
    "create_comparison_chart",
]
