from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List

REQUIRED_STR_FIELDS = ["title", "company_handle"]
UPDATABLE_FIELDS = ["title", "salary", "equity"]


def _is_non_empty_str(v: Any) -> bool:
    return isinstance(v, str) and v.strip() != ""


def _as_decimal(v: Any):
    if isinstance(v, bool):
        return None
    try:
        return Decimal(str(v))
    except (InvalidOperation, ValueError):
        return None


def validate_job(data: Dict[str, Any], partial: bool = False) -> List[str]:
    """
    Returns a list of validation error messages. Empty list means valid.

    With partial=True the payload is checked as an update: nothing is
    required, and only title, salary and equity may appear.
    """
    errors: List[str] = []

    if partial:
        for f in data:
            if f not in UPDATABLE_FIELDS:
                errors.append(f"Field '{f}' cannot be updated")
        if not data:
            errors.append("No data")
    else:
        for f in REQUIRED_STR_FIELDS:
            if f not in data:
                errors.append(f"Missing required field: {f}")

    for f in REQUIRED_STR_FIELDS:
        if f in data and not _is_non_empty_str(data[f]):
            errors.append(f"Field '{f}' must be a non-empty string")

    salary = data.get("salary")
    if salary is not None:
        if isinstance(salary, bool) or not isinstance(salary, int):
            errors.append("Field 'salary' must be an integer")
        elif salary < 0:
            errors.append("Field 'salary' must be >= 0")

    equity = data.get("equity")
    if equity is not None:
        value = _as_decimal(equity)
        if value is None or not value.is_finite():
            errors.append("Field 'equity' must be a number")
        elif not (0 <= value <= 1):
            errors.append("Field 'equity' must be between 0 and 1")

    return errors
