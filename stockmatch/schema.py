from typing import Any, Dict, List

from .models import FEATURE_KEYS, is_selected

ORDER_TYPES = ("order", "stock")
ORDER_STATUSES = ("unfulfilled", "available", "allocated", "fulfilled")


class InvalidTargetSpec(ValueError):
    """Raised when a match request carries no usable target values."""

    def __init__(self, errors: List[str]):
        self.errors = errors
        super().__init__("; ".join(errors))


def _is_non_empty_str(v: Any) -> bool:
    return isinstance(v, str) and v.strip() != ""


def _check_attributes(data: Dict[str, Any], section: str) -> List[str]:
    errors: List[str] = []
    values = data.get(section)
    if values is None:
        return errors
    if not isinstance(values, dict):
        return [f"Field '{section}' must be an object of name/value pairs"]
    for key, value in values.items():
        if not _is_non_empty_str(key):
            errors.append(f"Field '{section}' has an empty key")
        elif value is not None and not isinstance(value, str):
            errors.append(f"{section[:-1].capitalize()} '{key}' must be a string or null")
    return errors


def validate_target(data: Any) -> List[str]:
    """
    Returns a list of validation error messages for a match request body.
    Empty list means valid.
    """
    if not isinstance(data, dict):
        return ["Target specification must be an object"]

    errors = _check_attributes(data, "features") + _check_attributes(data, "options")
    if errors:
        return errors

    features = data.get("features") or {}
    options = data.get("options") or {}
    has_features = any(is_selected(v) for v in features.values())
    has_options = any(is_selected(v) for v in options.values())
    if not has_features and not has_options:
        errors.append("Please provide at least one feature or option")
    return errors


def validate_order(data: Any) -> List[str]:
    """
    Returns a list of validation error messages for an order/stock record.
    Empty list means valid.
    """
    if not isinstance(data, dict):
        return ["Order must be an object"]

    errors: List[str] = []

    if "order_number" not in data:
        errors.append("Missing required field: order_number")
    elif not _is_non_empty_str(data["order_number"]):
        errors.append("Field 'order_number' must be a non-empty string")

    if "features" not in data:
        errors.append("Missing required field: features")

    errors.extend(_check_attributes(data, "features"))
    errors.extend(_check_attributes(data, "options"))

    features = data.get("features")
    if isinstance(features, dict):
        unknown = [k for k in features if k not in FEATURE_KEYS]
        if unknown:
            errors.append(f"Unknown feature type(s): {', '.join(sorted(unknown))}")

    if "customer_name" in data and data["customer_name"] is not None and not isinstance(data["customer_name"], str):
        errors.append("Field 'customer_name' must be a string if provided")

    if data.get("type") is not None and data["type"] not in ORDER_TYPES:
        errors.append(f"Field 'type' must be one of: {', '.join(ORDER_TYPES)}")

    if data.get("status") is not None and data["status"] not in ORDER_STATUSES:
        errors.append(f"Field 'status' must be one of: {', '.join(ORDER_STATUSES)}")

    return errors
