"""
Tests for schema validation.
"""

import pytest
from stockmatch.schema import InvalidTargetSpec, validate_order, validate_target


class TestValidateTarget:
    """Match request validation."""

    def test_valid_target(self, range_rover_payload):
        assert validate_target(range_rover_payload) == []

    def test_features_only(self):
        assert validate_target({"features": {"model": "Range Rover"}}) == []

    def test_options_only(self):
        assert validate_target({"options": {"pano_roof": "Yes"}}) == []

    def test_all_values_empty_is_rejected(self):
        """Blank form fields do not count as a selection."""
        data = {
            "features": {"model": "", "paint": "", "fuel_type": None},
            "options": {"pano_roof": ""},
        }
        errors = validate_target(data)
        assert errors == ["Please provide at least one feature or option"]

    def test_missing_sections_are_rejected(self):
        assert validate_target({}) != []

    def test_whitespace_value_counts_as_selected(self):
        """Values are compared verbatim, so a lone space is still a value."""
        assert validate_target({"options": {"pano_roof": " "}}) == []

    def test_non_object_body(self):
        assert validate_target(["model", "Range Rover"]) == ["Target specification must be an object"]

    def test_section_must_be_object(self):
        errors = validate_target({"features": "Range Rover"})
        assert any("features" in err for err in errors)

    def test_non_string_value(self):
        errors = validate_target({"options": {"pano_roof": True}})
        assert any("pano_roof" in err for err in errors)

    def test_invalid_target_spec_carries_errors(self):
        exc = InvalidTargetSpec(["first", "second"])
        assert exc.errors == ["first", "second"]
        assert "first" in str(exc)
        assert isinstance(exc, ValueError)


class TestValidateOrder:
    """Order/stock record validation."""

    @pytest.fixture
    def valid_order(self):
        return {
            "order_number": "ORD-100",
            "customer_name": "Jane Doe",
            "features": {"model": "Range Rover", "paint": "Fuji White"},
            "options": {"pano_roof": "Yes"},
        }

    def test_valid_order(self, valid_order):
        assert validate_order(valid_order) == []

    def test_missing_order_number(self, valid_order):
        del valid_order["order_number"]
        errors = validate_order(valid_order)
        assert any("order_number" in err for err in errors)

    def test_blank_order_number(self, valid_order):
        valid_order["order_number"] = "  "
        assert validate_order(valid_order) != []

    def test_missing_features(self, valid_order):
        del valid_order["features"]
        errors = validate_order(valid_order)
        assert "Missing required field: features" in errors

    def test_unknown_feature_type(self, valid_order):
        valid_order["features"]["wheel_size"] = "22"
        errors = validate_order(valid_order)
        assert any("wheel_size" in err for err in errors)

    def test_invalid_type_and_status(self, valid_order):
        valid_order["type"] = "lease"
        valid_order["status"] = "lost"
        errors = validate_order(valid_order)
        assert len(errors) == 2

    def test_stock_record(self, valid_order):
        valid_order.update({"type": "stock", "status": "available", "customer_name": None})
        assert validate_order(valid_order) == []
