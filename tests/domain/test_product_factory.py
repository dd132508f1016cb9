"""Unit tests for the Product entity, its factory and revisions."""

import dataclasses
import math
from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from catalog.domain.model.product import (
    CATEGORY_NOT_STRING,
    DESCRIPTION_NOT_STRING,
    ID_IMMUTABLE,
    ID_REQUIRED,
    NAME_REQUIRED,
    PRICE_REQUIRED,
    ProductCreated,
    ProductRejected,
    create_product,
    revise_product,
)
from tests.fakes import FIXED_NOW, fixed_clock, make_product


def _errors(props) -> tuple:
    result = create_product(props, clock=fixed_clock)
    assert isinstance(result, ProductRejected)
    assert result.success is False
    return result.errors


# ── Happy path ───────────────────────────────────────────────────────────────


class TestCreateProduct:

    def test_minimal_product(self):
        result = create_product({"id": "p1", "name": "Widget", "price": 9.99}, clock=fixed_clock)

        assert isinstance(result, ProductCreated)
        assert result.success is True
        product = result.product
        assert product.id == "p1"
        assert product.name == "Widget"
        assert product.price == Decimal("9.99")
        assert product.description is None
        assert product.category is None
        assert product.created_at == FIXED_NOW
        assert product.updated_at == FIXED_NOW

    def test_optional_fields_kept(self):
        product = make_product(description="Blue", category="Tools")
        assert product.description == "Blue"
        assert product.category == "Tools"

    def test_empty_description_accepted(self):
        # emptiness is a storage concern, not a domain rule
        assert make_product(description="").description == ""

    def test_zero_price_accepted(self):
        assert make_product(price=0).price == Decimal("0")

    def test_decimal_and_int_prices(self):
        assert make_product(price=Decimal("12.50")).price == Decimal("12.50")
        assert make_product(price=15).price == Decimal("15")

    def test_default_clock_is_current_utc_time(self):
        before = datetime.now(timezone.utc)
        result = create_product({"id": "p1", "name": "Widget", "price": 1})
        after = datetime.now(timezone.utc)

        assert before <= result.product.created_at <= after
        assert result.product.updated_at == result.product.created_at

    def test_same_input_same_product(self):
        props = {"id": "p1", "name": "Widget", "price": 9.99, "category": "Tools"}
        first = create_product(props, clock=fixed_clock)
        second = create_product(props, clock=fixed_clock)
        assert first.product == second.product


# ── Validation ───────────────────────────────────────────────────────────────


class TestValidation:

    def test_empty_id_and_negative_price(self):
        assert _errors({"id": "", "name": "Widget", "price": -1}) == (ID_REQUIRED, PRICE_REQUIRED)

    def test_empty_input_reports_every_required_field(self):
        assert _errors({}) == (ID_REQUIRED, NAME_REQUIRED, PRICE_REQUIRED)

    def test_all_rules_collected_in_order(self):
        props = {"id": None, "name": 3, "price": "free", "description": 1, "category": []}
        assert _errors(props) == (
            ID_REQUIRED,
            NAME_REQUIRED,
            PRICE_REQUIRED,
            DESCRIPTION_NOT_STRING,
            CATEGORY_NOT_STRING,
        )

    @pytest.mark.parametrize("blank", ["", "   ", "\t\n"])
    def test_whitespace_id_rejected(self, blank):
        assert _errors({"id": blank, "name": "Widget", "price": 1}) == (ID_REQUIRED,)

    @pytest.mark.parametrize("blank", ["", "   ", "\t\n"])
    def test_whitespace_name_rejected(self, blank):
        assert _errors({"id": "p1", "name": blank, "price": 1}) == (NAME_REQUIRED,)

    @pytest.mark.parametrize(
        "price",
        [
            -1,
            -0.01,
            math.nan,
            math.inf,
            -math.inf,
            Decimal("NaN"),
            Decimal("Infinity"),
            Decimal("-5"),
            "9.99",
            None,
            True,
        ],
    )
    def test_bad_price_rejected(self, price):
        assert _errors({"id": "p1", "name": "Widget", "price": price}) == (PRICE_REQUIRED,)

    def test_non_string_description_rejected(self):
        assert _errors({"id": "p1", "name": "W", "price": 1, "description": 42}) == (
            DESCRIPTION_NOT_STRING,
        )

    def test_non_string_category_rejected(self):
        assert _errors({"id": "p1", "name": "W", "price": 1, "category": {"a": 1}}) == (
            CATEGORY_NOT_STRING,
        )


# ── Timestamps ───────────────────────────────────────────────────────────────


class TestTimestamps:

    def test_supplied_timestamps_kept(self):
        created = datetime(2023, 5, 1, tzinfo=timezone.utc)
        updated = datetime(2023, 6, 1, tzinfo=timezone.utc)
        product = make_product(created_at=created, updated_at=updated)
        assert product.created_at == created
        assert product.updated_at == updated

    def test_updated_at_defaults_to_supplied_created_at(self):
        created = datetime(2023, 5, 1, tzinfo=timezone.utc)
        product = make_product(created_at=created)
        assert product.updated_at == created

    def test_updated_at_without_created_at_is_independent(self):
        updated = datetime(2023, 6, 1, tzinfo=timezone.utc)
        product = make_product(updated_at=updated)
        assert product.created_at == FIXED_NOW
        assert product.updated_at == updated

    def test_invalid_timestamps_fall_back_to_defaults(self):
        product = make_product(created_at="yesterday", updated_at=12345)
        assert product.created_at == FIXED_NOW
        assert product.updated_at == FIXED_NOW


# ── Immutability ─────────────────────────────────────────────────────────────


class TestImmutability:

    def test_fields_cannot_be_assigned(self):
        product = make_product()
        with pytest.raises(dataclasses.FrozenInstanceError):
            product.price = Decimal("1")

    def test_structural_equality(self):
        assert make_product() == make_product()
        assert make_product() != make_product(name="Gadget")


# ── Revisions ────────────────────────────────────────────────────────────────


class TestReviseProduct:

    def test_revision_is_a_new_product(self):
        original = make_product()
        later = FIXED_NOW + timedelta(hours=1)

        result = revise_product(original, {"price": 12}, clock=lambda: later)

        assert isinstance(result, ProductCreated)
        assert result.product.price == Decimal("12")
        assert result.product.created_at == original.created_at
        assert result.product.updated_at == later
        assert original.price == Decimal("9.99")

    def test_revision_revalidates(self):
        result = revise_product(make_product(), {"name": " ", "price": -3}, clock=fixed_clock)
        assert isinstance(result, ProductRejected)
        assert result.errors == (NAME_REQUIRED, PRICE_REQUIRED)

    def test_revision_can_clear_optional_field(self):
        result = revise_product(make_product(category="Tools"), {"category": None}, clock=fixed_clock)
        assert result.product.category is None

    def test_id_cannot_change(self):
        result = revise_product(make_product(), {"id": "p2"}, clock=fixed_clock)
        assert isinstance(result, ProductRejected)
        assert result.errors == (ID_IMMUTABLE,)

    def test_explicit_none_updated_at_moves_forward(self):
        original = make_product()
        later = FIXED_NOW + timedelta(hours=2)

        result = revise_product(original, {"updated_at": None}, clock=lambda: later)

        assert result.product.updated_at == later
        assert result.product.created_at == original.created_at

    def test_unusable_created_at_keeps_original(self):
        original = make_product()
        later = FIXED_NOW + timedelta(hours=2)

        result = revise_product(original, {"created_at": "soon"}, clock=lambda: later)

        assert result.product.created_at == original.created_at
        assert result.product.updated_at == later
