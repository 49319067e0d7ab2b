"""Tests for field checks, rating and partial-update rules."""
from datetime import datetime

import pytest

from space_fleet_api.app.core.exceptions import ValidationError
from space_fleet_api.app.schemas.ship import ShipPayload, ShipType
from space_fleet_api.app.services.ship_rules import (
    FIELD_RULES,
    apply_update,
    compute_rating,
    is_valid_crew_size,
    is_valid_prod_date,
    is_valid_speed,
    is_valid_text,
    round_half_up,
    validate,
)


def _full_payload(**overrides):
    fields = dict(
        name="Eagle",
        planet="Earth",
        ship_type=ShipType.TRANSPORT,
        prod_date=datetime(3000, 6, 15),
        speed=0.5,
        crew_size=50,
    )
    fields.update(overrides)
    return ShipPayload(**fields)


# ---------------------------------------------------------------------------
# Individual field checks
# ---------------------------------------------------------------------------

class TestFieldChecks:

    @pytest.mark.parametrize("value,expected", [
        ("E", True),
        ("a" * 50, True),
        ("a" * 51, False),
        ("", False),
        (None, False),
    ])
    def test_text(self, value, expected):
        assert is_valid_text(value) is expected

    @pytest.mark.parametrize("value,expected", [
        (datetime(2800, 1, 1, 12), True),
        (datetime(3019, 12, 31, 12), True),
        (datetime(2799, 12, 31, 12), False),
        (datetime(3020, 1, 1, 12), False),
        (None, False),
    ])
    def test_prod_date(self, value, expected):
        assert is_valid_prod_date(value) is expected

    @pytest.mark.parametrize("value,expected", [
        (0.01, True),
        (0.99, True),
        (0.0, False),
        (0.009, False),
        (1.0, False),
        (None, False),
    ])
    def test_speed(self, value, expected):
        assert is_valid_speed(value) is expected

    @pytest.mark.parametrize("value,expected", [
        (1, True),
        (9999, True),
        (0, False),
        (10000, False),
        (None, False),
    ])
    def test_crew_size(self, value, expected):
        assert is_valid_crew_size(value) is expected


class TestValidate:

    def test_complete_payload_is_valid(self):
        assert validate(_full_payload()) is True

    def test_is_used_is_optional(self):
        assert validate(_full_payload(is_used=None)) is True

    @pytest.mark.parametrize("field", ["name", "planet", "ship_type", "prod_date", "speed", "crew_size"])
    def test_missing_required_field(self, field):
        assert validate(_full_payload(**{field: None})) is False

    def test_out_of_range_field(self):
        assert validate(_full_payload(crew_size=10000)) is False


# ---------------------------------------------------------------------------
# Rounding and rating
# ---------------------------------------------------------------------------

class TestRounding:

    def test_halves_round_up(self):
        assert round_half_up(0.125) == 0.13

    def test_truncates_extra_digits(self):
        assert round_half_up(0.123) == 0.12

    @pytest.mark.parametrize("value", [0.01, 0.125, 0.333333, 0.5, 0.987, 0.99])
    def test_idempotent(self, value):
        once = round_half_up(value)
        assert round_half_up(once) == once


class TestComputeRating:

    def test_reference_ship(self, make_ship):
        # 80 * 0.5 * 1.0 / (3019 - 3000 + 1) = 2.0
        assert compute_rating(make_ship()) == 2.0

    def test_used_ship_is_halved(self, make_ship):
        assert compute_rating(make_ship(is_used=True)) == 1.0

    def test_current_year_has_unit_denominator(self, make_ship):
        assert compute_rating(make_ship(prod_date=datetime(3019, 6, 15))) == 40.0

    def test_rounded_to_two_decimals(self, make_ship):
        # 80 * 0.33 / 220 = 0.12
        assert compute_rating(make_ship(speed=0.33, prod_date=datetime(2800, 6, 15))) == 0.12

    def test_never_negative(self, make_ship):
        ship = make_ship(speed=0.01, is_used=True, prod_date=datetime(2800, 6, 15))
        assert compute_rating(ship) >= 0


# ---------------------------------------------------------------------------
# Partial updates
# ---------------------------------------------------------------------------

class TestApplyUpdate:

    def test_rules_run_in_field_order(self):
        assert [rule.field for rule in FIELD_RULES] == [
            "name", "planet", "ship_type", "prod_date", "is_used", "speed", "crew_size",
        ]

    def test_omitted_fields_are_unchanged(self, make_ship):
        ship = make_ship()
        updated = apply_update(ship, ShipPayload(name="Falcon"))
        assert updated.name == "Falcon"
        assert updated.model_dump(exclude={"name"}) == ship.model_dump(exclude={"name"})

    def test_empty_payload_keeps_every_field(self, make_ship):
        ship = make_ship()
        assert apply_update(ship, ShipPayload()) == ship

    def test_rating_follows_speed(self, make_ship):
        updated = apply_update(make_ship(), ShipPayload(speed=0.25))
        assert updated.speed == 0.25
        assert updated.rating == 1.0

    def test_rating_follows_is_used(self, make_ship):
        updated = apply_update(make_ship(), ShipPayload(is_used=True))
        assert updated.is_used is True
        assert updated.rating == 1.0

    def test_rating_follows_prod_date(self, make_ship):
        updated = apply_update(make_ship(), ShipPayload(prod_date=datetime(3019, 3, 1)))
        assert updated.rating == 40.0

    def test_speed_is_rounded(self, make_ship):
        assert apply_update(make_ship(), ShipPayload(speed=0.125)).speed == 0.13

    def test_ship_type_is_copied_without_checks(self, make_ship):
        updated = apply_update(make_ship(), ShipPayload(ship_type=ShipType.MILITARY))
        assert updated.ship_type is ShipType.MILITARY

    @pytest.mark.parametrize("payload", [
        ShipPayload(name=""),
        ShipPayload(planet="p" * 51),
        ShipPayload(prod_date=datetime(3020, 6, 15)),
        ShipPayload(speed=0.999),
        ShipPayload(crew_size=0),
    ])
    def test_invalid_field_is_rejected(self, make_ship, payload):
        with pytest.raises(ValidationError):
            apply_update(make_ship(), payload)

    def test_failed_update_leaves_ship_untouched(self, make_ship):
        ship = make_ship()
        before = ship.model_copy()
        with pytest.raises(ValidationError):
            apply_update(ship, ShipPayload(name="Falcon", crew_size=0))
        assert ship == before
