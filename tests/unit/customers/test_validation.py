"""Unit tests for customer field validation.

Covers:
- Blank / missing names classified as malformed.
- Future date of birth classified as unprocessable.
- Unprocessable wins when both kinds are present.
"""

from __future__ import annotations

from datetime import date

import pytest
from freezegun import freeze_time

from modules.customers.dtos import CustomerInputDTO
from modules.customers.validation import ViolationKind, validate_customer

pytestmark = pytest.mark.unit


class TestValidCandidates:
    def test_names_only_is_valid(self):
        result = validate_customer(CustomerInputDTO(first_name="Andy", last_name="Steale"))
        assert result.is_valid
        assert result.kind is None
        assert result.messages() == []

    @freeze_time("2024-06-01")
    def test_date_of_birth_today_is_valid(self):
        dto = CustomerInputDTO(
            first_name="Gary", last_name="Steale", date_of_birth=date(2024, 6, 1)
        )
        assert validate_customer(dto).is_valid

    def test_explicit_today_overrides_clock(self):
        dto = CustomerInputDTO(
            first_name="Gary", last_name="Steale", date_of_birth=date(2030, 1, 1)
        )
        assert validate_customer(dto, today=date(2030, 1, 1)).is_valid


class TestMalformed:
    @pytest.mark.parametrize("first_name", [None, "", "   "])
    def test_blank_first_name(self, first_name):
        result = validate_customer(
            CustomerInputDTO(first_name=first_name, last_name="Steale")
        )
        assert not result.is_valid
        assert result.kind is ViolationKind.MALFORMED
        assert result.messages() == ["first_name: must not be blank"]

    def test_both_names_missing_reports_both(self):
        result = validate_customer(CustomerInputDTO())
        assert [v.field for v in result.violations] == ["first_name", "last_name"]


class TestUnprocessable:
    @freeze_time("2024-06-01")
    def test_future_date_of_birth(self):
        dto = CustomerInputDTO(
            first_name="Gary", last_name="Steale", date_of_birth=date(2024, 6, 2)
        )
        result = validate_customer(dto)
        assert result.kind is ViolationKind.UNPROCESSABLE
        assert result.messages() == ["date_of_birth: must not be in the future"]

    @freeze_time("2024-06-01")
    def test_future_date_beats_blank_name(self):
        dto = CustomerInputDTO(
            first_name=" ", last_name="Steale", date_of_birth=date(2024, 9, 9)
        )
        result = validate_customer(dto)
        assert len(result.violations) == 2
        assert result.kind is ViolationKind.UNPROCESSABLE
