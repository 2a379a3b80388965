"""Unit tests for text and location normalization helpers."""

import pytest

from plant_survey.services.location import (
    location_variations,
    loosely_equal,
    normalize_text,
    same_location,
)


class TestNormalizeText:
    """Tests for normalize_text."""

    def test_folds_case_accents_and_whitespace(self):
        assert normalize_text("  São   Paulo ") == "sao paulo"

    def test_cedilla(self):
        assert normalize_text("Açores") == "acores"


class TestLocationVariations:
    """Tests for alias expansion."""

    def test_state_abbreviation_expands(self):
        variations = location_variations("SP")
        assert {"sp", "sao paulo"} <= variations

    def test_unknown_location_is_itself(self):
        assert location_variations("Springfield") == frozenset({"springfield"})


class TestSameLocation:
    """Tests for same_location."""

    @pytest.mark.parametrize("left,right", [
        ("São Paulo", "sao paulo"),
        ("SP", "São Paulo"),
        ("Lisbon", "Lisboa"),
        ("Brasília", "DF"),
        ("Porto Alegre", "POA"),
    ])
    def test_equivalent_spellings(self, left, right):
        assert same_location(left, right) is True

    @pytest.mark.parametrize("left,right", [
        ("São Paulo", "Rio de Janeiro"),
        ("SP", "RJ"),
        ("Porto", "Porto Alegre"),
    ])
    def test_different_places(self, left, right):
        assert same_location(left, right) is False

    def test_missing_values_never_match(self):
        assert same_location(None, "SP") is False
        assert same_location("SP", "") is False


def test_loosely_equal():
    assert loosely_equal("Jardim Vertical", "jardim  vertical") is True
    assert loosely_equal("Jardim", "Jardins") is False
