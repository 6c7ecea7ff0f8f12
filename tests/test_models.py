from datetime import datetime

from scicalc.models import CalculationEntity, CurrencyEntity

WHEN = datetime(2024, 5, 1, 12, 30)


def test_calculation_defaults_invalid():
    entity = CalculationEntity()
    assert entity.id == -1
    assert entity.is_valid() is False


def test_calculation_valid():
    assert CalculationEntity(1, "2+2", "4", WHEN).is_valid() is True


def test_calculation_missing_parts_invalid():
    assert CalculationEntity(1, "", "4", WHEN).is_valid() is False
    assert CalculationEntity(1, "2+2", "", WHEN).is_valid() is False
    assert CalculationEntity(1, "2+2", "4", None).is_valid() is False


def test_currency_defaults():
    entity = CurrencyEntity()
    assert entity.id == -1
    assert entity.nominal == 1
    assert entity.rate == 0.0
    assert entity.is_valid() is False


def test_currency_valid():
    assert CurrencyEntity(1, "USD", "US Dollar", 1, 90.5, WHEN).is_valid() is True


def test_currency_invalid_cases():
    assert CurrencyEntity(1, "", "US Dollar", 1, 90.5, WHEN).is_valid() is False
    assert CurrencyEntity(1, "USD", "", 1, 90.5, WHEN).is_valid() is False
    assert CurrencyEntity(1, "USD", "US Dollar", 1, 0.0, WHEN).is_valid() is False
    assert CurrencyEntity(1, "USD", "US Dollar", 1, 90.5, None).is_valid() is False