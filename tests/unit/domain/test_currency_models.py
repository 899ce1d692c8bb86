# nosec B101

import dataclasses
from datetime import UTC, datetime, timedelta
from decimal import Decimal

import pytest

from domain.models.currency import ConversionResult, Money, RateSnapshot
from domain.models.units import UNIT_ALIASES, CurrencyUnit


def test_every_unit_has_aliases_and_label():
    for unit in CurrencyUnit:
        aliases = UNIT_ALIASES[unit]
        assert unit.code.lower() in aliases.codes
        assert unit.label.endswith(f"[{unit.code}]")
        assert all(alias == alias.lower() for alias in aliases.all())


def test_no_alias_is_shared_between_units():
    seen = {}
    for unit, aliases in UNIT_ALIASES.items():
        for alias in aliases.all():
            assert alias not in seen, f"{alias} used by {seen.get(alias)} and {unit}"
            seen[alias] = unit


def test_from_code_is_case_insensitive():
    assert CurrencyUnit.from_code("gbp") is CurrencyUnit.GBP
    with pytest.raises(ValueError):
        CurrencyUnit.from_code("XYZ")


def test_snapshot_orders_rates_by_unit_declaration(snapshot):
    assert snapshot.units == list(CurrencyUnit)


def test_snapshot_rates_are_read_only(snapshot):
    with pytest.raises(TypeError):
        snapshot.rates[CurrencyUnit.EUR] = Decimal("2")


def test_snapshot_is_frozen(snapshot):
    with pytest.raises(dataclasses.FrozenInstanceError):
        snapshot.fetched_at = datetime.now(UTC)


def test_snapshot_converts_floats_through_str():
    snapshot = RateSnapshot(
        fetched_at=datetime(2025, 1, 1, tzinfo=UTC),
        rates={CurrencyUnit.USD: 1.0, CurrencyUnit.CAD: 1.344352},
    )

    assert snapshot.rate(CurrencyUnit.CAD) == Decimal("1.344352")


@pytest.mark.parametrize(
    "rates",
    [
        {CurrencyUnit.EUR: Decimal("0.93")},
        {CurrencyUnit.USD: Decimal("1.1"), CurrencyUnit.EUR: Decimal("0.93")},
        {CurrencyUnit.USD: Decimal("1"), CurrencyUnit.EUR: Decimal("0")},
        {CurrencyUnit.USD: Decimal("1"), CurrencyUnit.EUR: Decimal("-0.93")},
        {CurrencyUnit.USD: Decimal("1"), CurrencyUnit.EUR: Decimal("Infinity")},
        {CurrencyUnit.USD: Decimal("1"), CurrencyUnit.EUR: "not a number"},
    ],
)
def test_snapshot_rejects_invalid_rates(rates):
    with pytest.raises(ValueError):
        RateSnapshot(fetched_at=datetime(2025, 1, 1, tzinfo=UTC), rates=rates)


def test_snapshot_requires_aware_timestamp():
    with pytest.raises(ValueError):
        RateSnapshot(fetched_at=datetime(2025, 1, 1), rates={CurrencyUnit.USD: Decimal("1")})


def test_snapshot_missing_unit_raises_key_error(snapshot):
    partial = RateSnapshot(fetched_at=snapshot.fetched_at, rates={CurrencyUnit.USD: Decimal("1")})

    with pytest.raises(KeyError):
        partial.rate(CurrencyUnit.GBP)


def test_snapshot_age_is_now_minus_fetched_at(snapshot):
    assert snapshot.age(snapshot.fetched_at + timedelta(minutes=5)) == timedelta(minutes=5)


def test_money_normalizes_by_dividing_by_rate(snapshot):
    money = Money.from_amount(Decimal("93.2001"), CurrencyUnit.EUR, snapshot)

    assert money.amount_usd == Decimal("100")
    assert money.unit is CurrencyUnit.EUR


def test_money_with_unit_returns_new_value(snapshot):
    dollars = Money(amount_usd=Decimal("40"), unit=CurrencyUnit.USD)

    loonies = dollars.with_unit(CurrencyUnit.CAD)

    assert dollars.unit is CurrencyUnit.USD
    assert loonies.unit is CurrencyUnit.CAD
    assert loonies.amount_usd == dollars.amount_usd
    assert loonies.render(snapshot) == "53.77 Canadian Dollar(s) [CAD]"


def test_money_is_immutable():
    money = Money(amount_usd=Decimal("1"), unit=CurrencyUnit.USD)

    with pytest.raises(dataclasses.FrozenInstanceError):
        money.unit = CurrencyUnit.EUR


@pytest.mark.parametrize(
    "unit, expected",
    [
        (CurrencyUnit.USD, "45.90 Dollar(s) [USD]"),
        (CurrencyUnit.EUR, "42.78 Euro(s) [EUR]"),
        (CurrencyUnit.RUB, "3282.31 Ruble(s) [RUB]"),
        (CurrencyUnit.JPY, "6087.57 Yen [JPY]"),
        (CurrencyUnit.AUD, "66.64 Australian Dollar(s) [AUD]"),
        (CurrencyUnit.AMD, "18204.88 Dram [AMD]"),
    ],
)
def test_money_render(snapshot, unit, expected):
    money = Money(amount_usd=Decimal("45.9"), unit=unit)

    assert money.render(snapshot) == expected


def test_conversion_result_str_joins_both_renderings(snapshot):
    source = Money(amount_usd=Decimal("1"), unit=CurrencyUnit.USD)
    result = ConversionResult(
        original="1.00 Dollar(s) [USD]",
        converted="0.93 Euro(s) [EUR]",
        source=source,
        target=source.with_unit(CurrencyUnit.EUR),
        rates=snapshot,
    )

    assert str(result) == "1.00 Dollar(s) [USD] -> 0.93 Euro(s) [EUR]"
    assert result.rates_fetched_at == snapshot.fetched_at
    assert result.converted_amount == Decimal("0.932001")
