from decimal import Decimal

import pytest
from pydantic import ValidationError

from domain.legs import Direction, ExchangeDescription, ExchangeLeg
from tests.helpers.legs import export_row, make_leg


def test_parse_exchanged_to_vault_description() -> None:
    parsed = ExchangeDescription.parse("Exchanged to DOGE DOGE Vault")

    assert parsed.direction == Direction.TO
    assert parsed.counter_currency == "DOGE"
    assert parsed.is_vault is True
    assert parsed.mentions_currency("DOGE")
    assert not parsed.mentions_currency("SEK")


def test_parse_exchanged_from_description() -> None:
    parsed = ExchangeDescription.parse("Exchanged from SEK")

    assert parsed.direction == Direction.FROM
    assert parsed.counter_currency == "SEK"
    assert parsed.is_vault is False


def test_parse_description_without_direction() -> None:
    parsed = ExchangeDescription.parse("Payment from John")

    assert parsed.direction is None
    assert parsed.counter_currency is None


def test_currency_mentions_match_whole_tokens_only() -> None:
    parsed = ExchangeDescription.parse("Exchanged to ETHW")

    assert not parsed.mentions_currency("ETH")
    assert parsed.mentions_currency("ETHW")


def test_net_amount_includes_fee_with_sign() -> None:
    leg = make_leg(description="Exchanged to EOS", amount="-900.90603463", fee="-20.36495977", currency="DOGE")

    assert leg.net_amount == Decimal("-921.27099440")


def test_references_currency_by_field_or_description() -> None:
    sek_leg = make_leg(description="Exchanged to ETH", amount="-100", currency="SEK")

    assert sek_leg.references_currency("SEK")
    assert sek_leg.references_currency("ETH")
    assert not sek_leg.references_currency("DOGE")


def test_validate_export_row_with_empty_optionals() -> None:
    leg = ExchangeLeg.model_validate(
        export_row(description="Exchanged from SEK", amount="40", fee="-0.06", currency="DOGE")
    )

    assert leg.settled_amount is None
    assert leg.settled_currency is None
    assert leg.balance is None
    assert leg.amount == Decimal("40")
    assert leg.fee == Decimal("-0.06")


@pytest.mark.parametrize(
    "overrides",
    [
        {"state": "Pending"},
        {"row_type": "Refund"},
        {"amount": "forty"},
        {"amount": ""},
    ],
)
def test_invalid_export_rows_are_rejected(overrides: dict[str, str]) -> None:
    row = export_row(description="Exchanged from SEK", currency="DOGE", **{"amount": "40", **overrides})

    with pytest.raises(ValidationError):
        ExchangeLeg.model_validate(row)


def test_card_payment_type_uses_export_spelling() -> None:
    leg = ExchangeLeg.model_validate(
        export_row(description="Coffee", amount="-3", currency="SEK", row_type="Card Payment")
    )

    assert leg.type.value == "Card Payment"
