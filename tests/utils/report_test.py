from decimal import Decimal
from io import StringIO

import pytest

from domain.reconciliation import to_transactions
from domain.transaction import Transaction
from tests.constants import DOGE
from tests.helpers.legs import make_leg, six_leg_fixture
from utils.formatting import format_decimal
from utils.report import render_transactions, write_legs_csv, write_transactions_csv


def test_format_decimal_avoids_scientific_notation() -> None:
    assert format_decimal(Decimal("1E+2")) == "100"
    assert format_decimal(Decimal("-921.27099440")) == "-921.27099440"
    assert format_decimal(None) == ""


def test_write_transactions_csv() -> None:
    handle = StringIO()

    write_transactions_csv(to_transactions(six_leg_fixture(), DOGE), handle)

    assert handle.getvalue().splitlines() == [
        "Type,Date,Paid Currency,Paid Amount,Exchanged Currency,Exchanged Amount,Vault",
        "Buy,2021-11-11 18:03:13,DOGE,39.94,SEK,-20,true",
        "Buy,2021-12-31 17:54:48,DOGE,2000,SEK,-5080.60,false",
        "Sell,2022-03-01 16:21:49,DOGE,-921.27099440,EOS,50,false",
    ]


def test_write_legs_csv_uses_export_headers() -> None:
    handle = StringIO()
    leg = make_leg(
        description="Exchanged from SEK",
        amount="40",
        fee="-0.06",
        currency="DOGE",
        date="2021-11-11 18:03:13",
        balance="139.94",
    )

    write_legs_csv([leg], handle)

    header, row = handle.getvalue().splitlines()
    assert header.startswith("Type,Started Date,Completed Date,Description,Amount,Fee,Currency")
    assert row == (
        "Exchange,2021-11-11 18:03:13,2021-11-11 18:03:13,Exchanged from SEK,40,-0.06,DOGE,40,DOGE,,,Completed,139.94"
    )


def test_render_transactions_table(capsys: pytest.CaptureFixture[str]) -> None:
    render_transactions(to_transactions(six_leg_fixture(), DOGE))

    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "Transactions:"
    assert lines[1].split() == [
        "Type",
        "Date",
        "Paid",
        "Currency",
        "Paid",
        "Amount",
        "Exchanged",
        "Currency",
        "Exchanged",
        "Amount",
        "Vault",
    ]
    body = lines[3:-1]
    assert [line.split()[0] for line in body] == ["Buy", "Buy", "Sell"]
    assert "-921.27099440" in body[2]


def test_render_empty(capsys: pytest.CaptureFixture[str]) -> None:
    render_transactions([])

    assert capsys.readouterr().out == "Transactions:\n  (no transactions)\n"


def test_render_transaction_without_type(capsys: pytest.CaptureFixture[str]) -> None:
    render_transactions([Transaction(date="2022-01-01 10:00:00")])

    body = capsys.readouterr().out.splitlines()[3]
    assert body.startswith(" ")
    assert "2022-01-01 10:00:00" in body
