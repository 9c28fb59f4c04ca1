"""Tests for the `report` command of the runtime entrypoint."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from shopstats.main import main

_REPOSITORY_DATASET_PATH = Path(__file__).resolve().parent.parent / "data" / "shop.json"


def test_main_report_prints_json_payload(capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch) -> None:
    """Print the most popular country report as JSON.

    Returns:
        None: Assertions validate stdout payload.

    Raises:
        AssertionError: Raised when output differs.
    """

    monkeypatch.setenv("DATASET_PATH", str(_REPOSITORY_DATASET_PATH))

    main(["report", "most-popular-country"])

    assert json.loads(capsys.readouterr().out) == {"report": "most-popular-country", "country": "USA"}


def test_main_report_accepts_dataset_override_and_parameters(capsys: pytest.CaptureFixture[str]) -> None:
    main(
        [
            "report",
            "average-product-price",
            "--card-number",
            "5500-0002",
            "--dataset",
            str(_REPOSITORY_DATASET_PATH),
        ]
    )

    assert json.loads(capsys.readouterr().out)["average_price"] == "25.50"


def test_main_report_exits_with_error_code_when_report_fails() -> None:
    """Exit with code 1 when the averaged card has no items."""

    with pytest.raises(SystemExit) as exit_info:
        main(["report", "average-product-price", "--card-number", "0000", "--dataset", str(_REPOSITORY_DATASET_PATH)])

    assert exit_info.value.code == 1


def test_main_report_requires_report_name() -> None:
    with pytest.raises(SystemExit) as exit_info:
        main(["report"])

    assert exit_info.value.code == 2


def test_main_report_exits_with_error_code_for_zero_quantity_dataset(tmp_path: Path) -> None:
    """Exit with code 1 instead of a traceback when an item has quantity zero."""

    dataset_path = tmp_path / "zero-quantity.json"
    dataset_path.write_text(
        json.dumps(
            {
                "customers": [
                    {
                        "email": "a@example.com",
                        "address": {"country": "USA"},
                        "orders": [
                            {
                                "payment_info": {"card_type": "VISA", "card_number": "1234"},
                                "order_items": [{"product": {"price": "10", "color": "RED"}, "quantity": 0}],
                            }
                        ],
                    }
                ]
            }
        ),
        encoding="utf-8",
    )

    with pytest.raises(SystemExit) as exit_info:
        main(["report", "average-product-price", "--card-number", "1234", "--dataset", str(dataset_path)])

    assert exit_info.value.code == 1
