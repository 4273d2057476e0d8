from __future__ import annotations

import json
from pathlib import Path

from invoice_studio.core.currency import fmt_money
from invoice_studio.core.settings import Settings, load_settings, save_settings


def test_missing_settings_file_writes_defaults(tmp_path: Path) -> None:
    p = tmp_path / "conf" / "settings.json"

    settings = load_settings(p)

    assert settings == Settings()
    assert json.loads(p.read_text(encoding="utf-8"))["currency"] == "US$"


def test_unknown_keys_ignored_and_values_merged(tmp_path: Path) -> None:
    p = tmp_path / "settings.json"
    p.write_text(json.dumps({"currency": "CA$", "bogus": 1}), encoding="utf-8")

    settings = load_settings(p)

    assert settings.currency == "CA$"
    assert settings.gst_rate == 5.0


def test_corrupt_settings_fall_back(tmp_path: Path) -> None:
    p = tmp_path / "settings.json"
    p.write_text("{not json", encoding="utf-8")

    assert load_settings(p) == Settings()
    assert p.read_text(encoding="utf-8") == "{not json"


def test_save_then_load(tmp_path: Path) -> None:
    p = tmp_path / "settings.json"
    save_settings(Settings(company_name="Other Ltd."), p)

    assert load_settings(p).company_name == "Other Ltd."


def test_fmt_money_has_no_grouping() -> None:
    assert fmt_money(1234567.891, "US$") == "US$1234567.89"
    assert fmt_money(33.65, "$") == "$33.65"
    assert fmt_money(-2, "CA$") == "CA$-2.00"
    assert fmt_money(float("inf"), "$") == "$inf"


def test_fmt_money_rounds_exact_binary_value() -> None:
    # each of these floats sits just below the half cent
    assert fmt_money(0.145, "US$") == "US$0.14"
    assert fmt_money(1.005, "$") == "$1.00"
    assert fmt_money(2.675, "$") == "$2.67"
    # exact binary ties round up
    assert fmt_money(0.125, "$") == "$0.13"
    assert fmt_money(-0.125, "$") == "$-0.13"


def test_non_default_field_survives_save_and_load(tmp_path: Path) -> None:
    p = tmp_path / "settings.json"
    save_settings(Settings(etransfer_email="pay@other.test", currencies=["EUR"]), p)

    loaded = load_settings(p)

    assert loaded.etransfer_email == "pay@other.test"
    assert loaded.currencies == ["EUR"]
    assert json.loads(p.read_text(encoding="utf-8"))["etransfer_email"] == "pay@other.test"
