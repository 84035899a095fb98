"""Tests for the command-line interface."""

import codecs
import csv
import io
from datetime import date, timedelta
from unittest.mock import MagicMock, patch

from dompet.cli.main import cli


def _invoke(cli_runner, temp_db, *args, **kwargs):
    return cli_runner.invoke(cli, ["--db-path", temp_db.database_path, *args], **kwargs)


def test_help_does_not_open_database(cli_runner):
    result = cli_runner.invoke(cli, ["--help"])

    assert result.exit_code == 0
    assert "report" in result.output
    assert "dashboard" in result.output


def test_category_init_and_list(cli_runner, temp_db):
    result = _invoke(cli_runner, temp_db, "category", "init")
    assert result.exit_code == 0
    assert "default categories" in result.output

    result = _invoke(cli_runner, temp_db, "category", "list", "--type", "income")
    assert result.exit_code == 0
    assert "Pemasukan:" in result.output
    assert "Gaji" in result.output
    assert "Transportasi" not in result.output


def test_category_init_twice_fails(cli_runner, temp_db):
    _invoke(cli_runner, temp_db, "category", "init")

    result = _invoke(cli_runner, temp_db, "category", "init")

    assert result.exit_code == 1
    assert "Error:" in result.output


def test_category_add_invalid_color(cli_runner, temp_db):
    result = _invoke(
        cli_runner, temp_db, "category", "add", "Kopi", "--type", "expense", "--color", "brown"
    )

    assert result.exit_code == 1
    assert "RRGGBB" in result.output


def test_account_add_and_list(cli_runner, temp_db):
    result = _invoke(
        cli_runner, temp_db, "account", "add", "Tabungan", "--bank", "BCA", "--balance", "1.500.000"
    )
    assert result.exit_code == 0
    assert "Created account 'Tabungan'" in result.output

    result = _invoke(cli_runner, temp_db, "account", "list")
    assert result.exit_code == 0
    assert "BCA" in result.output
    assert "Rp 1.500.000" in result.output


def test_transaction_add_by_names(cli_runner, temp_db, reopen, sample_categories, sample_account):
    result = _invoke(
        cli_runner,
        temp_db,
        "transaction",
        "add",
        "--type",
        "expense",
        "--amount",
        "45.000",
        "--category",
        "makan",
        "--account",
        "Tabungan",
        "--description",
        "Nasi Padang",
    )

    assert result.exit_code == 0
    assert "Created pengeluaran of Rp 45.000" in result.output

    (txn,) = reopen().list_transactions()
    assert txn.category_name == "Makan"
    assert txn.bank_account_name == "Tabungan"
    assert txn.transaction_date == date.today()


def test_transaction_add_rejects_category_of_other_type(cli_runner, temp_db, sample_categories):
    result = _invoke(
        cli_runner, temp_db, "transaction", "add", "--type", "income", "--amount", "1000",
        "--category", "Makan",
    )

    assert result.exit_code == 1
    assert "Category 'Makan' not found" in result.output


def test_transaction_add_invalid_input(cli_runner, temp_db):
    result = _invoke(
        cli_runner, temp_db, "transaction", "add", "--type", "expense", "--amount", "banyak"
    )
    assert result.exit_code == 1
    assert "Invalid amount" in result.output

    tomorrow = (date.today() + timedelta(days=1)).isoformat()
    result = _invoke(
        cli_runner, temp_db, "transaction", "add", "--type", "expense", "--amount", "1000",
        "--date", tomorrow,
    )
    assert result.exit_code == 1
    assert "future" in result.output


def test_transaction_update_and_delete(cli_runner, temp_db, reopen, sample_transactions):
    lunch = sample_transactions[1]

    result = _invoke(
        cli_runner, temp_db, "transaction", "update", lunch.id, "--amount", "50000",
        "--category", "",
    )
    assert result.exit_code == 0
    updated = reopen().get_transaction(lunch.id)
    assert updated.amount == 50000
    assert updated.category_id is None

    result = _invoke(cli_runner, temp_db, "transaction", "delete", lunch.id, input="y\n")
    assert result.exit_code == 0
    assert "Deleted transaction" in result.output
    assert reopen().get_transaction(lunch.id) is None


def test_transaction_delete_missing(cli_runner, temp_db):
    result = _invoke(cli_runner, temp_db, "transaction", "delete", "missing", "--yes")

    assert result.exit_code == 1
    assert "not found" in result.output


def test_asset_add_and_list(cli_runner, temp_db):
    result = _invoke(
        cli_runner, temp_db, "asset", "add", "Motor Beat", "--type", "Kendaraan",
        "--purchase-value", "18.000.000", "--current-value", "14.500.000",
        "--purchase-date", "2022-06-01",
    )
    assert result.exit_code == 0

    result = _invoke(cli_runner, temp_db, "asset", "list")
    assert result.exit_code == 0
    assert "Motor Beat" in result.output
    assert "-Rp 3.500.000" in result.output


def test_dashboard(cli_runner, temp_db, sample_transactions):
    result = _invoke(cli_runner, temp_db, "dashboard", "--period", "this-month")

    assert result.exit_code == 0
    assert "Dashboard (this-month)" in result.output
    assert "Rp 5.000.000" in result.output
    assert "Gaji" in result.output
    assert "This month vs last month" in result.output


def test_report_filters_and_totals(cli_runner, temp_db, sample_transactions):
    result = _invoke(cli_runner, temp_db, "report", "--type", "expense")

    assert result.exit_code == 0
    assert "Makan siang" in result.output
    assert "Gaji bulanan" not in result.output
    assert "Rp 65.000" in result.output


def test_report_cash_only(cli_runner, temp_db, sample_transactions):
    result = _invoke(cli_runner, temp_db, "report", "--account", "none")

    assert result.exit_code == 0
    assert "Makan siang" in result.output
    assert "Ojek" not in result.output


def test_report_rejects_mixed_date_options(cli_runner, temp_db):
    result = _invoke(
        cli_runner, temp_db, "report", "--period", "today", "--start-date", "2024-01-01"
    )

    assert result.exit_code == 1
    assert "--period" in result.output


def test_report_exports(cli_runner, temp_db, sample_transactions, tmp_path):
    csv_path = tmp_path / "laporan.csv"
    pdf_path = tmp_path / "laporan.pdf"

    result = _invoke(
        cli_runner, temp_db, "report", "--page-size", "1",
        "--csv", str(csv_path), "--pdf", str(pdf_path),
    )

    assert result.exit_code == 0
    payload = csv_path.read_bytes()
    assert payload.startswith(codecs.BOM_UTF8)
    rows = list(csv.reader(io.StringIO(payload.decode("utf-8-sig"))))
    # Exports include every filtered row, not just the displayed page
    assert len(rows) == 4
    assert pdf_path.read_bytes().startswith(b"%PDF")


def test_report_export_failure(cli_runner, temp_db, sample_transactions, tmp_path):
    target = tmp_path / "missing" / "laporan.csv"

    result = _invoke(cli_runner, temp_db, "report", "--csv", str(target))

    assert result.exit_code == 1
    assert "Could not write export" in result.output
    assert not target.exists()


def test_advice_requires_configuration(cli_runner, temp_db):
    result = _invoke(cli_runner, temp_db, "advice")

    assert result.exit_code == 1
    assert "DOMPET_ADVICE_URL" in result.output


def test_advice(cli_runner, temp_db, sample_transactions, monkeypatch):
    monkeypatch.setenv("DOMPET_ADVICE_URL", "https://advice.example/api")

    with patch("dompet.domain.advice.requests.Session") as session_class:
        session = MagicMock()
        session.post.return_value.json.return_value = {"suggestion": "Sisihkan 20% untuk tabungan."}
        session_class.return_value = session

        result = _invoke(cli_runner, temp_db, "advice")

    assert result.exit_code == 0
    assert "Sisihkan 20% untuk tabungan." in result.output
    sent = session.post.call_args.kwargs["json"]
    assert sent["totalIncome"] == 8000000.0


def test_user_option_scopes_data(cli_runner, temp_db):
    result = _invoke(
        cli_runner, temp_db, "--user", "alice", "category", "add", "Gaji", "--type", "income"
    )
    assert result.exit_code == 0

    result = _invoke(cli_runner, temp_db, "--user", "bob", "category", "list")
    assert "No categories found." in result.output

    result = _invoke(cli_runner, temp_db, "--user", "alice", "category", "list")
    assert "Gaji" in result.output
