"""Report export to CSV and paginated PDF documents."""

import csv
import io
import logging
import os
import tempfile
from datetime import datetime
from pathlib import Path
from typing import Iterable, Optional, Sequence

from matplotlib.backends.backend_pdf import PdfPages
from matplotlib.figure import Figure

from dompet.domain.aggregation import UNCATEGORIZED, sum_by_type
from dompet.domain.entities import (
    BankAccount,
    Category,
    ReportFilter,
    ReportTotals,
    Transaction,
    TransactionType,
)
from dompet.domain.errors import ExportError
from dompet.utils.currency import format_currency, format_number

logger = logging.getLogger(__name__)

NO_ACCOUNT = "Tunai/Lainnya"
DOCUMENT_TITLE = "Laporan Transaksi Keuangan"

CSV_COLUMNS = (
    "Tanggal",
    "Tipe",
    "Kategori",
    "Deskripsi",
    "Rekening",
    "Jumlah",
    "ID_Transaksi",
    "ID_Kategori",
    "ID_Rekening",
)

PDF_COLUMNS = ("Tanggal", "Tipe", "Kategori", "Deskripsi", "Rekening", "Jumlah (Rp)")
PDF_COLUMN_WIDTHS = (0.11, 0.09, 0.19, 0.30, 0.16, 0.15)
ROWS_PER_PAGE = 28
A4_PORTRAIT = (8.27, 11.69)
HEADER_COLOR = "#3f42f1"


def _type_label(txn: Transaction) -> str:
    return "Masuk" if txn.type == TransactionType.INCOME else "Keluar"


def _clip(text: str, width: int) -> str:
    return text if len(text) <= width else text[: width - 1] + "…"


def transaction_to_csv_row(txn: Transaction) -> list[str]:
    """Convert a transaction to a CSV row in CSV_COLUMNS order."""
    return [
        txn.transaction_date.isoformat(),
        str(getattr(txn.type, "value", txn.type)),
        txn.category_name or UNCATEGORIZED,
        txn.description or "",
        txn.bank_account_name or NO_ACCOUNT,
        str(txn.amount),
        txn.id,
        txn.category_id or "",
        txn.bank_account_id or "",
    ]


def to_csv(transactions: Iterable[Transaction]) -> bytes:
    """Serialize transactions as CSV.

    The output is UTF-8 with a byte-order mark so spreadsheet programs pick
    the right encoding; every field is quoted and a header row is always
    written. Amounts are raw decimal strings.
    """
    buffer = io.StringIO(newline="")
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL)
    writer.writerow(CSV_COLUMNS)
    for txn in transactions:
        writer.writerow(transaction_to_csv_row(txn))
    return buffer.getvalue().encode("utf-8-sig")


def describe_filter(
    report_filter: Optional[ReportFilter],
    categories: Sequence[Category] = (),
    accounts: Sequence[BankAccount] = (),
) -> list[str]:
    """Human-readable lines describing the active report filter."""
    report_filter = report_filter or ReportFilter()

    start = report_filter.start_date.strftime("%d %b %Y") if report_filter.start_date else "Semua"
    end = report_filter.end_date.strftime("%d %b %Y") if report_filter.end_date else "Sekarang"

    if report_filter.type in (None, "", "all"):
        type_text = "Semua"
    else:
        type_text = TransactionType(report_filter.type).label

    if report_filter.category_id in (None, "", "all"):
        category_text = "Semua"
    else:
        names = {cat.id: cat.name for cat in categories}
        category_text = names.get(report_filter.category_id, "Spesifik")

    if report_filter.bank_account_id == "all":
        account_text = "Semua"
    elif report_filter.bank_account_id is None:
        account_text = NO_ACCOUNT
    else:
        names = {acc.id: acc.name for acc in accounts}
        account_text = names.get(report_filter.bank_account_id, "Spesifik")

    return [
        f"Periode: {start} - {end}",
        f"Tipe: {type_text}",
        f"Kategori: {category_text}",
        f"Rekening: {account_text}",
        f"Pencarian: {report_filter.search or '-'}",
    ]


def _document_row(txn: Transaction) -> list[str]:
    return [
        txn.transaction_date.strftime("%d/%m/%y"),
        _type_label(txn),
        _clip(txn.category_name or UNCATEGORIZED, 22),
        _clip(txn.description or "-", 38),
        _clip(txn.bank_account_name or NO_ACCOUNT, 20),
        format_number(txn.amount),
    ]


def _render_page(
    fig: Figure,
    rows: list[list[str]],
    page_number: int,
    page_count: int,
    header_lines: Optional[list[str]],
    totals: Optional[ReportTotals],
) -> None:
    top = 0.95
    if header_lines is not None:
        fig.text(0.06, top, DOCUMENT_TITLE, fontsize=16, weight="bold", va="top")
        y = top - 0.04
        for line in header_lines:
            fig.text(0.06, y, line, fontsize=9, color="#555555", va="top")
            y -= 0.018
        top = y - 0.01

    bottom = 0.16 if totals is not None else 0.06
    ax = fig.add_axes((0.05, bottom, 0.9, top - bottom))
    ax.axis("off")

    if rows:
        table = ax.table(
            cellText=rows,
            colLabels=PDF_COLUMNS,
            colWidths=PDF_COLUMN_WIDTHS,
            cellLoc="left",
            loc="upper center",
        )
        table.auto_set_font_size(False)
        table.set_fontsize(7)
        for (row, col), cell in table.get_celld().items():
            if row == 0:
                cell.set_facecolor(HEADER_COLOR)
                cell.get_text().set_color("white")
                cell.get_text().set_weight("bold")
            if col == len(PDF_COLUMNS) - 1:
                cell.get_text().set_horizontalalignment("right")
    elif page_number == 1:
        ax.text(0.5, 0.95, "Tidak ada transaksi.", ha="center", va="top", fontsize=10)

    if totals is not None:
        fig.text(0.06, 0.12, f"Total Pemasukan: {format_currency(totals.total_income)}",
                 fontsize=10, weight="bold")
        fig.text(0.06, 0.10, f"Total Pengeluaran: {format_currency(totals.total_expense)}",
                 fontsize=10, weight="bold")
        fig.text(0.06, 0.07, f"Arus Bersih (Net Flow): {format_currency(totals.net)}",
                 fontsize=12, weight="bold")

    fig.text(0.94, 0.03, f"Halaman {page_number}/{page_count}", fontsize=8, ha="right",
             color="#555555")


def to_document(
    transactions: Iterable[Transaction],
    report_filter: Optional[ReportFilter] = None,
    totals: Optional[ReportTotals] = None,
    generated_at: Optional[datetime] = None,
    filter_lines: Optional[list[str]] = None,
) -> bytes:
    """Render transactions as a paginated PDF report.

    The first page carries the title, generation timestamp and filter
    description; the last page carries the totals block. An empty list
    still yields a valid single-page document.

    Args:
        transactions: Filtered (not paginated) transactions, in display order
        report_filter: Active filter, described in the header
        totals: Totals to print; computed from ``transactions`` if omitted
        generated_at: Timestamp printed in the header, defaults to now
        filter_lines: Pre-rendered filter description overriding ``report_filter``

    Returns:
        PDF bytes
    """
    transactions = list(transactions)
    totals = totals if totals is not None else sum_by_type(transactions)
    generated_at = generated_at or datetime.now()
    header_lines = [f"Tanggal Cetak: {generated_at:%d %b %Y %H:%M}"]
    header_lines.extend(filter_lines if filter_lines is not None else describe_filter(report_filter))

    rows = [_document_row(txn) for txn in transactions]
    chunks = [rows[i : i + ROWS_PER_PAGE] for i in range(0, len(rows), ROWS_PER_PAGE)] or [[]]

    buffer = io.BytesIO()
    with PdfPages(buffer, metadata={"Title": DOCUMENT_TITLE}) as pdf:
        for number, chunk in enumerate(chunks, start=1):
            fig = Figure(figsize=A4_PORTRAIT)
            _render_page(
                fig,
                chunk,
                page_number=number,
                page_count=len(chunks),
                header_lines=header_lines if number == 1 else None,
                totals=totals if number == len(chunks) else None,
            )
            pdf.savefig(fig)
    return buffer.getvalue()


def write_export(path: str | Path, payload: bytes) -> Path:
    """Write an already generated export to ``path``.

    The data goes to a temporary file next to the target first and is moved
    into place only once fully written, so a failure never leaves a partial
    file behind.

    Raises:
        ExportError: If the file cannot be written
    """
    target = Path(path)
    tmp_name = None
    try:
        with tempfile.NamedTemporaryFile(
            dir=target.parent or Path("."), prefix=f".{target.name}.", delete=False
        ) as handle:
            tmp_name = handle.name
            handle.write(payload)
        os.replace(tmp_name, target)
    except OSError as e:
        logger.error("Export to %s failed: %s", target, e)
        if tmp_name is not None and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise ExportError(f"Could not write export to {target}: {e}")

    logger.info("Wrote %d bytes to %s", len(payload), target)
    return target
