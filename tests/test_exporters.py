'''
    File Name: test_exporters.py
    Version: 1.0.0
    Date: 19/10/2026
    Author: Pablo Bartolomé Molina
'''
from unittest.mock import patch

import pytest
from openpyxl import load_workbook

import config
from models.report import DateRange
from services.exporters import ExportError, default_export_filename, export_excel, export_pdf, print_report
from services.ledger import split_by_type, summarize
from services.paginator import paginate
from services.report_html import render_report_html

from conftest import make_tx

WINDOW = DateRange("2024-01-01", "2024-01-31")


@pytest.fixture
def report(sample_transactions):
    result = summarize(sample_transactions, WINDOW.start_date, WINDOW.end_date, 0)
    return result


def test_default_export_filename():
    assert default_export_filename(WINDOW, "pdf") == "AccountMaster_Report_2024-01-01_2024-01-31.pdf"
    assert default_export_filename(WINDOW, ".xlsx") == "AccountMaster_Report_2024-01-01_2024-01-31.xlsx"


def test_render_report_html_pages_and_totals(report):
    receipts, expenditures = split_by_type(report.filtered)
    pages = paginate(receipts, expenditures, report.summary.opening_balance, page_size=5)
    html = render_report_html(pages, WINDOW)

    assert "Period: 2024-01-01 to 2024-01-31" in html
    assert "Page 1 of 1" in html
    assert "Brought Forward (B/F)" in html
    assert "Carried Forward (C/F)" in html
    assert "Salary" in html and "Grocer" in html
    assert config.format_currency(60) in html
    assert "Filtered" not in html


def test_render_report_html_escapes_text_and_marks_search():
    tx = make_tx("1", "2024-01-02", "RECEIPT", 5, party="<b>Tom & Co</b>")
    pages = paginate([tx], [], 0.0, page_size=2)
    html = render_report_html(pages, WINDOW, search_query="tom")

    assert "<b>Tom" not in html
    assert "&lt;b&gt;Tom &amp; Co&lt;/b&gt;" in html
    assert 'Filtered: &quot;tom&quot;' in html


def test_render_report_html_breaks_between_pages_only():
    txs = [make_tx(str(i), "2024-01-02", "RECEIPT", 1) for i in range(5)]
    html = render_report_html(paginate(txs, [], 0.0, page_size=2), WINDOW)
    assert html.count("Page 3 of 3") == 1
    assert html.count("page-break-after: always") == 2


def test_export_excel_layout(tmp_path, report):
    path = tmp_path / default_export_filename(WINDOW, "xlsx")
    export_excel(report.filtered, report.summary, WINDOW, path)
    assert path.exists()

    wb = load_workbook(path)
    ws = wb[config.EXCEL_SHEET_NAME]
    rows = [list(r) for r in ws.iter_rows(values_only=True)]

    assert rows[0][0] == "Report Period: 2024-01-01 to 2024-01-31"
    assert rows[3][:4] == ["Date", "Particulars", "Received From", f"Amount ({config.CURRENCY_SYMBOL})"]
    assert rows[3][7] == "Paid To"

    first_data = rows[4]
    assert first_data[:4] == ["2024-01-05", "January pay", "Salary", 100]
    assert first_data[4] == "|"
    assert first_data[5:9] == ["2024-01-10", "Vegetables", "Grocer", 40]

    labels = {r[2]: r[3] for r in rows if r and len(r) > 3 and r[2]}
    assert labels["Opening Balance (B/F):"] == 0
    assert labels["Total Receipts:"] == 100
    assert labels["GRAND TOTAL:"] == 100
    right = {r[7]: r[8] for r in rows if r and len(r) > 8 and r[7]}
    assert right["Total Expenditure:"] == 40
    assert right["Closing Balance (C/F):"] == 60
    assert right["GRAND TOTAL:"] == 100


def test_export_excel_uneven_sides(tmp_path):
    txs = [make_tx(f"r{i}", f"2024-01-0{i + 1}", "RECEIPT", 1) for i in range(3)]
    result = summarize(txs, WINDOW.start_date, WINDOW.end_date)
    path = tmp_path / "uneven.xlsx"
    export_excel(result.filtered, result.summary, WINDOW, path)

    ws = load_workbook(path)[config.EXCEL_SHEET_NAME]
    data = [list(r) for r in ws.iter_rows(min_row=5, max_row=7, values_only=True)]
    assert all(row[0] is not None for row in data)
    assert all(row[5] is None for row in data)


def test_export_excel_failure_raises_export_error(tmp_path, report):
    missing_dir = tmp_path / "nope" / "report.xlsx"
    with pytest.raises(ExportError):
        export_excel(report.filtered, report.summary, WINDOW, missing_dir)


def test_export_pdf_writes_file(qtbot, tmp_path, report):
    receipts, expenditures = split_by_type(report.filtered)
    html = render_report_html(paginate(receipts, expenditures, 0.0, page_size=5), WINDOW)
    path = export_pdf(html, tmp_path / "report.pdf")
    assert path.exists()
    assert path.read_bytes().startswith(b"%PDF")


def test_print_report_cancelled(qtbot):
    with patch("PyQt6.QtPrintSupport.QPrintDialog.exec", return_value=0):
        assert print_report("<html></html>") is False
