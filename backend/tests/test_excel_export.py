from datetime import datetime
from io import BytesIO

from openpyxl import load_workbook

from storefront.services import excel_export


def open_sheet(content: bytes):
    return load_workbook(BytesIO(content)).active


def test_order_status_cells_are_coloured():
    rows = [
        {"id": 1, "order_type": "regular", "status": "Completed", "customer_name": "A",
         "customer_email": "a@gmail.com", "artwork_title": "Lotus", "created_at": datetime(2026, 1, 2, 3, 4, 5)},
        {"id": 2, "order_type": "custom", "status": "Cancelled", "customer_name": "B",
         "customer_email": "b@gmail.com", "order_details": {"idea": "Portrait"}},
    ]
    sheet = open_sheet(excel_export.build_orders_workbook(rows))

    assert sheet["A1"].fill.start_color.rgb == excel_export.HEADER_FILL
    assert sheet["A1"].font.bold
    assert sheet["C2"].fill.start_color.rgb == "FFD4EDDA"
    assert sheet["C3"].fill.start_color.rgb == "FFF8D7DA"
    assert sheet["G3"].value == "Custom"
    assert sheet["I2"].value == "2026-01-02 03:04:05"
    assert sheet["F2"].value == "N/A"


def test_feedback_rows_are_shaded_by_rating():
    rows = [
        {"id": 1, "customer_name": "A", "customer_email": "a@gmail.com", "feedback_type": "pricing",
         "rating": 1, "status": "Pending", "message": "Too expensive for me."},
    ]
    summary = {"total_feedback": 1, "average_rating": 1.0, "by_rating": {"5": 0, "1": 1}, "by_status": {"Pending": 1}}
    sheet = open_sheet(excel_export.build_feedback_workbook(rows, summary))

    assert sheet["E2"].value == "PRICING"
    assert sheet["F2"].value == "⭐ (1/5)"
    assert sheet["A2"].fill.start_color.rgb == excel_export.RATING_FILLS[1]
    assert sheet["G2"].fill.start_color.rgb == "FFFFF3CD"
    assert sheet["A4"].value == "FEEDBACK SUMMARY"
    assert "A4:H4" in {str(r) for r in sheet.merged_cells.ranges}


def test_export_filename():
    name = excel_export.export_filename("orders", now=datetime(2026, 10, 19, 8, 30, 0))
    assert name == "orders_20261019_083000.xlsx"
