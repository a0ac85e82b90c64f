# backend/storefront/services/excel_export.py
"""
Builds .xlsx exports with openpyxl.

Every builder takes plain dict rows (already read from the database) and
returns the workbook as bytes. Builders are synchronous; endpoints run them
in a thread pool.
"""
from datetime import datetime
from io import BytesIO
from typing import Any, Dict, List, Optional, Sequence, Tuple

from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

HEADER_FILL = "FF8B7355"
FEEDBACK_HEADER_FILL = "FF4472C4"
SUMMARY_LABEL_FILL = "FFE2E8F0"

THIN_BORDER = Border(
    left=Side(style="thin"), right=Side(style="thin"), top=Side(style="thin"), bottom=Side(style="thin")
)

# status -> (fill, font colour)
ORDER_STATUS_COLORS = {
    "Completed": ("FFD4EDDA", "FF155724"),
    "Pending": ("FFFFF3CD", "FF856404"),
    "Cancelled": ("FFF8D7DA", "FF721C24"),
}
FEEDBACK_STATUS_COLORS = {
    "Pending": ("FFFFF3CD", "FF856404"),
    "Reviewed": ("FFCFE2FF", "FF004085"),
    "Resolved": ("FFD4EDDA", "FF155724"),
}
RATING_FILLS = {
    5: "FFD4EDDA",
    4: "FFCFE2FF",
    3: "FFFFF3CD",
    2: "FFFFE5D0",
    1: "FFF8D7DA",
}

Column = Tuple[str, str, int]  # (header, row key, width)

ORDER_COLUMNS: List[Column] = [
    ("Order ID", "id", 10),
    ("Order Type", "order_type", 15),
    ("Status", "status", 12),
    ("Customer Name", "customer_name", 25),
    ("Email", "customer_email", 30),
    ("Phone", "customer_phone", 15),
    ("Artwork/Item", "artwork_title", 30),
    ("Delivery Address", "delivery_address", 40),
    ("Order Date", "created_at", 20),
]

ARTWORK_COLUMNS: List[Column] = [
    ("ID", "id", 10),
    ("Title", "title", 30),
    ("Category", "category", 20),
    ("Artist", "artist_name", 25),
    ("Price", "price", 15),
    ("Medium", "medium", 20),
    ("Dimensions", "dimensions", 20),
    ("Year", "year", 10),
    ("Photo Count", "photo_count", 15),
    ("Created At", "created_at", 20),
]

ARTIST_COLUMNS: List[Column] = [
    ("ID", "id", 8),
    ("Name", "name", 25),
    ("Location", "location", 20),
    ("Style", "style", 20),
    ("Email", "email", 30),
    ("Phone", "phone", 15),
    ("Instagram", "instagram", 25),
    ("Website", "website", 30),
    ("Artworks", "artwork_count", 12),
    ("Created At", "created_at", 20),
]

FEEDBACK_COLUMNS: List[Column] = [
    ("ID", "id", 8),
    ("Date & Time", "created_at", 20),
    ("Customer Name", "customer_name", 25),
    ("Email", "customer_email", 30),
    ("Feedback Type", "feedback_type", 20),
    ("Rating", "rating", 14),
    ("Status", "status", 15),
    ("Message", "message", 50),
]


def _fill(argb: str) -> PatternFill:
    return PatternFill(fill_type="solid", start_color=argb, end_color=argb)


def _display(value: Any) -> Any:
    if value is None or value == "":
        return "N/A"
    if isinstance(value, datetime):
        return value.strftime("%Y-%m-%d %H:%M:%S")
    if hasattr(value, "value"):  # Enum members
        return value.value
    return value


def _write_table(ws: Worksheet, columns: Sequence[Column], rows: List[Dict[str, Any]], header_fill: str) -> None:
    ws.append([header for header, _, _ in columns])
    for idx, (_, _, width) in enumerate(columns, start=1):
        ws.column_dimensions[get_column_letter(idx)].width = width
    for cell in ws[1]:
        cell.font = Font(bold=True, size=12, color="FFFFFFFF")
        cell.fill = _fill(header_fill)
        cell.alignment = Alignment(vertical="center", horizontal="center")

    for row in rows:
        ws.append([_display(row.get(key)) for _, key, _ in columns])

    for ws_row in ws.iter_rows(min_row=1, max_row=len(rows) + 1, max_col=len(columns)):
        for cell in ws_row:
            cell.border = THIN_BORDER


def _color_status_column(ws: Worksheet, column_index: int, colors: Dict[str, Tuple[str, str]], row_count: int) -> None:
    for (cell,) in ws.iter_rows(min_row=2, max_row=row_count + 1, min_col=column_index, max_col=column_index):
        style = colors.get(cell.value)
        if style:
            fill, font_color = style
            cell.fill = _fill(fill)
            cell.font = Font(bold=True, color=font_color)


def _to_bytes(wb: Workbook) -> bytes:
    buffer = BytesIO()
    wb.save(buffer)
    return buffer.getvalue()


def build_orders_workbook(orders: List[Dict[str, Any]]) -> bytes:
    wb = Workbook()
    ws = wb.active
    ws.title = "Orders"

    rows = []
    for order in orders:
        details = order.get("order_details") or {}
        order_type = _display(order.get("order_type"))
        rows.append({
            **order,
            "order_type": str(order_type).upper(),
            "status": _display(order.get("status")),
            # Custom and bulk orders have no artwork; show what was asked for instead
            "artwork_title": order.get("artwork_title") or details.get("itemType") or "Custom",
        })

    _write_table(ws, ORDER_COLUMNS, rows, HEADER_FILL)
    _color_status_column(ws, 3, ORDER_STATUS_COLORS, len(rows))
    return _to_bytes(wb)


def build_artworks_workbook(artworks: List[Dict[str, Any]]) -> bytes:
    wb = Workbook()
    ws = wb.active
    ws.title = "Artworks"
    rows = [{**a, "photo_count": len(a.get("photos") or [])} for a in artworks]
    _write_table(ws, ARTWORK_COLUMNS, rows, HEADER_FILL)
    return _to_bytes(wb)


def build_artists_workbook(artists: List[Dict[str, Any]]) -> bytes:
    wb = Workbook()
    ws = wb.active
    ws.title = "Artists"
    _write_table(ws, ARTIST_COLUMNS, artists, HEADER_FILL)
    return _to_bytes(wb)


def build_feedback_workbook(feedback: List[Dict[str, Any]], summary: Optional[Dict[str, Any]] = None) -> bytes:
    """
    Feedback sheet with rows shaded by rating, a coloured status column and a
    summary block (totals, average, per-rating and per-status counts) underneath.
    'summary' is the dict returned by crud.feedback.get_feedback_stats.
    """
    wb = Workbook()
    ws = wb.active
    ws.title = "Customer Feedback"

    rows = []
    for f in feedback:
        rating = int(f.get("rating") or 0)
        rows.append({
            **f,
            "feedback_type": str(_display(f.get("feedback_type"))).replace("_", " ").upper(),
            "rating": f"{'⭐' * rating} ({rating}/5)",
            "status": _display(f.get("status")),
        })
    _write_table(ws, FEEDBACK_COLUMNS, rows, FEEDBACK_HEADER_FILL)
    ws.row_dimensions[1].height = 25

    for row_idx, f in enumerate(feedback, start=2):
        fill = RATING_FILLS.get(int(f.get("rating") or 0))
        for cell in ws[row_idx]:
            if fill:
                cell.fill = _fill(fill)
            cell.alignment = Alignment(vertical="top", wrap_text=True)
    _color_status_column(ws, 7, FEEDBACK_STATUS_COLORS, len(rows))

    if summary is not None:
        _write_feedback_summary(ws, summary)
    return _to_bytes(wb)


def _write_feedback_summary(ws: Worksheet, summary: Dict[str, Any]) -> None:
    ws.append([])
    ws.append(["FEEDBACK SUMMARY"])
    title_row = ws.max_row
    ws.cell(row=title_row, column=1).font = Font(bold=True, size=14)
    ws.merge_cells(start_row=title_row, start_column=1, end_row=title_row, end_column=len(FEEDBACK_COLUMNS))

    ws.append(["Total Feedback:", summary.get("total_feedback", 0)])
    ws.append(["Average Rating:", f"{summary.get('average_rating', 0.0):.2f} ⭐"])
    for rating, count in (summary.get("by_rating") or {}).items():
        ws.append([f"{rating} Star:", count])
    for status, count in (summary.get("by_status") or {}).items():
        ws.append([f"{status}:", count])

    for row_idx in range(title_row + 1, ws.max_row + 1):
        for cell in ws[row_idx][:2]:
            cell.font = Font(bold=True)
        ws.cell(row=row_idx, column=1).fill = _fill(SUMMARY_LABEL_FILL)


def export_filename(kind: str, now: Optional[datetime] = None) -> str:
    stamp = (now or datetime.now()).strftime("%Y%m%d_%H%M%S")
    return f"{kind}_{stamp}.xlsx"
