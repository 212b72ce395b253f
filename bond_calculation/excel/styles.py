# styles.py
# Purpose: Shared OpenPyXL styles and helpers for the bond workbook

from __future__ import annotations

from openpyxl.styles import Border, Font, NamedStyle, PatternFill, Side


header_font = Font(bold=True, color="FFFFFF")
header_fill = PatternFill(start_color="366092", end_color="366092", fill_type="solid")
input_fill = PatternFill(start_color="E6F3FF", end_color="E6F3FF", fill_type="solid")
highlight_fill = PatternFill(start_color="FFE6CC", end_color="FFE6CC", fill_type="solid")
title_font = Font(bold=True, size=14)
total_font = Font(bold=True)

border = Border(
    left=Side(style='thin'),
    right=Side(style='thin'),
    top=Side(style='thin'),
    bottom=Side(style='thin'),
)

CURRENCY_FORMAT = '#,##0.00'
PERCENT_FORMAT = '0.00"%"'
DATE_FORMAT = 'yyyy-mm-dd'


def style_header_row(ws, row: int, n_columns: int) -> None:
    for col in range(1, n_columns + 1):
        cell = ws.cell(row=row, column=col)
        cell.font = header_font
        cell.fill = header_fill
        cell.border = border


def ensure_named_styles(wb) -> None:
    """Install named styles once per workbook.

    wb.named_styles can hold NamedStyle objects or plain names, so both are
    normalized to strings before the membership check.
    """
    existing = set()
    for item in wb.named_styles:
        existing.add(getattr(item, 'name', str(item)))

    if 'currency_style' not in existing:
        currency_style = NamedStyle(name='currency_style')
        currency_style.number_format = CURRENCY_FORMAT
        wb.add_named_style(currency_style)
