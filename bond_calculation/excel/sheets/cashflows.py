# sheets/cashflows.py
# Purpose: Build the Cashflows sheet

from __future__ import annotations

from typing import List

import pandas as pd
from openpyxl import Workbook
from openpyxl.utils.dataframe import dataframe_to_rows

from ...models import CashFlow
from ..styles import CURRENCY_FORMAT, DATE_FORMAT, border, style_header_row, total_font

CASHFLOW_COLUMNS = [
    "Period",
    "Payment Date",
    "Coupon Payment",
    "Cumulative Interest",
    "Remaining Principal",
]


def cash_flows_to_frame(cash_flows: List[CashFlow]) -> pd.DataFrame:
    """Tabulate the schedule, one row per period."""
    rows = [
        (cf.period, cf.payment_date, cf.coupon_payment, cf.cumulative_interest, cf.remaining_principal)
        for cf in cash_flows
    ]
    return pd.DataFrame(rows, columns=CASHFLOW_COLUMNS)


def add_cashflows_sheet(wb: Workbook, cash_flows: List[CashFlow]) -> None:
    ws = wb.create_sheet("Cashflows")
    df = cash_flows_to_frame(cash_flows)

    for row in dataframe_to_rows(df, index=False, header=True):
        ws.append(row)
    style_header_row(ws, 1, len(CASHFLOW_COLUMNS))

    last_data_row = len(df) + 1
    for row in ws.iter_rows(min_row=2, max_row=last_data_row):
        row[1].number_format = DATE_FORMAT
        for cell in row[2:]:
            cell.number_format = CURRENCY_FORMAT
        for cell in row:
            cell.border = border

    if len(df):
        total_row = last_data_row + 1
        ws.append(["Total Interest Paid", None, f"=SUM(C2:C{last_data_row})"])
        ws.cell(row=total_row, column=1).font = total_font
        total_cell = ws.cell(row=total_row, column=3)
        total_cell.font = total_font
        total_cell.number_format = CURRENCY_FORMAT
