# sheets/input_parameters.py
# Purpose: Build the Input_Parameters sheet

from __future__ import annotations

from datetime import date

from openpyxl import Workbook

from ...models import BondInput
from ..styles import CURRENCY_FORMAT, input_fill, style_header_row, title_font


def add_input_parameters_sheet(wb: Workbook, bond: BondInput, valuation_date: date) -> None:
    ws = wb.create_sheet("Input_Parameters")
    ws.append(["INPUT PARAMETERS"])
    ws['A1'].font = title_font
    ws.append([])

    ws.append(["Parameter", "Value", "Description"])
    style_header_row(ws, 3, 3)

    params = [
        ("Face Value", bond.face_value, "Par value repaid at maturity"),
        ("Coupon Rate (%)", bond.coupon_rate, "Nominal annual coupon rate"),
        ("Market Price", bond.market_price, "Current trading price"),
        ("Years to Maturity", bond.years_to_maturity, "Time to maturity in years"),
        ("Coupon Frequency", bond.coupon_frequency.value, "Coupon payments per year"),
        ("Valuation Date", valuation_date.strftime('%Y-%m-%d'), "Schedule projected from this date"),
    ]

    for row, (param, value, desc) in enumerate(params, start=4):
        ws.append([param, value, desc])
        cell = ws.cell(row=row, column=2)
        cell.fill = input_fill
        if param in ("Face Value", "Market Price"):
            cell.number_format = CURRENCY_FORMAT
