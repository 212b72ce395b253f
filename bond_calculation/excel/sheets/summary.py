# sheets/summary.py
# Purpose: Build the Summary sheet with headline metrics and solver diagnostics

from __future__ import annotations

from openpyxl import Workbook

from ...models import BondCalculationResult, PremiumDiscount
from ..styles import CURRENCY_FORMAT, PERCENT_FORMAT, highlight_fill, style_header_row, title_font


def add_summary_sheet(wb: Workbook, result: BondCalculationResult) -> None:
    ws = wb.create_sheet("Summary")
    ws.append(["BOND METRICS SUMMARY"])
    ws['A1'].font = title_font
    ws.append([])

    ws.append(["Metric", "Value", "Notes"])
    style_header_row(ws, 3, 3)

    ytm_value = result.yield_to_maturity if result.yield_to_maturity is not None else "N/A"
    solver = result.solver
    if solver is None:
        solver_note = ""
    elif solver.converged:
        solver_note = f"{solver.method}, {solver.iterations} iterations"
    else:
        solver_note = "Did not converge"

    rows = [
        ("Current Yield (%)", result.current_yield, "Annual coupon / market price", PERCENT_FORMAT),
        ("Yield to Maturity (%)", ytm_value, solver_note, PERCENT_FORMAT),
        ("Total Interest", result.total_interest, "Undiscounted sum of coupons", CURRENCY_FORMAT),
        ("Premium / Discount", result.premium_discount.value, "Market price vs face value", None),
        ("Premium/Discount Amount", result.discount_amount, "Absolute price difference", CURRENCY_FORMAT),
        ("Coupon Periods", len(result.cash_flows), "", None),
    ]

    for row, (label, value, note, fmt) in enumerate(rows, start=4):
        ws.append([label, value, note])
        if fmt and isinstance(value, (int, float)):
            ws.cell(row=row, column=2).number_format = fmt

    if result.premium_discount != PremiumDiscount.PAR:
        ws.cell(row=7, column=2).fill = highlight_fill
