# workbook.py
# Purpose: Orchestrate Excel workbook creation from bond inputs and calculation results

from __future__ import annotations

import logging
from datetime import date

from openpyxl import Workbook

from ..models import BondCalculationResult, BondInput
from .sheets.cashflows import add_cashflows_sheet
from .sheets.input_parameters import add_input_parameters_sheet
from .sheets.summary import add_summary_sheet
from .styles import ensure_named_styles

logger = logging.getLogger(__name__)


def build_workbook(bond: BondInput, result: BondCalculationResult, valuation_date: date) -> Workbook:
    wb = Workbook()
    wb.remove(wb.active)
    ensure_named_styles(wb)

    add_summary_sheet(wb, result)
    add_input_parameters_sheet(wb, bond, valuation_date)
    add_cashflows_sheet(wb, result.cash_flows)

    for ws in wb.worksheets:
        ws.column_dimensions['A'].width = 25
        ws.column_dimensions['B'].width = 20
        ws.column_dimensions['C'].width = 22
        ws.column_dimensions['D'].width = 22
        ws.column_dimensions['E'].width = 22

    # Totals are formulas; ask Excel to recalculate on open
    wb.calculation.fullCalcOnLoad = True
    return wb


def write_workbook(
    bond: BondInput, result: BondCalculationResult, valuation_date: date, output_path: str
) -> str:
    wb = build_workbook(bond, result, valuation_date)
    wb.save(output_path)
    logger.info(f"Bond workbook written to {output_path} ({len(result.cash_flows)} periods)")
    return output_path
