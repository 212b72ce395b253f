"""
views/bond_views.py
Purpose: Flask blueprint exposing the bond analytics engine over HTTP.

Routes:
- POST /api/bond/calculate: validate the five bond parameters and return yields,
  premium/discount status and the cash-flow schedule as JSON.
- POST /api/bond/export: same calculation, streamed back as an Excel workbook.

Both accept an optional ``valuationDate`` (YYYY-MM-DD); the schedule is projected
from today when it is omitted.
"""

from __future__ import annotations

import io
from datetime import date, datetime
from typing import Any, List, Optional, Tuple

from flask import Blueprint, current_app, jsonify, request, send_file

from bond_calculation.engine import calculate_bond, result_to_dict
from bond_calculation.excel.workbook import build_workbook
from bond_calculation.models import BondInput, FieldError
from bond_calculation.validation import errors_to_dicts, validate_bond_payload
from core.utils import time_api_calls

bond_bp = Blueprint("bond_bp", __name__, url_prefix="/api/bond")

_VALUATION_DATE_FIELD = "valuationDate"


def _parse_valuation_date(payload: Any) -> Tuple[Optional[date], List[FieldError]]:
    if not isinstance(payload, dict) or payload.get(_VALUATION_DATE_FIELD) in (None, ""):
        return None, []
    raw = payload[_VALUATION_DATE_FIELD]
    try:
        return datetime.strptime(str(raw).strip(), "%Y-%m-%d").date(), []
    except ValueError:
        return None, [FieldError(_VALUATION_DATE_FIELD, "valuationDate must be a date in YYYY-MM-DD format")]


def _read_request() -> Tuple[Optional[BondInput], date, List[FieldError]]:
    payload = request.get_json(force=True, silent=True)
    bond, errors = validate_bond_payload(payload, allowed_extra=(_VALUATION_DATE_FIELD,))
    valuation_date, date_errors = _parse_valuation_date(payload)
    errors = errors + date_errors
    return bond, valuation_date or date.today(), errors


def _validation_failed(errors: List[FieldError]) -> Any:
    current_app.logger.info(f"Rejected bond request: {[e.field for e in errors]}")
    return (
        jsonify(
            {
                "status": "error",
                "message": "Validation failed",
                "errors": errors_to_dicts(errors),
            }
        ),
        400,
    )


@bond_bp.route("/calculate", methods=["POST"])
@time_api_calls
def api_calculate_bond() -> Any:
    """Compute bond analytics and return JSON for the results view and cash-flow table."""
    try:
        bond, valuation_date, errors = _read_request()
        if errors:
            return _validation_failed(errors)

        result = calculate_bond(bond, valuation_date)
        current_app.logger.info(
            f"Calculated bond: face={bond.face_value} price={bond.market_price} "
            f"ytm={result.yield_to_maturity} periods={len(result.cash_flows)}"
        )
        return jsonify(result_to_dict(result)), 200
    except Exception as e:
        current_app.logger.error(f"Bond calculation error: {e}", exc_info=True)
        return jsonify({"status": "error", "message": str(e)}), 500


@bond_bp.route("/export", methods=["POST"])
@time_api_calls
def api_export_bond() -> Any:
    """Run the calculation and return it as an .xlsx attachment."""
    try:
        bond, valuation_date, errors = _read_request()
        if errors:
            return _validation_failed(errors)

        result = calculate_bond(bond, valuation_date)
        wb = build_workbook(bond, result, valuation_date)

        buffer = io.BytesIO()
        wb.save(buffer)
        buffer.seek(0)

        out_name = f"bond_calc_{valuation_date.strftime('%Y-%m-%d')}.xlsx"
        current_app.logger.info(f"Exporting bond workbook {out_name}")
        return send_file(
            buffer,
            as_attachment=True,
            download_name=out_name,
            mimetype=current_app.config.get(
                "XLSX_MIMETYPE",
                "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
            ),
        )
    except Exception as e:
        current_app.logger.error(f"Excel generation error: {e}", exc_info=True)
        return jsonify({"status": "error", "message": str(e)}), 500
