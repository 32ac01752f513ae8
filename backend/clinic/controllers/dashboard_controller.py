"""
Dashboard and finance report endpoints.
"""

from flask import Blueprint, request

from clinic.core.api_utils import api_response, get_services, parse_date
from clinic.core.auth_decorators import jwt_required
from clinic.schemas.dtos import DashboardStatsResponse, FinanceReportResponse

dashboard_bp = Blueprint("dashboard", __name__, url_prefix="/api")


@dashboard_bp.route("/dashboard", methods=["GET"])
@jwt_required
def get_dashboard():
    stats = get_services().dashboard.get_dashboard_stats()
    return api_response(
        True, "Dashboard statistics", DashboardStatsResponse.from_domain(stats).to_dict()
    )


@dashboard_bp.route("/reports", methods=["GET"])
@jwt_required
def get_finance_report():
    """Income report; ``?start=`` and ``?end=`` (YYYY-MM-DD) are optional."""
    start = parse_date(request.args.get("start"), "start")
    end = parse_date(request.args.get("end"), "end")
    report = get_services().dashboard.get_finance_report(start, end)
    return api_response(
        True, "Finance report", FinanceReportResponse.from_domain(report).to_dict()
    )
