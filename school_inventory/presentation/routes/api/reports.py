from flask import jsonify
from flask_login import login_required

from school_inventory.presentation.routes.api import api_bp
from school_inventory.services.report_service import ReportService


@api_bp.get('/reports/dashboard')
@login_required
def dashboard_stats():
    return jsonify(ReportService.dashboard_stats().to_dict())


@api_bp.get('/reports/usage')
@login_required
def usage_report():
    return jsonify([row.to_dict() for row in ReportService.usage_report()])
