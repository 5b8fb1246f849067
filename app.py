from flask import Flask, request, jsonify, send_file
from io import BytesIO
import logging
import os
from datetime import date

from timepay.api.mock_attendance import MockAttendanceAPI
from timepay.config.settings import CURRENCY_SYMBOL, DEBUG, DEFAULT_HOURLY_RATE, LOG_LEVEL, SECRET_KEY
from timepay.database.db import init_db, SessionLocal
from timepay.database.repository import PayrollRepository
from timepay.exceptions import InvalidPeriod, ProfileNotFound
from timepay.models.period import PayPeriod
from timepay.models.policy import build_policy
from timepay.processors.monthly_summary_generator import MonthlySummaryGenerator
from timepay.processors.payroll_calculator import PayrollService
from timepay.processors.payslip_generator import PayslipGenerator
from timepay.utils.validators import validate_employee_id

logging.basicConfig(
    level=getattr(logging, LOG_LEVEL),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

app = Flask(__name__)
app.config['SECRET_KEY'] = SECRET_KEY
app.config['DEBUG'] = DEBUG

POLICY = build_policy(default_hourly_rate=DEFAULT_HOURLY_RATE)

CSV_MIMETYPE = 'text/csv; charset=utf-8'

init_db()


def requested_period():
    """Period from the ?period=YYYY-MM query string, current month if absent"""
    value = request.args.get('period')
    if not value:
        return PayPeriod.containing(date.today())
    return PayPeriod.parse(value)


def csv_download(data, filename):
    return send_file(
        BytesIO(data),
        mimetype=CSV_MIMETYPE,
        as_attachment=True,
        download_name=filename
    )

# ============================================================================
# Error handlers
# ============================================================================

@app.errorhandler(ProfileNotFound)
def handle_profile_not_found(error):
    return jsonify({
        'success': False,
        'message': f'Cannot compute payroll: {error}'
    }), 404

@app.errorhandler(InvalidPeriod)
def handle_invalid_period(error):
    return jsonify({
        'success': False,
        'message': str(error)
    }), 400

# ============================================================================
# API Endpoints
# ============================================================================

@app.route('/api/employees')
def get_employees():
    """Get list of employees with an employment profile"""
    db = SessionLocal()
    try:
        repo = PayrollRepository(db)
        employees = [
            {
                'employee_id': emp.id,
                'full_name': emp.full_name,
                'role': emp.role,
                'employment_type': emp.employment_type
            }
            for emp in repo.get_all_employees()
        ]
    finally:
        db.close()
    return jsonify(employees)

@app.route('/api/payroll/summary')
def get_payroll_summary():
    """Bulk CSV for all (or ?employee_ids=A,B) employees"""
    period = requested_period()

    db = SessionLocal()
    try:
        repo = PayrollRepository(db)
        ids_param = request.args.get('employee_ids')
        if ids_param:
            employee_ids = [value.strip() for value in ids_param.split(',') if value.strip()]
        else:
            employee_ids = [emp.id for emp in repo.get_all_employees()]

        run = PayrollService(repo, POLICY).compute_all(period, employee_ids)
    finally:
        db.close()

    generator = MonthlySummaryGenerator()
    response = csv_download(
        generator.render(run.results, period),
        f'monthly_summary_{period.year}_{period.month:02d}.csv'
    )
    if run.excluded:
        response.headers['X-Excluded-Employees'] = ','.join(run.excluded)
    return response

@app.route('/api/payroll/<employee_id>')
def get_payroll(employee_id):
    """Payroll result for one employee as JSON"""
    if not validate_employee_id(employee_id):
        return jsonify({'success': False, 'message': f'Invalid employee ID: {employee_id}'}), 400
    period = requested_period()

    db = SessionLocal()
    try:
        result = PayrollService(PayrollRepository(db), POLICY).compute_payroll(employee_id, period)
    finally:
        db.close()

    return jsonify({
        'success': True,
        'currency': CURRENCY_SYMBOL,
        'payroll': result.to_dict()
    })

@app.route('/api/payroll/<employee_id>/payslip')
def download_payslip(employee_id):
    """Payslip CSV for one employee"""
    if not validate_employee_id(employee_id):
        return jsonify({'success': False, 'message': f'Invalid employee ID: {employee_id}'}), 400
    period = requested_period()

    db = SessionLocal()
    try:
        result = PayrollService(PayrollRepository(db), POLICY).compute_payroll(employee_id, period)
    finally:
        db.close()

    generator = PayslipGenerator()
    return csv_download(generator.render(result), generator.filename(result))

@app.route('/api/demo/seed', methods=['POST'])
def seed_demo_data():
    """Load mock attendance data for a period into the database"""
    data = request.get_json(silent=True) or {}
    period = PayPeriod.parse(data['period']) if data.get('period') else requested_period()

    db = SessionLocal()
    try:
        counts = MockAttendanceAPI().seed_repository(PayrollRepository(db), period)
    finally:
        db.close()

    logger.info("Seeded demo data for %s: %s", period, counts)
    return jsonify({
        'success': True,
        'message': f'Demo data loaded for {period}',
        'counts': counts
    })

if __name__ == '__main__':
    port = int(os.getenv('PORT', 5000))
    app.run(host='0.0.0.0', port=port, debug=app.config['DEBUG'])
