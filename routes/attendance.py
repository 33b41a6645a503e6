"""
Attendance routes for the Campus Portal backend
Handles session marking, student views, statistics and export
"""

from flask import Blueprint, g, jsonify, request, send_file

from routes.auth import optional_token, request_data, roles_required
from services.attendance_service import AttendanceService
from services.events import dispatch_events
from services.excel_export_service import ExcelExportService
from utils.time_helpers import utcnow

attendance_bp = Blueprint('attendance', __name__)

XLSX_MIMETYPE = 'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'

@attendance_bp.route('', methods=['POST'])
@roles_required('faculty', 'admin')
def mark_attendance():
    """Mark attendance for one class session"""
    attendance, events = AttendanceService.mark(g.current_user, request_data())
    dispatch_events(events)
    return jsonify({
        'success': True,
        'message': 'Attendance marked successfully',
        'attendance': attendance.to_dict()
    }), 201

@attendance_bp.route('', methods=['GET'])
@optional_token
def list_attendance():
    records = AttendanceService.list_for(g.current_user)
    return jsonify({'success': True, 'count': len(records), 'attendance': records})

@attendance_bp.route('/stats', methods=['GET'])
@roles_required('student')
def attendance_stats():
    return jsonify({'success': True, 'stats': AttendanceService.stats(g.current_user)})

@attendance_bp.route('/students', methods=['GET'])
@roles_required('faculty', 'admin')
def list_students():
    """Students available for marking"""
    students = AttendanceService.students(
        request.args.get('department'), request.args.get('semester')
    )
    return jsonify({'success': True, 'count': len(students), 'students': students})

@attendance_bp.route('/export', methods=['GET'])
@roles_required('faculty', 'admin')
def export_attendance():
    """Download marked attendance as an Excel workbook"""
    sheets = AttendanceService.sheets_for_export(
        g.current_user,
        subject=request.args.get('subject'),
        department=request.args.get('department'),
        semester=request.args.get('semester')
    )
    output = ExcelExportService.export_attendance(sheets)
    filename = f"attendance_{utcnow():%Y%m%d_%H%M%S}.xlsx"
    return send_file(output, mimetype=XLSX_MIMETYPE, as_attachment=True, download_name=filename)
