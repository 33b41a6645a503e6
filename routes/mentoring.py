"""
Mentoring routes for the Campus Portal backend
Handles scheduling, updates, attendance, feedback and cancellation
"""

from flask import Blueprint, g, jsonify

from routes.auth import request_data, roles_required, token_required
from services.events import dispatch_events
from services.mentoring_service import MentoringService

mentoring_bp = Blueprint('mentoring', __name__)

@mentoring_bp.route('', methods=['POST'])
@roles_required('faculty')
def create_session():
    """Schedule a mentoring session for invited students"""
    session, events = MentoringService.create(g.current_user, request_data())
    dispatch_events(events)
    return jsonify({
        'success': True,
        'message': 'Mentoring session scheduled successfully',
        'session': MentoringService.present(session)
    }), 201

@mentoring_bp.route('', methods=['GET'])
@token_required
def list_sessions():
    sessions = [MentoringService.present(s) for s in MentoringService.list_for(g.current_user)]
    return jsonify({'success': True, 'count': len(sessions), 'sessions': sessions})

@mentoring_bp.route('/<session_id>', methods=['GET'])
@token_required
def get_session(session_id):
    session = MentoringService.get_for(g.current_user, session_id)
    return jsonify({'success': True, 'session': MentoringService.present(session)})

@mentoring_bp.route('/<session_id>', methods=['PUT'])
@roles_required('faculty', 'admin')
def update_session(session_id):
    session, events = MentoringService.update(g.current_user, session_id, request_data())
    dispatch_events(events)
    return jsonify({
        'success': True,
        'message': 'Mentoring session updated successfully',
        'session': MentoringService.present(session)
    })

@mentoring_bp.route('/<session_id>/attendance', methods=['PUT'])
@roles_required('student')
def mark_attendance(session_id):
    """Invited student marks themselves as attended"""
    session = MentoringService.mark_attendance(g.current_user, session_id)
    return jsonify({
        'success': True,
        'message': 'Attendance marked successfully',
        'session': MentoringService.present(session)
    })

@mentoring_bp.route('/<session_id>/feedback', methods=['PUT'])
@roles_required('student')
def add_feedback(session_id):
    session = MentoringService.add_feedback(g.current_user, session_id, request_data())
    return jsonify({
        'success': True,
        'message': 'Feedback submitted successfully',
        'session': MentoringService.present(session)
    })

@mentoring_bp.route('/<session_id>', methods=['DELETE'])
@roles_required('faculty', 'admin')
def cancel_session(session_id):
    """Cancel a scheduled session"""
    session, events = MentoringService.cancel(g.current_user, session_id)
    dispatch_events(events)
    return jsonify({
        'success': True,
        'message': 'Mentoring session cancelled successfully',
        'session': MentoringService.present(session)
    })
