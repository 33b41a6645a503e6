"""
Assignment routes for the Campus Portal backend
Handles assignment distribution, submission and grading
"""

from flask import Blueprint, g, jsonify, request

from routes.auth import optional_token, request_data, roles_required, token_required
from services.assignment_service import AssignmentService
from services.events import dispatch_events

assignments_bp = Blueprint('assignments', __name__)

@assignments_bp.route('', methods=['POST'])
@roles_required('faculty', 'admin')
def create_assignment():
    """Create an assignment for a department and semester"""
    user = g.current_user
    assignment, events = AssignmentService.create(user, request_data(), request.files.getlist('attachments'))
    dispatch_events(events)
    return jsonify({
        'success': True,
        'assignment': AssignmentService.present(assignment, user.id)
    }), 201

@assignments_bp.route('', methods=['GET'])
@optional_token
def list_assignments():
    assignments = AssignmentService.list_for(g.current_user)
    return jsonify({'success': True, 'count': len(assignments), 'assignments': assignments})

@assignments_bp.route('/<assignment_id>', methods=['GET'])
@token_required
def get_assignment(assignment_id):
    user = g.current_user
    assignment = AssignmentService.get_for(user, assignment_id)
    return jsonify({'success': True, 'assignment': AssignmentService.present(assignment, user.id)})

@assignments_bp.route('/<assignment_id>/submit', methods=['POST'])
@roles_required('student')
def submit_assignment(assignment_id):
    """Upload the student's submission file"""
    user = g.current_user
    assignment, events = AssignmentService.submit(user, assignment_id, request.files.get('file'))
    dispatch_events(events)
    return jsonify({
        'success': True,
        'message': 'Assignment submitted successfully',
        'assignment': AssignmentService.present(assignment, user.id)
    })

@assignments_bp.route('/<assignment_id>/grade/<submission_id>', methods=['PUT'])
@roles_required('faculty', 'admin')
def grade_submission(assignment_id, submission_id):
    user = g.current_user
    assignment, events = AssignmentService.grade(user, assignment_id, submission_id, request_data())
    dispatch_events(events)
    return jsonify({
        'success': True,
        'message': 'Submission graded successfully',
        'assignment': AssignmentService.present(assignment, user.id)
    })

@assignments_bp.route('/<assignment_id>', methods=['DELETE'])
@roles_required('faculty', 'admin')
def delete_assignment(assignment_id):
    AssignmentService.delete(g.current_user, assignment_id)
    return jsonify({'success': True, 'message': 'Assignment deleted successfully'})
