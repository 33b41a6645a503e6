"""
Leave routes for the Campus Portal backend
"""

from flask import Blueprint, g, jsonify, request

from routes.auth import request_data, roles_required, token_required
from services.events import dispatch_events
from services.leave_service import LeaveService

leaves_bp = Blueprint('leaves', __name__)

@leaves_bp.route('', methods=['POST'])
@roles_required('student')
def create_leave():
    """File a leave request with optional attachments"""
    leave_request, events = LeaveService.create(
        g.current_user, request_data(), request.files.getlist('attachments')
    )
    dispatch_events(events)
    return jsonify({
        'success': True,
        'message': 'Leave request submitted successfully',
        'leave': leave_request.to_dict()
    }), 201

@leaves_bp.route('', methods=['GET'])
@token_required
def list_leaves():
    leaves = [leave.to_dict() for leave in LeaveService.list_for(g.current_user)]
    return jsonify({'success': True, 'count': len(leaves), 'leaves': leaves})

@leaves_bp.route('/<leave_id>', methods=['GET'])
@token_required
def get_leave(leave_id):
    leave_request = LeaveService.get_for(g.current_user, leave_id)
    return jsonify({'success': True, 'leave': leave_request.to_dict()})

@leaves_bp.route('/<leave_id>', methods=['PUT'])
@roles_required('faculty', 'admin')
def review_leave(leave_id):
    """Approve or reject a pending request"""
    leave_request, events = LeaveService.review(g.current_user, leave_id, request_data())
    dispatch_events(events)
    return jsonify({
        'success': True,
        'message': f'Leave request {leave_request.status} successfully',
        'leave': leave_request.to_dict()
    })

@leaves_bp.route('/<leave_id>', methods=['DELETE'])
@roles_required('student')
def delete_leave(leave_id):
    LeaveService.delete(g.current_user, leave_id)
    return jsonify({'success': True, 'message': 'Leave request deleted successfully'})
