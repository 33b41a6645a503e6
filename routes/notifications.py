"""
Notification routes for the Campus Portal backend
"""

from flask import Blueprint, g, jsonify, request

from routes.auth import token_required
from services.notification_service import NotificationService

notifications_bp = Blueprint('notifications', __name__)

@notifications_bp.route('', methods=['GET'])
@token_required
def list_notifications():
    """Current user's notifications, optionally filtered by read state"""
    is_read = NotificationService.parse_read_filter(request.args.get('isRead'))
    notifications = [n.to_dict() for n in NotificationService.list_for(g.current_user, is_read)]
    return jsonify({'success': True, 'count': len(notifications), 'notifications': notifications})

@notifications_bp.route('/unread-count', methods=['GET'])
@token_required
def unread_count():
    return jsonify({'success': True, 'count': NotificationService.unread_count(g.current_user)})

@notifications_bp.route('/mark-all-read', methods=['PUT'])
@token_required
def mark_all_read():
    updated = NotificationService.mark_all_read(g.current_user)
    return jsonify({'success': True, 'message': 'All notifications marked as read', 'updated': updated})

@notifications_bp.route('/<notification_id>/read', methods=['PUT'])
@token_required
def mark_read(notification_id):
    notification = NotificationService.mark_read(g.current_user, notification_id)
    return jsonify({'success': True, 'notification': notification.to_dict()})

@notifications_bp.route('/<notification_id>', methods=['DELETE'])
@token_required
def delete_notification(notification_id):
    NotificationService.delete(g.current_user, notification_id)
    return jsonify({'success': True, 'message': 'Notification deleted successfully'})
