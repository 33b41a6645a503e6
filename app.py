"""
Campus Portal backend
Main Flask application entry point
"""

import logging
import os

from flask import Flask, jsonify, send_from_directory
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from config import DevelopmentConfig, config_by_name
from database import db, init_db
from services.email_service import mail
from services.events import init_dispatcher
from services.realtime_service import init_realtime, socketio
from utils.errors import ServiceError

def create_app(config_class=None, registry=None, dispatcher=None):
    """Application factory pattern"""
    if config_class is None:
        config_class = config_by_name.get(os.environ.get('APP_ENV', 'development'), DevelopmentConfig)

    app = Flask(__name__)
    app.config.from_object(config_class)
    app.logger.setLevel(getattr(logging, str(app.config.get('LOG_LEVEL', 'INFO')).upper(), logging.INFO))

    # Initialize extensions with app
    db.init_app(app)
    CORS(app, origins=[app.config['FRONTEND_URL']], supports_credentials=True)
    mail.init_app(app)
    init_realtime(app, registry)
    init_dispatcher(app, dispatcher)

    # Register blueprints
    from routes.auth import auth_bp
    from routes.assignments import assignments_bp
    from routes.attendance import attendance_bp
    from routes.leaves import leaves_bp
    from routes.mentoring import mentoring_bp
    from routes.notifications import notifications_bp

    app.register_blueprint(auth_bp, url_prefix='/api/auth')
    app.register_blueprint(assignments_bp, url_prefix='/api/assignments')
    app.register_blueprint(attendance_bp, url_prefix='/api/attendance')
    app.register_blueprint(leaves_bp, url_prefix='/api/leaves')
    app.register_blueprint(mentoring_bp, url_prefix='/api/mentoring')
    app.register_blueprint(notifications_bp, url_prefix='/api/notifications')

    register_error_handlers(app)

    @app.route('/api/health')
    def health():
        return jsonify({'status': 'OK', 'message': 'Server is running'})

    @app.route('/uploads/<path:filename>')
    def uploaded_file(filename):
        return send_from_directory(os.path.abspath(app.config['UPLOAD_FOLDER']), filename)

    # Initialize database
    init_db(app)

    return app

def register_error_handlers(app):
    """Every failure leaves the API as a {success, message, code} envelope"""

    @app.errorhandler(ServiceError)
    def handle_service_error(error):
        db.session.rollback()
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(404)
    def not_found(error):
        return jsonify({'success': False, 'message': 'Route not found', 'code': 'NOT_FOUND'}), 404

    @app.errorhandler(405)
    def method_not_allowed(error):
        return jsonify({'success': False, 'message': 'Method not allowed', 'code': 'METHOD_NOT_ALLOWED'}), 405

    @app.errorhandler(413)
    def too_large(error):
        return jsonify({'success': False, 'message': 'File too large', 'code': 'PAYLOAD_TOO_LARGE'}), 413

    @app.errorhandler(Exception)
    def handle_unexpected(error):
        if isinstance(error, HTTPException):
            return jsonify({'success': False, 'message': error.description, 'code': error.name}), error.code

        db.session.rollback()
        app.logger.exception("Unhandled error")
        message = 'Server error'
        if app.config.get('APP_ENV') != 'production':
            message = str(error) or message
        return jsonify({'success': False, 'message': message, 'code': 'SERVER_ERROR'}), 500

def run_server(app):
    """Serve HTTP and Socket.IO; Werkzeug's dev server is only allowed in debug"""
    socketio.run(app, host='0.0.0.0', port=int(os.environ.get('PORT', 5000)),
                 debug=app.config['DEBUG'], use_reloader=False,
                 allow_unsafe_werkzeug=app.config['DEBUG'])

if __name__ == '__main__':
    run_server(create_app())
