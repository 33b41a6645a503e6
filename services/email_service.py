"""
Email service for the Campus Portal backend
Best-effort outbound mail through Flask-Mail
"""

from flask import current_app
from flask_mail import Mail, Message
from markupsafe import escape

mail = Mail()

PORTAL_NAME = 'College Digital Portal'

class EmailService:
    """Outbound email helpers"""

    @staticmethod
    def send(to, subject, html):
        """Send an HTML email; returns False when there is no recipient"""
        if not to:
            current_app.logger.info("Skipping email '%s': no recipient address", subject)
            return False

        msg = Message(subject=subject, recipients=[to], html=html)
        mail.send(msg)
        current_app.logger.info("Email sent to %s: %s", to, subject)
        return True

    @staticmethod
    def assignment_graded(assignment, grade, feedback):
        """Subject and body for a graded submission"""
        subject = f"Assignment Graded: {assignment.title}"
        html = (
            "<h2>Your assignment has been graded!</h2>"
            f"<p><strong>Assignment:</strong> {escape(assignment.title)}</p>"
            f"<p><strong>Grade:</strong> {escape(grade)}</p>"
        )
        if feedback:
            html += f"<p><strong>Feedback:</strong> {escape(feedback)}</p>"
        html += "<p>Login to view more details.</p>"
        return subject, html

    @staticmethod
    def leave_decision(leave_request, reviewer_name):
        """Subject and body for an approved/rejected leave request"""
        status = leave_request.status
        subject = f"Leave Request {status.upper()} - {PORTAL_NAME}"
        html = (
            f"<h2>Leave Request {escape(status.upper())}</h2>"
            f"<p>Dear {escape(leave_request.student.name)},</p>"
            f"<p>Your leave request from {leave_request.start_date:%d %b %Y} to "
            f"{leave_request.end_date:%d %b %Y} has been <strong>{escape(status)}</strong>.</p>"
        )
        if leave_request.comments:
            html += f"<p><strong>Comments:</strong> {escape(leave_request.comments)}</p>"
        html += f"<p>Reviewed by: {escape(reviewer_name)}</p><p>Login to view more details.</p>"
        return subject, html

    @staticmethod
    def mentoring_scheduled(session, student, faculty_name):
        subject = f"Mentoring Session Scheduled - {PORTAL_NAME}"
        items = [
            f"<li><strong>Topic:</strong> {escape(session.topic)}</li>",
            f"<li><strong>Title:</strong> {escape(session.title)}</li>",
            f"<li><strong>Date &amp; Time:</strong> {session.scheduled_date:%d %b %Y %H:%M} UTC</li>",
            f"<li><strong>Duration:</strong> {session.duration} minutes</li>",
        ]
        if session.meeting_link:
            link = escape(session.meeting_link)
            items.append(f'<li><strong>Meeting Link:</strong> <a href="{link}">{link}</a></li>')
        if session.location:
            items.append(f"<li><strong>Location:</strong> {escape(session.location)}</li>")
        html = (
            "<h2>New Mentoring Session Scheduled</h2>"
            f"<p>Dear {escape(student.name)},</p>"
            "<p>A mentoring session has been scheduled with the following details:</p>"
            f"<ul>{''.join(items)}</ul>"
            f"<p>{escape(session.description or '')}</p>"
            f"<p>Faculty: {escape(faculty_name)}</p>"
            "<p>Login to view more details and join the session.</p>"
        )
        return subject, html

    @staticmethod
    def mentoring_cancelled(session, student):
        subject = f"Mentoring Session Cancelled - {PORTAL_NAME}"
        html = (
            "<h2>Mentoring Session Cancelled</h2>"
            f"<p>Dear {escape(student.name)},</p>"
            "<p>The mentoring session with the following details has been cancelled:</p>"
            f"<ul><li><strong>Topic:</strong> {escape(session.topic)}</li>"
            f"<li><strong>Scheduled Date:</strong> {session.scheduled_date:%d %b %Y %H:%M} UTC</li></ul>"
            "<p>Please check the portal for any rescheduled sessions.</p>"
        )
        return subject, html
