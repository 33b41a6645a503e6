"""
File upload helpers: stores multipart files under UPLOAD_FOLDER
"""

import os
import uuid

from flask import current_app
from werkzeug.utils import secure_filename

from utils.errors import ValidationError

def allowed_file(filename):
    """Check the extension against ALLOWED_EXTENSIONS"""
    if not filename or '.' not in filename:
        return False
    extension = filename.rsplit('.', 1)[1].lower()
    return extension in current_app.config['ALLOWED_EXTENSIONS']

def save_upload(file_storage, subfolder):
    """Persist an uploaded file and return (stored_path, original_name)"""
    original_name = file_storage.filename or ''
    if not allowed_file(original_name):
        raise ValidationError(f"File type not allowed: {original_name or 'unnamed file'}")

    safe_name = secure_filename(original_name)
    stored_name = f"{uuid.uuid4().hex}_{safe_name}"
    directory = os.path.join(current_app.config['UPLOAD_FOLDER'], subfolder)
    os.makedirs(directory, exist_ok=True)

    file_storage.save(os.path.join(directory, stored_name))
    # Path relative to the upload root, served under /uploads
    return f"{subfolder}/{stored_name}", original_name

def remove_upload(stored_path):
    """Delete a file previously returned by save_upload"""
    full_path = os.path.join(current_app.config['UPLOAD_FOLDER'], stored_path)
    if os.path.exists(full_path):
        os.remove(full_path)

def save_uploads(files, subfolder):
    """Persist every file or none of them; returns a list of (stored_path, original_name)"""
    saved = []
    try:
        for file_storage in files:
            saved.append(save_upload(file_storage, subfolder))
    except ValidationError:
        discard_uploads(path for path, _ in saved)
        raise
    return saved

def discard_uploads(stored_paths):
    for stored_path in stored_paths:
        remove_upload(stored_path)
