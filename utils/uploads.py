"""
Media store for code screenshots.

Files are named after a digest of their bytes, so uploading the same
image twice yields the same reference.
"""
import hashlib
import logging
import os
from flask import current_app
from werkzeug.utils import secure_filename
from utils.errors import ValidationError, InternalError

logger = logging.getLogger(__name__)

ALLOWED_MIME_TYPES = {
    'image/jpeg': ('jpg', 'jpeg'),
    'image/png': ('png',),
    'image/gif': ('gif',),
    'image/webp': ('webp',),
}

DEFAULT_MAX_UPLOAD_BYTES = 5 * 1024 * 1024  # 5MB


def _extension_for(file_storage) -> str:
    allowed = ALLOWED_MIME_TYPES[file_storage.mimetype]
    filename = secure_filename(file_storage.filename or '')
    ext = filename.rsplit('.', 1)[-1].lower() if '.' in filename else ''
    if not ext:
        return allowed[0]
    if ext not in allowed:
        raise ValidationError(
            f"File extension '.{ext}' does not match content type {file_storage.mimetype}"
        )
    return ext


def save_image(file_storage, user_id: int) -> dict:
    """
    Validate an uploaded image and store it under UPLOAD_FOLDER.

    Returns the public ``url`` and stored ``filename``.
    """
    if file_storage is None or not file_storage.filename:
        raise ValidationError("No image file provided")

    if file_storage.mimetype not in ALLOWED_MIME_TYPES:
        raise ValidationError("Invalid file type. Only JPEG, PNG, GIF, and WebP are allowed")

    ext = _extension_for(file_storage)

    max_bytes = current_app.config.get('MAX_UPLOAD_BYTES', DEFAULT_MAX_UPLOAD_BYTES)
    data = file_storage.read(max_bytes + 1)
    if not data:
        raise ValidationError("Uploaded file is empty")
    if len(data) > max_bytes:
        raise ValidationError(f"File size must be less than {max_bytes // (1024 * 1024)}MB")

    digest = hashlib.sha256(data).hexdigest()[:32]
    filename = f"code_{user_id}_{digest}.{ext}"

    upload_dir = current_app.config['UPLOAD_FOLDER']
    filepath = os.path.join(upload_dir, filename)

    try:
        os.makedirs(upload_dir, exist_ok=True)
        if not os.path.exists(filepath):
            with open(filepath, 'wb') as fh:
                fh.write(data)
    except OSError as e:
        logger.error(f"Failed to store upload {filename}: {str(e)}")
        raise InternalError("Failed to upload file") from e

    logger.info(f"Stored upload {filename} ({len(data)} bytes) for user {user_id}")
    return {
        'url': f"/uploads/{filename}",
        'filename': filename,
    }
