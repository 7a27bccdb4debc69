"""
Validation and download helpers for attachments stored as database blobs.
"""
from django.conf import settings
from django.http import HttpResponse

from config.exceptions import ServiceValidationError

ALLOWED_CONTENT_TYPES = {
    'application/pdf',
    'image/jpeg',
    'image/png',
    'image/gif',
    'application/msword',
    'application/vnd.openxmlformats-officedocument.wordprocessingml.document',
    'application/vnd.ms-excel',
    'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet',
    'text/plain',
    'text/csv',
}


def read_upload(uploaded_file, *, restrict_types=True):
    """
    Validate an uploaded file and return its metadata and bytes.

    Args:
        uploaded_file: Django UploadedFile (or None)
        restrict_types: Only accept document / image / spreadsheet types

    Returns:
        Tuple of (file_name, content_type, file_size, content)

    Raises:
        ServiceValidationError: If the file is missing, empty, too large
            or of a type that is not allowed
    """
    if uploaded_file is None:
        raise ServiceValidationError("File is required")

    if uploaded_file.size == 0:
        raise ServiceValidationError("File is empty")

    max_size = settings.MAX_UPLOAD_SIZE
    if uploaded_file.size > max_size:
        raise ServiceValidationError(
            f"File size exceeds maximum allowed size of {max_size // (1024 * 1024)}MB"
        )

    content_type = uploaded_file.content_type or 'application/octet-stream'
    if restrict_types and content_type not in ALLOWED_CONTENT_TYPES:
        raise ServiceValidationError(
            "File type not allowed. Allowed types: PDF, images, Word, Excel, text, CSV"
        )

    return uploaded_file.name, content_type, uploaded_file.size, uploaded_file.read()


def blob_response(file_obj, *, inline=False):
    """Build an HttpResponse streaming a stored attachment."""
    response = HttpResponse(bytes(file_obj.content), content_type=file_obj.content_type)
    disposition = 'inline' if inline else 'attachment'
    response['Content-Disposition'] = f'{disposition}; filename="{file_obj.file_name}"'
    response['Content-Length'] = str(file_obj.file_size)
    return response
