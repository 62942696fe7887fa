"""Utility functions for upload handling."""

import re
from pathlib import Path

from designdesk.core.modules.asset.models import UploadFile
from designdesk.errors import ValidationError

DEFAULT_MAX_UPLOAD_SIZE = 10 * 1024 * 1024

DESIGN_UPLOAD_TYPES = frozenset({"image/jpeg", "image/png", "image/webp", "application/pdf"})


def sanitize_filename(filename: str) -> str:
    """Sanitize filename before it becomes part of an upload or blob path.

    Removes dangerous characters, prevents path traversal, and handles edge cases
    while preserving readability and file extensions.

    Args:
        filename: Original filename from user

    Returns:
        Sanitized filename safe for storage paths
    """
    # Drop directory components (either separator) to prevent traversal
    filename = Path(filename.replace("\\", "/")).name

    # Remove leading dots to prevent hidden files
    filename = filename.lstrip(".")

    # Allow only word characters, spaces, dots, and hyphens
    sanitized = re.sub(r"[^\w\s.-]", "_", filename)
    sanitized = re.sub(r"_+", "_", sanitized)
    sanitized = re.sub(r"\s+", " ", sanitized)

    # Limit length to 100 characters while preserving extension
    if len(sanitized) > 100:
        parts = sanitized.rsplit(".", 1)
        if len(parts) == 2:
            name, ext = parts
            max_name_len = 96 - len(ext)
            sanitized = f"{name[:max_name_len]}.{ext}" if max_name_len > 0 else f"file.{ext}"
        else:
            sanitized = sanitized[:100]

    # Nothing meaningful left
    if not sanitized or not re.sub(r"[\s._-]", "", sanitized):
        sanitized = "unnamed_file"

    return sanitized


def validate_upload(
    file: UploadFile,
    max_size: int = DEFAULT_MAX_UPLOAD_SIZE,
    allowed_types: frozenset[str] = DESIGN_UPLOAD_TYPES,
) -> None:
    """Reject files that are empty, too large, or of an unsupported type.

    Raises:
        ValidationError: With a message naming the file and the problem
    """
    if file.size == 0:
        raise ValidationError(f"{file.filename}: File is empty.")
    if file.size > max_size:
        raise ValidationError(f"{file.filename}: File too large. Maximum size is {format_file_size(max_size)}.")
    if file.mime_type not in allowed_types:
        raise ValidationError(f"{file.filename}: File type '{file.mime_type}' not supported.")


def format_file_size(size: int) -> str:
    """Human-readable size in Bytes, KB or MB."""
    if size == 0:
        return "0 Bytes"
    for unit, factor in (("MB", 1024 * 1024), ("KB", 1024)):
        if size >= factor:
            return f"{round(size / factor, 2):g} {unit}"
    return f"{size} Bytes"
