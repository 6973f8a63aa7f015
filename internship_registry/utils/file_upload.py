"""
File Upload Utility - validate and read an uploaded workbook.

Supported formats:
- Excel workbook (.xlsx, .xlsm) read through openpyxl

Max file size comes from settings.max_upload_size_mb.
"""

from fastapi import UploadFile, HTTPException

ALLOWED_EXTENSIONS = {'.xlsx', '.xlsm'}


def get_file_extension(filename: str) -> str:
    """Get lowercase file extension."""
    if '.' not in filename:
        return ''
    return '.' + filename.rsplit('.', 1)[1].lower()


async def read_workbook_upload(file: UploadFile, max_size_mb: int) -> bytes:
    """
    Read the bytes of an uploaded workbook.

    Args:
        file: FastAPI UploadFile
        max_size_mb: size limit in megabytes

    Returns:
        Raw file content

    Raises:
        HTTPException on validation errors (400 bad name/type, 413 too large)
    """
    if not file.filename:
        raise HTTPException(status_code=400, detail="No filename provided.")

    ext = get_file_extension(file.filename)
    if ext not in ALLOWED_EXTENSIONS:
        raise HTTPException(
            status_code=400,
            detail=f"Unsupported file type '{ext}'. Allowed: {', '.join(sorted(ALLOWED_EXTENSIONS))}"
        )

    content = await file.read()

    if len(content) > max_size_mb * 1024 * 1024:
        raise HTTPException(
            status_code=413,
            detail=f"File too large. Maximum size: {max_size_mb}MB"
        )

    return content
