"""
Upload Routes

POST /upload - Import the internship spreadsheet (multipart field "file")
"""

from typing import Optional

from fastapi import APIRouter, HTTPException, File, Request, UploadFile

from internship_registry.core.config import get_settings
from internship_registry.core.exceptions import ImportFileError
from internship_registry.core.logging import get_logger
from internship_registry.db.database import Database
from internship_registry.schemas.schemas import MessageResponse
from internship_registry.services.bulk_import import import_rows, parse_rows
from internship_registry.services.spreadsheet import read_sheet
from internship_registry.utils.file_upload import read_workbook_upload

logger = get_logger(__name__)

router = APIRouter(tags=["Upload"])


@router.post("/upload", response_model=MessageResponse)
async def upload_workbook(request: Request, file: Optional[UploadFile] = File(None)):
    """
    Import every row of the "Datos" sheet in one transaction.

    The file is fully validated before a database connection is taken, so
    400 answers never touch the database. Any failure while writing rolls
    the whole file back.
    """
    settings = get_settings()

    if file is None:
        raise HTTPException(status_code=400, detail="No file was uploaded.")

    content = await read_workbook_upload(file, settings.max_upload_size_mb)

    try:
        rows = parse_rows(read_sheet(content, settings.upload_sheet_name))
    except ImportFileError as e:
        raise HTTPException(status_code=400, detail=str(e))

    database: Database = request.app.state.database
    connection = None
    try:
        connection = await database.connect()
        summary = await import_rows(connection, rows)
    except Exception:
        logger.exception("upload_failed", filename=file.filename)
        raise HTTPException(status_code=500, detail="Error inserting into the database.")
    finally:
        if connection is not None:
            await connection.release()

    logger.info("upload_imported", filename=file.filename, rows=summary.rows)
    return MessageResponse(message="File processed and imported into the database successfully.")
