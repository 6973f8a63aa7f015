"""
Spreadsheet reader for the internship import.

The first row of the sheet is the header; every following non-blank row
becomes one dict keyed by header. Cells keep the type openpyxl gives them
(dtype=object), empty cells become None.
"""

import io
import zipfile
from typing import Any, Dict, List

import pandas as pd
from openpyxl.utils.exceptions import InvalidFileException

from internship_registry.core.exceptions import SheetNotFoundError, WorkbookError
from internship_registry.core.logging import get_logger

logger = get_logger(__name__)


def read_sheet(content: bytes, sheet_name: str) -> List[Dict[str, Any]]:
    """
    Read one worksheet from .xlsx bytes.

    Raises:
        SheetNotFoundError: workbook has no sheet called sheet_name
        WorkbookError: bytes are not a readable workbook
    """
    if not content:
        raise WorkbookError("The uploaded file is empty.")

    try:
        excel = pd.ExcelFile(io.BytesIO(content), engine="openpyxl")
    except (zipfile.BadZipFile, InvalidFileException, KeyError) as e:
        # KeyError: a zip archive without the workbook parts
        raise WorkbookError("The uploaded file is not a valid .xlsx workbook.") from e

    with excel:
        if sheet_name not in excel.sheet_names:
            raise SheetNotFoundError(sheet_name)
        df = excel.parse(sheet_name, dtype=object)

    df = df.dropna(how="all")
    df.columns = [str(c).strip() for c in df.columns]
    df = df.astype(object).where(pd.notna(df), None)

    rows = df.to_dict(orient="records")
    logger.info("sheet_read", sheet=sheet_name, rows=len(rows))
    return rows
