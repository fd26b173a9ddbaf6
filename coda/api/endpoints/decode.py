from fastapi import APIRouter, File, HTTPException, Query, UploadFile
from pydantic import BaseModel
from typing import List, Optional

from coda.common.logging_config import get_logger, set_source
from coda.parsing.exceptions import DecodeError
from coda.parsing.facade import CodaParser

logger = get_logger(__name__)
router = APIRouter()


class DecodeErrorOut(BaseModel):
    line_no: Optional[int] = None
    record_kind: Optional[str] = None
    field_name: Optional[str] = None
    raw: Optional[str] = None
    reason: str
    error_type: str


def _error_out(e: DecodeError) -> DecodeErrorOut:
    return DecodeErrorOut(
        line_no=e.line_no,
        record_kind=e.record_kind.name if e.record_kind is not None else None,
        field_name=e.field_name,
        raw=e.raw,
        reason=e.reason,
        error_type=type(e).__name__,
    )


@router.post("/")
async def decode_file(file: UploadFile = File(...), strict: bool = Query(True)):
    """
    Decode an uploaded CODA file.
    Returns the decoded records, the per-line errors and the statement metadata.
    """
    set_source(file.filename)
    logger.info(f"CODA upload started: {file.filename}")
    content = await file.read()

    parser = CodaParser()
    try:
        result = parser.parse_records(content, strict=strict)
    except DecodeError as e:
        logger.warning(f"CODA decode rejected: {e}")
        raise HTTPException(status_code=400, detail=_error_out(e).model_dump())
    finally:
        set_source(None)

    errors: List[DecodeErrorOut] = [_error_out(e) for e in result.errors]
    return {
        "filename": file.filename,
        "records": [r.to_dict() for r in result.records],
        "errors": [e.model_dump() for e in errors],
        "skipped": result.skipped,
        "metadata": parser.metadata(result.records),
    }
