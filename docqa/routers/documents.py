from typing import Optional

from fastapi import APIRouter, File, HTTPException, Request, UploadFile
import structlog

from docqa.config import MAX_UPLOAD_BYTES
from docqa.middleware.rate_limit import upload_limit
from docqa.models import UploadResponse
from docqa.services.document_reader import DocumentDecodeError, document_format, extract_text
from docqa.services.monitoring import DOCUMENTS_UPLOADED

logger = structlog.get_logger()

router = APIRouter(prefix="/api", tags=["documents"])


@router.post("/upload", response_model=UploadResponse)
@upload_limit()
async def upload_document(request: Request, file: Optional[UploadFile] = File(None)):
    """Extract plain text from an uploaded PDF, DOCX or text file"""
    if file is None or not file.filename:
        raise HTTPException(status_code=400, detail="No file uploaded")

    content = await file.read()
    kind = document_format(file.filename)
    logger.info("file_received", filename=file.filename, size=len(content))

    if len(content) > MAX_UPLOAD_BYTES:
        DOCUMENTS_UPLOADED.labels(format=kind, status="too_large").inc()
        raise HTTPException(status_code=413, detail="File exceeds the upload size limit")

    try:
        text = extract_text(file.filename, content)
    except DocumentDecodeError as e:
        logger.error("document_upload_failed", filename=file.filename, error=str(e))
        DOCUMENTS_UPLOADED.labels(format=kind, status="error").inc()
        raise HTTPException(status_code=500, detail="Failed to process document")

    DOCUMENTS_UPLOADED.labels(format=kind, status="success").inc()
    return {"content": text}
