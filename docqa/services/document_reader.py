"""
Plain-text extraction from uploaded documents
"""
import io

import structlog
from docx import Document
from pypdf import PdfReader

logger = structlog.get_logger()


class DocumentDecodeError(Exception):
    """Raised when an uploaded file cannot be decoded to text."""


def document_format(filename: str) -> str:
    name = (filename or "").lower()
    if name.endswith(".pdf"):
        return "pdf"
    if name.endswith(".docx"):
        return "docx"
    return "text"


def extract_text_from_pdf(content: bytes) -> str:
    try:
        reader = PdfReader(io.BytesIO(content))
        if reader.is_encrypted:
            reader.decrypt("")
        text_parts = []
        for page in reader.pages:
            text_parts.append(page.extract_text() or "")
        return "\n".join(text_parts)
    except Exception as e:
        logger.error("pdf_parse_failed", error=str(e))
        raise DocumentDecodeError("Failed to parse PDF document") from e


def extract_text_from_docx(content: bytes) -> str:
    """Paragraph text followed by table cell text."""
    try:
        doc = Document(io.BytesIO(content))
        text = [p.text for p in doc.paragraphs]
        for table in doc.tables:
            for row in table.rows:
                for cell in row.cells:
                    text.append(cell.text)
        return "\n".join(text)
    except Exception as e:
        logger.error("docx_parse_failed", error=str(e))
        raise DocumentDecodeError("Failed to parse DOCX document") from e


def extract_text(filename: str, content: bytes) -> str:
    kind = document_format(filename)
    if kind == "pdf":
        text = extract_text_from_pdf(content)
    elif kind == "docx":
        text = extract_text_from_docx(content)
    else:
        text = content.decode("utf-8", errors="ignore")
    logger.info("document_extracted", filename=filename, format=kind, chars=len(text))
    return text
