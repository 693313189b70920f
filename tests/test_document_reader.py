"""
Unit tests for document text extraction
"""
import io
from unittest.mock import MagicMock, patch

import pytest
from docx import Document

from docqa.services.document_reader import (
    DocumentDecodeError,
    document_format,
    extract_text,
)


class TestDocumentFormat:
    @pytest.mark.parametrize("filename,kind", [
        ("paper.pdf", "pdf"),
        ("PAPER.PDF", "pdf"),
        ("notes.docx", "docx"),
        ("notes.txt", "text"),
        ("README", "text"),
        ("", "text"),
    ])
    def test_dispatch_by_extension(self, filename, kind):
        assert document_format(filename) == kind


class TestExtractText:
    def test_plain_text_ignores_bad_bytes(self):
        assert extract_text("notes.txt", "café".encode("utf-8") + b"\xff") == "café"

    @patch("docqa.services.document_reader.PdfReader")
    def test_pdf_pages_joined(self, mock_reader_cls):
        first, second = MagicMock(), MagicMock()
        first.extract_text.return_value = "Page one."
        second.extract_text.return_value = None
        mock_reader = MagicMock(is_encrypted=False, pages=[first, second])
        mock_reader_cls.return_value = mock_reader

        assert extract_text("doc.pdf", b"%PDF-fake") == "Page one.\n"

    def test_corrupt_pdf_raises(self):
        with pytest.raises(DocumentDecodeError, match="Failed to parse PDF document"):
            extract_text("doc.pdf", b"garbage")

    def test_corrupt_docx_raises(self):
        with pytest.raises(DocumentDecodeError, match="Failed to parse DOCX document"):
            extract_text("doc.docx", b"garbage")

    def test_docx_paragraphs_and_tables(self):
        doc = Document()
        doc.add_paragraph("First paragraph.")
        doc.add_paragraph("Second paragraph.")
        table = doc.add_table(rows=1, cols=2)
        table.rows[0].cells[0].text = "A"
        table.rows[0].cells[1].text = "B"
        buf = io.BytesIO()
        doc.save(buf)

        text = extract_text("doc.docx", buf.getvalue())
        assert text.strip() == "First paragraph.\nSecond paragraph.\nA\nB"
