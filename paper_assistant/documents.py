"""Turn a dropped file into paper text."""

from pathlib import Path

import fitz  # PyMuPDF

MAX_FILE_BYTES = 50 * 1024 * 1024


def extract_text_from_pdf(pdf_bytes: bytes) -> str:
    doc = fitz.open(stream=pdf_bytes, filetype="pdf")
    pages = [page.get_text() for page in doc]
    doc.close()
    return "\n\n".join(pages)


def read_paper_file(path: str | Path) -> str:
    data = Path(path).read_bytes()
    if len(data) > MAX_FILE_BYTES:
        raise ValueError("File too large (>50MB)")
    if data[:5] == b"%PDF-":
        return extract_text_from_pdf(data)
    return data.decode("utf-8", errors="replace")
