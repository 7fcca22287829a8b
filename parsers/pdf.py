import io
import logging

import fitz  # PyMuPDF

logger = logging.getLogger(__name__)


def pdf_to_text(source) -> str:
    """
    Extract text from a PDF.
    Accepts a file path (str), the raw PDF bytes, or a file-like object such as an upload.
    Returns an empty string when the document can't be read.
    """

    try:
        if isinstance(source, str):
            doc = fitz.open(source)
        else:
            file_bytes = source if isinstance(source, (bytes, bytearray)) else source.read()
            doc = fitz.open(stream=io.BytesIO(file_bytes), filetype="pdf")

        with doc:
            text = "\n".join(page.get_text("text") for page in doc)
        return text.strip()

    except Exception as e:
        logger.warning("PDF extraction failed: %s", e)
        return ""
