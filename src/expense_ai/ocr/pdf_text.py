import logging
from pathlib import Path
from typing import Union

import pdfplumber

from expense_ai.ocr.base import OcrEngine, OcrError

logger = logging.getLogger(__name__)


class PdfTextEngine(OcrEngine):
    """
    Text engine for digital PDF receipts (e-mailed invoices, web orders).

    Reads the embedded text layer page by page; no image recognition.
    A scanned PDF without a text layer yields empty text.
    """

    extensions = (".pdf",)

    def extract_text(self, filepath: Union[str, Path]) -> str:
        path = self.validate_file(filepath)

        try:
            with pdfplumber.open(path) as pdf:
                pages = [page.extract_text() or "" for page in pdf.pages]
        except Exception as e:
            raise OcrError(f"Could not read PDF {path.name}: {e}") from e

        logger.debug("Read %d page(s) from %s", len(pages), path)
        return "\n".join(pages)
