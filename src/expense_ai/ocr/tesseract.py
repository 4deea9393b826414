import logging
from pathlib import Path
from typing import Union

import pytesseract
from PIL import Image

from expense_ai.ocr.base import OcrEngine, OcrError

logger = logging.getLogger(__name__)


class TesseractOcrEngine(OcrEngine):
    """
    OCR engine for photographed receipts, backed by Tesseract.

    Requires the tesseract binary on PATH (or configured through
    pytesseract.pytesseract.tesseract_cmd).
    """

    extensions = (".png", ".jpg", ".jpeg", ".tif", ".tiff", ".bmp", ".webp")

    def __init__(self, language: str = "eng"):
        """
        Args:
            language: Tesseract language code used for recognition
        """
        self.language = language

    def extract_text(self, filepath: Union[str, Path]) -> str:
        path = self.validate_file(filepath)

        logger.debug("Running tesseract (%s) on %s", self.language, path)
        try:
            with Image.open(path) as image:
                return pytesseract.image_to_string(image, lang=self.language)
        except (pytesseract.TesseractError, OSError) as e:
            # OSError covers a missing tesseract binary and unreadable images
            raise OcrError(f"Tesseract could not read {path.name}: {e}") from e

    def __repr__(self):
        return f"TesseractOcrEngine(language='{self.language}')"
