from pathlib import Path
from typing import Union

from expense_ai.ocr.base import OcrEngine, OcrError


class PlainTextEngine(OcrEngine):
    """Engine for receipts whose text was already recognized elsewhere."""

    extensions = (".txt",)

    def __init__(self, encoding: str = "utf-8"):
        self.encoding = encoding

    def extract_text(self, filepath: Union[str, Path]) -> str:
        path = self.validate_file(filepath)

        try:
            return path.read_text(encoding=self.encoding)
        except UnicodeDecodeError as e:
            raise OcrError(f"{path.name} is not valid {self.encoding} text") from e
