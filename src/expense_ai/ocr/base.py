from abc import ABC, abstractmethod
from pathlib import Path
from typing import Tuple, Union


class OcrError(Exception):
    """Raised when an engine cannot recover text from a receipt file."""
    pass


class OcrEngine(ABC):
    """
    Abstract base class for all OCR engines.

    This implements the Strategy pattern - each kind of receipt file
    gets its own concrete engine that implements this interface.
    """

    # File suffixes this engine accepts (lowercase, with dot)
    extensions: Tuple[str, ...] = ()

    @abstractmethod
    def extract_text(self, filepath: Union[str, Path]) -> str:
        """
        Recover all text from a receipt file.

        Args:
            filepath: Path to the receipt file

        Returns:
            The recognized text; may be empty

        Raises:
            FileNotFoundError: If file doesn't exist
            ValueError: If the file type is not supported
            OcrError: If the engine fails on the file
        """
        pass

    def validate_file(self, filepath: Union[str, Path]) -> Path:
        """
        Validate that the file exists and has a supported suffix.

        Args:
            filepath: Path to the receipt file

        Returns:
            The file as a Path

        Raises:
            FileNotFoundError: If file doesn't exist
            ValueError: If the suffix is not one of this engine's extensions
        """
        path = Path(filepath)

        if not path.exists():
            raise FileNotFoundError(f"File does not exist on path {path}")

        if self.extensions and path.suffix.lower() not in self.extensions:
            raise ValueError(
                f"{self.__class__.__name__} supports {', '.join(self.extensions)}, "
                f"got {path.suffix or 'no extension'}"
            )

        return path

    def __repr__(self):
        return f"{self.__class__.__name__}()"
