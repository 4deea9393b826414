import importlib
from pathlib import Path
from typing import Optional, Dict, Type, Any, Iterable, Union
from expense_ai.ocr.base import OcrEngine
from expense_ai.config.settings import ConfigLoader

class OcrEngineFactory:
    """
    Factory for creating OCR engines.

    Uses a registry pattern to map engine names to OcrEngine classes,
    and file extensions to engine names.
    """

    _locked = False
    _registry: Dict[str, Type[OcrEngine]] = {}
    _extensions: Dict[str, str] = {}
    _options: Dict[str, Dict[str, Any]] = {}
    _default_engine: Optional[str] = None

    @classmethod
    def register(
        cls,
        name: str,
        engine_class: Type[OcrEngine],
        extensions: Optional[Iterable[str]] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> None:
        """
        Register an OCR engine

        Args:
            name: Unique identifier for the engine (e.g, 'tesseract', 'pdf')
            engine_class: The engine class
            extensions: File suffixes routed to this engine.
                Defaults to the class's own `extensions`.
            options: Keyword arguments passed to the engine on creation

        Raises:
            ValueError: If engine or one of its extensions is already registered
            TypeError: If engine_class doesn't inherit from OcrEngine
            RuntimeError: If the engine registry is locked

        Example:
            OcrEngineFactory.register('tesseract', TesseractOcrEngine)
        """

        if cls._locked:
            raise RuntimeError("Registry is locked, cannot add more engines")

        if name in cls._registry:
            raise ValueError(f"Engine '{name}' is already registered")

        if not isinstance(engine_class, type) or not issubclass(engine_class, OcrEngine):
            raise TypeError(f"{engine_class} must inherit from OcrEngine")

        if extensions is None:
            extensions = engine_class.extensions

        normalized = [ext.lower() for ext in extensions]
        for ext in normalized:
            if ext in cls._extensions:
                raise ValueError(
                    f"Extension '{ext}' is already handled by '{cls._extensions[ext]}'"
                )

        cls._registry[name] = engine_class
        for ext in normalized:
            cls._extensions[ext] = name
        cls._options[name] = dict(options or {})

    @classmethod
    def lock_registry(cls):
        """Prevent further registration (call after app initialization)"""
        cls._locked = True

    @classmethod
    def reset(cls):
        """Empty and unlock the registry"""
        cls._locked = False
        cls._registry = {}
        cls._extensions = {}
        cls._options = {}
        cls._default_engine = None

    @classmethod
    def create_engine(cls, name: Optional[str] = None) -> OcrEngine:
        """
        Create an engine instance.

        Args:
            name: Engine identifier (e.g., 'tesseract', 'pdf').
                Falls back to the configured default engine.

        Returns:
            Instantiated engine ready to use

        Raises:
            ValueError: If no engine registered under this name

        Example:
            engine = OcrEngineFactory.create_engine('tesseract')
            text = engine.extract_text('receipt.jpg')
        """
        name = name or cls._default_engine
        if name not in cls._registry:
            available = ', '.join(cls._registry.keys())
            raise ValueError(
                f"No OCR engine registered for '{name}'. "
                f"Available engines: {available}"
            )

        return cls._registry[name](**cls._options.get(name, {}))

    @classmethod
    def engine_for_file(cls, filepath: Union[str, Path]) -> OcrEngine:
        """
        Create the engine registered for a file's extension.

        Raises:
            ValueError: If no engine handles the extension
        """
        suffix = Path(filepath).suffix.lower()
        if suffix not in cls._extensions:
            supported = ', '.join(sorted(cls._extensions))
            raise ValueError(
                f"No OCR engine handles '{suffix or Path(filepath).name}'. "
                f"Supported extensions: {supported}"
            )

        return cls.create_engine(cls._extensions[suffix])

    @classmethod
    def get_available_engines(cls) -> list[str]:
        """Return list of all registered engine names"""
        return list(cls._registry.keys())

    @classmethod
    def load_engines_from_config(
        cls,
        config: Optional[Dict[str, Any]] = None
    ) -> None:
        """
        Load and register engines from configuration

        Args:
            config: Optional config dict. If None, loads from ConfigLoader.
                Useful for testing with custom configs.

            Example (production):
                OcrEngineFactory.load_engines_from_config()

            Example (testing):
                test_config = {"engines": [...]}
                OcrEngineFactory.load_engines_from_config(config=test_config)
        """
        if config is None:
            config = ConfigLoader.load_ocr_engines_config()

        for engine_config in config['engines']:
            name = engine_config['name']
            module_path, class_name = str(engine_config['class']).rsplit('.', 1)
            module = importlib.import_module(module_path)
            engine_class = getattr(module, class_name)

            cls.register(
                name,
                engine_class,
                extensions=engine_config.get('extensions'),
                options=config.get(name),
            )

        cls._default_engine = config.get('default_engine')
        cls.lock_registry()
