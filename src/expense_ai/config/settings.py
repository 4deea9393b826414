import os
from pathlib import Path
import json
from typing import Dict, Any

# Package defaults (bundled with code)
PACKAGE_CONFIG_DIR = Path(__file__).parent / "defaults"

# User configs (in project root, gitignored)
PROJECT_ROOT = Path(__file__).parent.parent.parent.parent
USER_CONFIG_DIR = PROJECT_ROOT / "config"

CONFIG_DIR_ENV_VAR = "EXPENSE_AI_CONFIG_DIR"


def get_user_config_dir() -> Path:
    """User config directory, overridable through EXPENSE_AI_CONFIG_DIR"""
    override = os.environ.get(CONFIG_DIR_ENV_VAR)
    if override:
        return Path(override)
    return USER_CONFIG_DIR


class ConfigLoader:
    """Load configuration with user overrides"""

    @staticmethod
    def load_config(config_name: str) -> Dict[str, Any]:
        """
        Load config with fallback: user config -> default config

        Args:
            config_name: Name of the config file (e.g., 'categories.json')

        Raises:
            FileNotFoundError: If no config file was found

        Returns:
            Parsed JSON configuration
        """
        user_config_path = get_user_config_dir() / config_name
        if user_config_path.exists():
            with open(user_config_path, encoding="utf-8") as f:
                return json.load(f)

        default_config_path = PACKAGE_CONFIG_DIR / config_name
        if default_config_path.exists():
            with open(default_config_path, encoding="utf-8") as f:
                return json.load(f)

        raise FileNotFoundError(
            f"Config file '{config_name}' not found in:\n"
            f" - {user_config_path}\n"
            f" - {default_config_path}"
        )

    @staticmethod
    def load_taxonomy_config() -> Dict[str, Any]:
        """Load the category taxonomy configuration"""
        return ConfigLoader.load_config('categories.json')

    @staticmethod
    def load_ocr_engines_config() -> Dict[str, Any]:
        """Load OCR engine registry configuration"""
        return ConfigLoader.load_config('ocr_engines.json')

    @staticmethod
    def load_reporting_config() -> Dict[str, Any]:
        """Load reporting (aggregation view) configuration"""
        return ConfigLoader.load_config('reporting.json')
