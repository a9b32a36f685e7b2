"""Configuration persistence manager for the string art generator.

This module handles loading and saving of generator settings to/from JSON files.
"""

import json
import logging
from dataclasses import asdict
from pathlib import Path
from typing import Optional, Tuple

from models import CONFIG_FILE, CoverageStrategy, GeneratorConfig, LayoutKind

logger = logging.getLogger(__name__)


class ConfigManager:
    """Handles loading and saving of generator configuration."""

    def __init__(self, config_path: Path = CONFIG_FILE):
        """Initialize config manager.

        Args:
            config_path: Path to configuration file (defaults to ~/.string_art_config.json)
        """
        self.config_path = Path(config_path)

    def load(self) -> GeneratorConfig:
        """Load configuration from file, returning defaults if not found.

        Returns:
            GeneratorConfig with loaded or default values
        """
        config = GeneratorConfig()

        try:
            if self.config_path.exists():
                with open(self.config_path, "r") as f:
                    data = json.load(f)
                    if not isinstance(data, dict):
                        raise ValueError(
                            f"expected a JSON object, got {type(data).__name__}"
                        )
                    # Update config with loaded values (fallback to defaults)
                    config.num_nails = int(data.get("num_nails", config.num_nails))
                    config.layout = LayoutKind(data.get("layout", config.layout.value))
                    config.max_strings = int(data.get("max_strings", config.max_strings))
                    config.coverage_strategy = CoverageStrategy(
                        data.get("coverage_strategy", config.coverage_strategy)
                    )
                    config.contrast_factor = float(
                        data.get("contrast_factor", config.contrast_factor)
                    )
                    config.color_mode = bool(data.get("color_mode", config.color_mode))
                    config.color_order = str(data.get("color_order", config.color_order)).upper()
                    config.strings_per_color = int(
                        data.get("strings_per_color", config.strings_per_color)
                    )
                    config.thread_thickness = str(
                        data.get("thread_thickness", config.thread_thickness)
                    )
                    config.paper_width = float(data.get("paper_width", config.paper_width))
                    config.paper_height = float(data.get("paper_height", config.paper_height))
                    config.workers = int(data.get("workers", config.workers))
                logger.info("Loaded configuration from %s", self.config_path)
        except (OSError, ValueError, TypeError) as e:
            logger.warning("Could not load config file: %s", e)
            config = GeneratorConfig()

        return config

    def save(self, config: GeneratorConfig) -> Tuple[bool, Optional[str]]:
        """Save configuration to file.

        Args:
            config: GeneratorConfig to save

        Returns:
            Tuple of (success: bool, error_message: Optional[str])
        """
        data = asdict(config)
        data["layout"] = config.layout.value
        data["coverage_strategy"] = int(config.coverage_strategy)

        try:
            with open(self.config_path, "w") as f:
                json.dump(data, f, indent=2)
            return True, None
        except OSError as e:
            return False, str(e)
