"""
Run configuration for artwork resolution.

Options come from an optional YAML file, then command-line overrides, then
the environment for the Anthropic API key.
"""

import logging
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Optional

import yaml

from constants import (
    API_REQUEST_TIMEOUT,
    DEFAULT_LLM_MODEL,
    DEFAULT_MAX_WORKERS,
    DEFAULT_REGIONS,
    LIBRETRO_THUMBNAILS_URL,
)
from core.exceptions import ValidationException
from core.models import ArtTypeOption

logger = logging.getLogger(__name__)

# camelCase config file keys and their option names
_KEY_ALIASES = {
    "aiModel": "ai_model",
    "type": "art_type",
    "artType": "art_type",
    "baseUrl": "base_url",
    "maxWorkers": "max_workers",
    "anthropicApiKey": "anthropic_api_key",
}


@dataclass
class ResolverOptions:
    """Options consumed by the resolver and the resolve command."""

    ai: bool = False
    ai_model: str = DEFAULT_LLM_MODEL
    regions: list[str] = field(default_factory=lambda: list(DEFAULT_REGIONS))
    force: bool = False
    art_type: ArtTypeOption = ArtTypeOption.BOXART
    base_url: str = LIBRETRO_THUMBNAILS_URL
    max_workers: int = DEFAULT_MAX_WORKERS
    timeout: Optional[float] = API_REQUEST_TIMEOUT
    anthropic_api_key: Optional[str] = field(default=None, repr=False)

    def validate(self) -> None:
        """
        Validate and normalize option values.

        Raises:
            ValidationException: If an option is invalid
        """
        for name in ("ai", "force"):
            if not isinstance(getattr(self, name), bool):
                raise ValidationException(f"Must be true or false, got {getattr(self, name)!r}", name)

        if not isinstance(self.art_type, ArtTypeOption):
            self.art_type = ArtTypeOption.parse(self.art_type)

        if isinstance(self.regions, str):
            self.regions = [region.strip() for region in self.regions.split(",") if region.strip()]
        if not isinstance(self.regions, list) or not all(isinstance(r, str) for r in self.regions):
            raise ValidationException(f"Must be a list of region names, got {self.regions!r}", "regions")
        if not self.regions:
            raise ValidationException("At least one region is required", "regions")

        if not isinstance(self.ai_model, str) or not self.ai_model.strip():
            raise ValidationException(f"Model name must be a non-empty string, got {self.ai_model!r}", "ai_model")

        if isinstance(self.max_workers, bool) or not isinstance(self.max_workers, int) or self.max_workers < 1:
            raise ValidationException(f"Must be a positive integer, got {self.max_workers!r}", "max_workers")

        if self.timeout is not None:
            if isinstance(self.timeout, bool) or not isinstance(self.timeout, (int, float)):
                raise ValidationException(f"Must be a number of seconds, got {self.timeout!r}", "timeout")
            if self.timeout <= 0:
                raise ValidationException(f"Must be positive, got {self.timeout!r}", "timeout")

        if not isinstance(self.base_url, str) or not self.base_url.startswith(("http://", "https://")):
            raise ValidationException(f"Not an HTTP URL: {self.base_url}", "base_url")

        if self.anthropic_api_key is not None and not isinstance(self.anthropic_api_key, str):
            raise ValidationException("Must be a string", "anthropic_api_key")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ResolverOptions":
        """
        Create options from a mapping, accepting camelCase aliases.

        Raises:
            ValidationException: If a key is unknown or a value invalid
        """
        known = {f.name for f in fields(cls)}
        values = {}
        for key, value in data.items():
            name = _KEY_ALIASES.get(key, key)
            if name not in known:
                raise ValidationException(f"Unknown option: {key}", "config")
            values[name] = value

        options = cls(**values)
        options.validate()
        return options


def load_options(
    config_file: Optional[Path] = None,
    overrides: Optional[dict[str, Any]] = None,
) -> ResolverOptions:
    """
    Load resolver options.

    Args:
        config_file: Optional YAML file with option values
        overrides: Values taking precedence over the file (None values are ignored)

    Returns:
        Validated ResolverOptions

    Raises:
        ValidationException: If the file is unreadable or a value invalid
    """
    data: dict[str, Any] = {}

    if config_file is not None:
        if not config_file.exists():
            raise ValidationException(f"File not found: {config_file}", "config")
        try:
            with open(config_file, "r", encoding="utf-8") as f:
                loaded = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValidationException(f"Invalid YAML in {config_file}: {e}", "config") from e

        if loaded is None:
            logger.debug(f"Config file {config_file} is empty")
        elif not isinstance(loaded, dict):
            raise ValidationException(f"Expected a mapping in {config_file}", "config")
        else:
            for key, value in loaded.items():
                data[_KEY_ALIASES.get(key, key)] = value
            logger.info(f"Loaded {len(loaded)} options from {config_file}")

    for key, value in (overrides or {}).items():
        if value is not None:
            data[_KEY_ALIASES.get(key, key)] = value

    options = ResolverOptions.from_dict(data)
    if not options.anthropic_api_key:
        options.anthropic_api_key = os.getenv("ANTHROPIC_API_KEY")
    return options
