# Path: config/settings.py
# Purpose: Provide typed application configuration models.
# Layer: config.
# Details: Centralizes wallet paths, extra sources, preview generation, and search parameters.

from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, field_validator

from core.errors import ConfigLoadError
from core.models.domain import ExtraSource

logger = logging.getLogger(__name__)


class ExtraSourceSettings(BaseModel):
    """A directory outside the wallet scanned into its own group."""

    model_config = ConfigDict(populate_by_name=True)

    path: Path = Field(description="Directory to scan (immediate children only).")
    name_filter: str = Field(
        default=".*",
        validation_alias=AliasChoices("name_filter", "nameFilter", "nameRegex"),
        description="Case-insensitive regular expression searched in each file name.",
    )
    group_name: str = Field(
        validation_alias=AliasChoices("group_name", "groupName", "pocketName"),
        description="Name of the group produced for this source.",
    )

    @field_validator("name_filter")
    @classmethod
    def _check_pattern(cls, value: str) -> str:
        try:
            re.compile(value)
        except re.error as exc:
            raise ValueError(f"invalid name filter {value!r}: {exc}") from exc
        return value

    def to_source(self) -> ExtraSource:
        return ExtraSource(path=self.path, group_name=self.group_name, name_filter=self.name_filter)


class PreviewSettings(BaseModel):
    """Settings controlling still-frame previews for video files."""

    enabled: bool = Field(default=True, description="Generate previews for video entries.")
    directory: Path = Field(default=Path("storage/previews"), description="Where generated previews are cached.")
    ffmpeg_binary: str = Field(default="ffmpeg", description="Executable used to extract video frames.")
    timeout_seconds: float = Field(default=30.0, gt=0, description="Upper bound for a single frame extraction.")


class SearchSettings(BaseModel):
    """Settings for query evaluation and result pagination."""

    page_size: int = Field(default=50, ge=1, description="Number of results shown per page.")
    synonyms_path: Optional[Path] = Field(default=None, description="JSON file mapping phrases to alias lists.")


class AppSettings(BaseModel):
    """Top-level application settings shared across services and interfaces."""

    model_config = ConfigDict(populate_by_name=True)

    root_dir: Path = Field(default=Path("storage/wallet"), description="Wallet root containing media and pockets.")
    extra_sources: List[ExtraSourceSettings] = Field(
        default_factory=list,
        validation_alias=AliasChoices("extra_sources", "extraSources", "hardcodedPaths"),
        description="Additional directories merged into the catalog as groups.",
    )
    suppress_read_errors: bool = Field(default=False, description="Hide per-item read failures from consumers.")
    scan_workers: int = Field(default=8, ge=1, description="Concurrent item inspections per directory.")
    previews: PreviewSettings = Field(default_factory=PreviewSettings)
    search: SearchSettings = Field(default_factory=SearchSettings)
    api_enabled: bool = Field(default=False, description="Flag indicating if the HTTP API should be initialized.")
    log_level: str = Field(default="INFO", description="Verbosity level for application logs.")

    @classmethod
    def load_from_file(cls, path: Path | str) -> "AppSettings":
        """Load settings from a JSON file, falling back to defaults for anything unusable.

        A missing file yields the defaults. Malformed JSON yields the defaults.
        Fields that fail validation are dropped one by one so the remaining
        valid fields still take effect.
        """

        cfg_path = Path(path)
        if not cfg_path.exists():
            logger.info("No settings file at %s, using defaults", cfg_path)
            return cls()

        try:
            payload = json.loads(cfg_path.read_text(encoding="utf-8"))
            if not isinstance(payload, dict):
                raise ConfigLoadError(f"Settings file {cfg_path} must contain a JSON object")
        except (OSError, json.JSONDecodeError, ConfigLoadError) as exc:
            logger.error("Error loading settings: %s", exc)
            return cls()

        try:
            return cls.model_validate(payload)
        except ValidationError as exc:
            logger.error("Invalid settings in %s: %s", cfg_path, exc)
            return cls._salvage(payload)

    @classmethod
    def _salvage(cls, payload: Dict[str, Any]) -> "AppSettings":
        """Keep every top-level field that validates on its own."""

        kept: Dict[str, Any] = {}
        for key, value in payload.items():
            try:
                cls.model_validate({key: value})
            except ValidationError:
                logger.warning("Ignoring invalid setting %r", key)
                continue
            kept[key] = value

        # Extra sources are salvaged entry by entry.
        for key in ("extra_sources", "extraSources", "hardcodedPaths"):
            raw = payload.get(key)
            if key in kept or not isinstance(raw, list):
                continue
            sources = []
            for item in raw:
                try:
                    sources.append(ExtraSourceSettings.model_validate(item))
                except ValidationError as exc:
                    logger.warning("Ignoring invalid extra source %r: %s", item, exc)
            kept[key] = sources
        return cls.model_validate(kept)

    def sources(self) -> List[ExtraSource]:
        """Return the configured extra sources as domain objects."""

        return [source.to_source() for source in self.extra_sources]


__all__ = ["AppSettings", "ExtraSourceSettings", "PreviewSettings", "SearchSettings"]
