"""Configuration settings using Pydantic Settings.

Provides typed configuration with environment variable support for the
classification cache.

Usage:
    from clonekit.config import ClassifierSettings
    from clonekit.classify import TypeClassifier

    # Load from environment variables (CLONEKIT_*)
    settings = ClassifierSettings()
    classifier = TypeClassifier.from_settings(settings)

    # Or override with explicit values
    settings = ClassifierSettings(opaque_types=["decimal:Decimal"])
"""

from __future__ import annotations

try:
    from pydantic_settings import BaseSettings, SettingsConfigDict
except ImportError as e:
    raise ImportError(
        "pydantic-settings is required for config module. "
        "Install with: pip install clonekit[config]"
    ) from e


class ClassifierSettings(BaseSettings):  # type: ignore[misc]
    """Configuration for the type classification cache.

    Attributes:
        builtin_opaque: Register datetime.datetime and FieldValue as opaque.
        opaque_types: Extra record types copied by value, as `module:QualName`
            or dotted `module.Name` import paths.
        warn_on_inconsistent: Warn when a concurrently computed classification
            differs from the stored one.

    Environment Variables:
        CLONEKIT_BUILTIN_OPAQUE
        CLONEKIT_OPAQUE_TYPES (JSON list)
        CLONEKIT_WARN_ON_INCONSISTENT
    """

    model_config = SettingsConfigDict(
        env_prefix="CLONEKIT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    builtin_opaque: bool = True
    opaque_types: list[str] = []
    warn_on_inconsistent: bool = True
