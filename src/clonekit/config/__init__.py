"""Configuration module using Pydantic Settings.

Provides typed configuration for the classifier with environment variable support.

Usage:
    from clonekit.config import ClassifierSettings

    settings = ClassifierSettings(builtin_opaque=False)
"""

from clonekit.config.settings import ClassifierSettings

__all__ = [
    "ClassifierSettings",
]
