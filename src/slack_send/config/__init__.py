"""
Module: config
Description: Environment snapshot and input resolution.
"""

from .resolver import resolve_config
from .settings import AuthMode, Config, Environment, Retries, WebhookType

__all__ = [
    "AuthMode",
    "Config",
    "Environment",
    "Retries",
    "WebhookType",
    "resolve_config",
]
