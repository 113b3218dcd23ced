"""
Config module - Default settings for the Shopify Storefront sourcer.
"""

from .settings import DEFAULT_SETTINGS, PROVIDER_NAME

__all__ = [
    'DEFAULT_SETTINGS',
    'PROVIDER_NAME',
]
