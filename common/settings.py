"""Shared application settings read from environment variables."""

import os

TRUTHY = {'1', 'true', 'yes', 'on'}

CONFIG_PATH: str = os.environ.get('MDSITE_CONFIG', 'assets/config/site.json')
POSTS_PATH: str = os.environ.get('MDSITE_POSTS', 'assets/posts')
MEDIA_PATH: str = os.environ.get('MDSITE_MEDIA', 'assets/media')
EXPORT_PATH: str = os.environ.get('MDSITE_EXPORT', 'dist')
LISTEN_ADDR: str = os.environ.get('MDSITE_LISTEN', ':4000')
DEBUG: bool = os.environ.get('MDSITE_DEBUG', '').strip().lower() in TRUTHY
