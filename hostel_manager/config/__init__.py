"""
Configuration package for the hostel manager.

Environment settings are loaded once and shared through ``settings``.
"""

from hostel_manager.config.settings import Settings, get_settings, settings

__all__ = ['Settings', 'get_settings', 'settings']
