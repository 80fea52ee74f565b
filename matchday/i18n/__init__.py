"""
Localization for the presentation layer (zh / en).
"""

from .l10n import AppLanguage, L10n

__all__ = ['AppLanguage', 'L10n']
