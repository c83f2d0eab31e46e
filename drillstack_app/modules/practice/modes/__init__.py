"""
Practice Modes Package
======================
Mode registry used by ``PracticeHub``.
"""

from .factory import ModeFactory

__all__ = ['ModeFactory']
