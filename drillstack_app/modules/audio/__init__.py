# File: drillstack_app/modules/audio/__init__.py
from .interface import LanguageService
from .services.audio_service import AudioService

__all__ = ['AudioService', 'LanguageService']
