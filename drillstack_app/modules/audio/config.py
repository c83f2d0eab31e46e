# File: drillstack_app/modules/audio/config.py

class AudioModuleDefaultConfig:
    AUDIO_DEFAULT_ENGINE = "gtts"
    # Format: 'language_code': 'engine:voice'
    AUDIO_VOICE_MAPPING_GLOBAL = {
        'en-US': 'edge:en-US-AriaNeural',
        'es-ES': 'edge:es-ES-ElviraNeural',
        'fr-FR': 'edge:fr-FR-DeniseNeural',
        'de-DE': 'edge:de-DE-KatjaNeural',
        'it-IT': 'edge:it-IT-ElsaNeural',
        'pt-PT': 'edge:pt-PT-RaquelNeural',
        'sv-SE': 'edge:sv-SE-SofieNeural',
    }
    # Raw PCM cached by older word stores: 24 kHz, 16-bit, mono.
    AUDIO_PCM_SAMPLE_RATE = 24000
    AUDIO_PCM_SAMPLE_WIDTH = 2
    AUDIO_PCM_CHANNELS = 1
