
class WordsModuleDefaultConfig:
    # Target languages a word pair can be drilled in.
    LANGUAGE_NAMES = {
        'en-US': 'English',
        'es-ES': 'Spanish',
        'fr-FR': 'French',
        'de-DE': 'German',
        'it-IT': 'Italian',
        'pt-PT': 'Portuguese',
        'sv-SE': 'Swedish',
    }
    FALLBACK_LANGUAGE_NAME = 'the target language'


def get_language_name(language_code: str) -> str:
    """Human-readable name for *language_code*."""
    return WordsModuleDefaultConfig.LANGUAGE_NAMES.get(
        language_code, WordsModuleDefaultConfig.FALLBACK_LANGUAGE_NAME
    )
