"""
Language registry.

Each supported language ships a module with its rule tables. The profiles
are created when this package is imported and shared read-only afterwards.
"""
from typing import Dict, Optional, Union

from ..errors import UnsupportedLanguageError
from .profile import LanguageProfile, normalize_word, INITIAL_TAGS
from . import catalan, english, spanish

DEFAULT_LANGUAGE = "en"

LANGUAGES: Dict[str, LanguageProfile] = {
    english.PROFILE.code: english.PROFILE,
    spanish.PROFILE.code: spanish.PROFILE,
    catalan.PROFILE.code: catalan.PROFILE,
}


def get_language(language: Optional[Union[str, LanguageProfile]] = None) -> LanguageProfile:
    """
    Resolve a language code (or profile) to its profile.

    Args:
        language: ISO 639-1 code such as 'en', a LanguageProfile, or None for
            the default language.

    Returns:
        The registered LanguageProfile.

    Raises:
        UnsupportedLanguageError: If no profile is registered for the code.
    """
    if isinstance(language, LanguageProfile):
        return language
    code = (language or DEFAULT_LANGUAGE).lower()
    try:
        return LANGUAGES[code]
    except KeyError:
        raise UnsupportedLanguageError(
            f"Unsupported language '{language}'. Available: {', '.join(sorted(LANGUAGES))}"
        ) from None


__all__ = [
    'DEFAULT_LANGUAGE',
    'INITIAL_TAGS',
    'LANGUAGES',
    'LanguageProfile',
    'get_language',
    'normalize_word',
]
