from codearena.data.schemas import Language
from codearena.errors import UnsupportedLanguageException

JUDGE0_LANGUAGE_IDS = {
    Language.CPP: 54,
    Language.C: 50,
    Language.PYTHON: 71,
    Language.JAVA: 62,
    Language.JAVASCRIPT: 63,
}

ALIASES = {
    "c++": Language.CPP,
}

FALLBACK_LANGUAGE_ID = JUDGE0_LANGUAGE_IDS[Language.JAVASCRIPT]


def normalize_language(name: str) -> Language:
    key = (name or "").strip().lower()
    if key in ALIASES:
        return ALIASES[key]
    try:
        return Language(key)
    except ValueError:
        raise UnsupportedLanguageException(name)


def get_language_id(name: str, strict: bool = True) -> int:
    """
    Judge0 language id for a language name, ignoring case.

    Unknown names raise UnsupportedLanguageException unless ``strict`` is
    False, in which case the JavaScript id is returned.
    """
    try:
        return JUDGE0_LANGUAGE_IDS[normalize_language(name)]
    except UnsupportedLanguageException:
        if strict:
            raise
        return FALLBACK_LANGUAGE_ID
