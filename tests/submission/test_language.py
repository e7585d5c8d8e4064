import pytest
from fastapi import status

from codearena.business.services import get_language_id
from codearena.business.services.language import FALLBACK_LANGUAGE_ID, normalize_language
from codearena.data.schemas import Language
from codearena.errors import UnsupportedLanguageException


@pytest.mark.parametrize(
    "name, language_id",
    [
        ("cpp", 54),
        ("c++", 54),
        ("c", 50),
        ("python", 71),
        ("java", 62),
        ("javascript", 63),
    ],
)
def test_supported_languages(name, language_id):
    assert get_language_id(name) == language_id


@pytest.mark.parametrize("name", ["Python", "PYTHON", " python ", "PyThOn\n"])
def test_lookup_ignores_case_and_whitespace(name):
    assert get_language_id(name) == 71


def test_cpp_alias_normalizes_to_cpp():
    assert normalize_language("C++") == Language.CPP


@pytest.mark.parametrize("name", ["rust", "", "py", "node"])
def test_unknown_language_is_rejected(name):
    with pytest.raises(UnsupportedLanguageException) as exc_info:
        get_language_id(name)

    assert exc_info.value.status_code == status.HTTP_400_BAD_REQUEST
    assert exc_info.value.error == "unsupported_language"


def test_unknown_language_falls_back_when_not_strict():
    assert get_language_id("rust", strict=False) == FALLBACK_LANGUAGE_ID == 63
    assert get_language_id("java", strict=False) == 62
