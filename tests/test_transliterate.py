"""Tests for IAST/Devanagari transliteration."""

import pytest

from kosha.services.transliterate import (
    devanagari_to_iast,
    iast_to_devanagari,
    iast_to_slp,
    is_devanagari,
    slp_to_devanagari,
    to_search_terms,
)

WORD_PAIRS = [
    ("a", "अ"),
    ("ka", "क"),
    ("ki", "कि"),
    ("ku", "कु"),
    ("kā", "का"),
    ("kṛ", "कृ"),
    ("ke", "के"),
    ("ko", "को"),
    ("kai", "कै"),
    ("kau", "कौ"),
    ("ṃ", "ं"),
    ("ḥ", "ः"),
    ("saṃskṛta", "संस्कृत"),
    ("namaste", "नमस्ते"),
    ("yoga", "योग"),
    ("dharma", "धर्म"),
    ("karma", "कर्म"),
    ("janaka", "जनक"),
    ("rāma", "राम"),
    ("kṛṣṇa", "कृष्ण"),
]

IAST_ROUNDTRIP = [
    "a", "ā", "i", "ī", "u", "ū", "ṛ", "ṝ", "ḷ", "e", "ai", "o", "au",
    "ka", "kha", "ga", "gha", "ṅa", "ca", "cha", "ja", "jha", "ña",
    "ṭa", "ṭha", "ḍa", "ḍha", "ṇa", "ta", "tha", "da", "dha", "na",
    "pa", "pha", "ba", "bha", "ma", "ya", "ra", "la", "va",
    "śa", "ṣa", "sa", "ha",
    "saṃskṛta", "namaste", "yoga", "dharma", "karma",
    "janaka", "rāma", "kṛṣṇa", "āśrama", "upaniṣad",
]  # fmt: skip

DEVA_ROUNDTRIP = [
    "अ", "आ", "इ", "ई", "उ", "ऊ", "ऋ", "ॠ", "ऌ", "ए", "ऐ", "ओ", "औ",
    "क", "ख", "ग", "घ", "ङ", "च", "छ", "ज", "झ", "ञ",
    "ट", "ठ", "ड", "ढ", "ण", "त", "थ", "द", "ध", "न",
    "प", "फ", "ब", "भ", "म", "य", "र", "ल", "व",
    "श", "ष", "स", "ह",
    "संस्कृत", "नमस्ते", "योग", "धर्म", "कर्म",
    "जनक", "राम", "कृष्ण", "आश्रम", "उपनिषद्",
]  # fmt: skip


class TestIastToDevanagari:
    """Tests for IAST -> Devanagari."""

    @pytest.mark.parametrize("iast,deva", WORD_PAIRS)
    def test_known_words(self, iast, deva):
        assert iast_to_devanagari(iast) == deva

    def test_uppercase_input(self):
        """Input is lowercased before conversion."""
        assert iast_to_devanagari("Dharma") == "धर्म"
        assert iast_to_devanagari("YOGA") == "योग"

    def test_final_consonant_gets_virama(self):
        assert iast_to_devanagari("upaniṣad") == "उपनिषद्"

    def test_consonant_before_space_gets_virama(self):
        assert iast_to_devanagari("vāk ca") == "वाक् च"

    def test_unmapped_characters_pass_through(self):
        assert iast_to_devanagari("yoga, karma!") == "योग, कर्म!"
        assert iast_to_devanagari("") == ""

    def test_avagraha(self):
        assert iast_to_devanagari("so'ham") == "सोऽहम्"


class TestIastToSlp:
    """Tests for the SLP1 intermediate form."""

    def test_aspirates_match_before_single_letters(self):
        assert iast_to_slp("dharma") == "Darma"
        assert iast_to_slp("bhakti") == "Bakti"

    def test_diphthongs(self):
        assert iast_to_slp("kai") == "kE"
        assert iast_to_slp("kau") == "kO"

    def test_diacritics(self):
        assert iast_to_slp("kṛṣṇa") == "kfzRa"
        assert iast_to_slp("śiva") == "Siva"

    def test_slp_to_devanagari(self):
        assert slp_to_devanagari("kfzRa") == "कृष्ण"
        assert slp_to_devanagari("saMskfta") == "संस्कृत"


class TestDevanagariToIast:
    """Tests for Devanagari -> IAST."""

    @pytest.mark.parametrize("iast,deva", WORD_PAIRS)
    def test_known_words(self, iast, deva):
        assert devanagari_to_iast(deva) == iast

    def test_unmapped_characters_pass_through(self):
        assert devanagari_to_iast("योग 1") == "yoga 1"


class TestRoundtrip:
    """IAST -> Devanagari -> IAST and back again."""

    @pytest.mark.parametrize("iast", IAST_ROUNDTRIP)
    def test_iast_roundtrip(self, iast):
        assert devanagari_to_iast(iast_to_devanagari(iast)) == iast

    @pytest.mark.parametrize("deva", DEVA_ROUNDTRIP)
    def test_devanagari_roundtrip(self, deva):
        assert iast_to_devanagari(devanagari_to_iast(deva)) == deva


class TestHiatus:
    """An independent i or u after "a" is not a diphthong."""

    def test_devanagari_to_iast_marks_hiatus(self):
        assert devanagari_to_iast("प्रउग") == "praüga"
        assert devanagari_to_iast("अइ") == "aï"

    def test_diphthong_is_unchanged(self):
        assert devanagari_to_iast("प्रौग") == "prauga"

    def test_no_mark_after_other_vowels(self):
        assert devanagari_to_iast("आइ") == "āi"

    def test_iast_with_diaeresis(self):
        assert iast_to_slp("praüga") == "prauga"
        assert iast_to_devanagari("praüga") == "प्रउग"
        assert iast_to_devanagari("PraÜga") == "प्रउग"

    @pytest.mark.parametrize("deva", ["प्रउग", "अइ", "कउ", "प्रौग"])
    def test_roundtrip(self, deva):
        assert iast_to_devanagari(devanagari_to_iast(deva)) == deva

    def test_consonant_before_ha_reads_back_as_aspirate(self):
        """A known gap: k + virama + ha and kha share the IAST spelling "kh"."""
        assert devanagari_to_iast("क्ह") == "kha"
        assert iast_to_devanagari("kha") == "ख"


class TestIsDevanagari:
    """Tests for script detection."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("संस्कृत", True),
            ("sanskrit", False),
            ("saṃskṛta", False),
            ("नमस्ते", True),
            ("hello", False),
            ("राम", True),
            ("", False),
            ("mixed योग", True),
        ],
    )
    def test_detection(self, text, expected):
        assert is_devanagari(text) == expected


class TestSearchTerms:
    """Tests for cross-script query expansion."""

    def test_iast_query(self):
        assert to_search_terms("dharma") == ["dharma", "धर्म"]

    def test_devanagari_query_is_the_only_term(self):
        assert to_search_terms("धर्म") == ["धर्म"]

    def test_mixed_case_query(self):
        assert to_search_terms("Dharma") == ["Dharma", "धर्म", "dharma"]

    def test_query_is_trimmed(self):
        assert to_search_terms("  yoga ") == ["yoga", "योग"]

    def test_empty_query(self):
        assert to_search_terms("") == []
        assert to_search_terms("   ") == []

    def test_no_duplicates(self):
        terms = to_search_terms("KARMA")
        assert len(terms) == len(set(terms))
        assert terms[0] == "KARMA"
