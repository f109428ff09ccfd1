"""
IAST <-> Devanagari transliteration.

IAST input is first reduced to SLP1, a flat encoding with one ASCII character
per phoneme, and SLP1 is then rendered as Devanagari. The reverse direction
walks Devanagari directly.
"""

from typing import List

# IAST sequences -> SLP1, grouped by sequence length (longest tried first)
IAST_TO_SLP = {
    2: {
        # Diphthongs
        "ai": "E",
        "au": "O",
        # Aspirates
        "kh": "K",
        "gh": "G",
        "ch": "C",
        "jh": "J",
        "ṭh": "W",
        "ḍh": "Q",
        "th": "T",
        "dh": "D",
        "ph": "P",
        "bh": "B",
    },
    1: {
        # Vowels
        "a": "a",
        "ā": "A",
        "i": "i",
        "ī": "I",
        "u": "u",
        "ū": "U",
        "ṛ": "f",
        "ṝ": "F",
        "ḷ": "x",
        "ḹ": "X",
        "e": "e",
        "o": "o",
        # Anusvara, visarga, candrabindu
        "ṃ": "M",
        "ḥ": "H",
        "~": "~",
        # Velars
        "k": "k",
        "g": "g",
        "ṅ": "N",
        # Palatals
        "c": "c",
        "j": "j",
        "ñ": "Y",
        # Retroflexes
        "ṭ": "w",
        "ḍ": "q",
        "ṇ": "R",
        # Dentals
        "t": "t",
        "d": "d",
        "n": "n",
        # Labials
        "p": "p",
        "b": "b",
        "m": "m",
        # Semivowels
        "y": "y",
        "r": "r",
        "l": "l",
        "v": "v",
        # Sibilants
        "ś": "S",
        "ṣ": "z",
        "s": "s",
        "h": "h",
        # Avagraha
        "'": "'",
    },
}

SLP_CONSONANTS = {
    "k": "क", "K": "ख", "g": "ग", "G": "घ", "N": "ङ",
    "c": "च", "C": "छ", "j": "ज", "J": "झ", "Y": "ञ",
    "w": "ट", "W": "ठ", "q": "ड", "Q": "ढ", "R": "ण",
    "t": "त", "T": "थ", "d": "द", "D": "ध", "n": "न",
    "p": "प", "P": "फ", "b": "ब", "B": "भ", "m": "म",
    "y": "य", "r": "र", "l": "ल", "v": "व",
    "S": "श", "z": "ष", "s": "स", "h": "ह",
}  # fmt: skip

SLP_VOWELS = {
    "a": "अ", "A": "आ", "i": "इ", "I": "ई", "u": "उ", "U": "ऊ",
    "f": "ऋ", "F": "ॠ", "x": "ऌ", "X": "ॡ",
    "e": "ए", "E": "ऐ", "o": "ओ", "O": "औ",
}  # fmt: skip

# Dependent vowel signs; the inherent "a" has none
SLP_MATRAS = {
    "a": "", "A": "ा", "i": "ि", "I": "ी", "u": "ु", "U": "ू",
    "f": "ृ", "F": "ॄ", "x": "ॢ", "X": "ॣ",
    "e": "े", "E": "ै", "o": "ो", "O": "ौ",
}  # fmt: skip

SLP_MARKS = {"M": "ं", "H": "ः", "~": "ँ", "'": "ऽ"}

# Diaeresis marks a vowel that starts a new syllable after "a" (praüga, not
# prauga), so "a" + "i"/"u" in hiatus never reads as a diphthong
IAST_HIATUS = {"ï": "i", "ü": "u"}
HIATUS_MARKS = {iast: mark for mark, iast in IAST_HIATUS.items()}

VIRAMA = "्"

DEVANAGARI_START = 0x0900
DEVANAGARI_END = 0x097F


def _invert(table: dict, slp_to_iast: dict) -> dict:
    return {deva: slp_to_iast[slp] for slp, deva in table.items() if deva}


# SLP1 -> IAST, used to build the Devanagari -> IAST tables
_SLP_TO_IAST = {
    slp: iast
    for length in (1, 2)
    for iast, slp in IAST_TO_SLP[length].items()
}

DEVA_CONSONANTS = _invert(SLP_CONSONANTS, _SLP_TO_IAST)
DEVA_VOWELS = _invert(SLP_VOWELS, _SLP_TO_IAST)
DEVA_MATRAS = _invert(SLP_MATRAS, _SLP_TO_IAST)
DEVA_MARKS = _invert(SLP_MARKS, _SLP_TO_IAST)


def iast_to_slp(iast: str) -> str:
    """Convert IAST to SLP1, matching two-character sequences before single ones."""
    text = iast.lower()
    out = []
    i = 0
    while i < len(text):
        for length in (2, 1):
            chunk = text[i : i + length]
            if len(chunk) == length and chunk in IAST_TO_SLP[length]:
                out.append(IAST_TO_SLP[length][chunk])
                i += length
                break
        else:
            if text[i] in IAST_HIATUS:
                out.append(IAST_HIATUS[text[i]])
                i += 1
                continue
            # Spaces, punctuation, digits
            out.append(text[i])
            i += 1
    return "".join(out)


def slp_to_devanagari(slp: str) -> str:
    """Render SLP1 as Devanagari."""
    out = []
    prev_consonant = False

    for i, ch in enumerate(slp):
        if ch in SLP_CONSONANTS:
            out.append(SLP_CONSONANTS[ch])
            next_ch = slp[i + 1] if i + 1 < len(slp) else ""
            if next_ch in SLP_VOWELS:
                # Matra (or the inherent vowel) comes with the next character
                prev_consonant = True
            else:
                out.append(VIRAMA)
                prev_consonant = False
        elif ch in SLP_VOWELS:
            out.append(SLP_MATRAS[ch] if prev_consonant else SLP_VOWELS[ch])
            prev_consonant = False
        elif ch in SLP_MARKS:
            out.append(SLP_MARKS[ch])
            prev_consonant = False
        else:
            out.append(ch)
            prev_consonant = False

    return "".join(out)


def iast_to_devanagari(iast: str) -> str:
    """Convert IAST directly to Devanagari."""
    return slp_to_devanagari(iast_to_slp(iast))


def devanagari_to_iast(deva: str) -> str:
    """
    Convert Devanagari to IAST.

    A consonant carries the inherent "a" unless it is followed by a virama
    (bare consonant, part of a conjunct) or by a vowel sign.
    An independent i or u right after an "a" is written with a diaeresis
    (ï, ü) so it is not read back as the diphthong ai or au.

    Known limitation: a consonant cluster whose second member is ha (क्ह)
    comes out as "kh" and is read back as the aspirate ख.
    """
    out = []
    i = 0
    while i < len(deva):
        ch = deva[i]
        if ch in DEVA_CONSONANTS:
            out.append(DEVA_CONSONANTS[ch])
            next_ch = deva[i + 1] if i + 1 < len(deva) else ""
            if next_ch == VIRAMA:
                i += 2
                continue
            if next_ch in DEVA_MATRAS:
                out.append(DEVA_MATRAS[next_ch])
                i += 2
                continue
            out.append("a")
        elif ch in DEVA_VOWELS:
            vowel = DEVA_VOWELS[ch]
            if vowel in HIATUS_MARKS and out and out[-1].endswith("a"):
                vowel = HIATUS_MARKS[vowel]
            out.append(vowel)
        elif ch in DEVA_MARKS:
            out.append(DEVA_MARKS[ch])
        else:
            out.append(ch)
        i += 1
    return "".join(out)


def is_devanagari(text: str) -> bool:
    """Return True if any character falls in the Devanagari block."""
    return any(DEVANAGARI_START <= ord(ch) <= DEVANAGARI_END for ch in text)


def to_search_terms(query: str) -> List[str]:
    """
    Expand a query into the forms to search with.

    Order: the query as typed, its Devanagari form, the lowercased query and
    the Devanagari form of the lowercased query. Devanagari input is returned
    as the only term.
    """
    query = query.strip()
    if not query:
        return []

    terms = [query]
    if is_devanagari(query):
        return terms

    deva = iast_to_devanagari(query)
    if deva and deva != query:
        terms.append(deva)

    lower = query.lower()
    if lower != query:
        terms.append(lower)
        deva_lower = iast_to_devanagari(lower)
        if deva_lower and deva_lower != deva:
            terms.append(deva_lower)

    return list(dict.fromkeys(terms))
