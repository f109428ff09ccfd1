"""
Canonical metadata for the known source dictionaries.

These values override whatever a source file says about itself.
"""

from typing import Optional

from kosha.models import Dictionary

DEFAULT_FROM_LANG = "sa"
DEFAULT_TO_LANG = "en"

# code -> (name, from_lang, to_lang, favorite)
DICTIONARY_METADATA = {
    "mw": ("Monier-Williams Sanskrit-English Dictionary - 1899", "sa", "en", True),
    "ap90": ("Apte Practical Sanskrit-English Dictionary - 1890", "sa", "en", True),
    "ben": ("Benfey Sanskrit-English Dictionary - 1866", "sa", "en", True),
    "wil": ("Wilson Sanskrit-English Dictionary - 1832", "sa", "en", True),
    "pwg": ("Böhtlingk and Roth Grosses Petersburger Wörterbuch - 1855", "sa", "de", True),
    "shs": ("Shabda-Sagara Sanskrit-English Dictionary - 1900", "sa", "en", True),
    "md": ("Macdonell Sanskrit-English Dictionary - 1893", "sa", "en", True),
    "cae": ("Cappeller Sanskrit-English Dictionary - 1891", "sa", "en", True),
    "yat": ("Yates Sanskrit-English Dictionary - 1846", "sa", "en", True),
    "gst": ("Goldstücker Sanskrit-English Dictionary - 1856", "sa", "en", False),
    "stc": ("Stchoupak Dictionnaire Sanscrit-Français - 1932", "sa", "fr", False),
    "pe": ("Puranic Encyclopedia - 1975", "sa", "en", False),
    "bur": ("Burnouf Dictionnaire Sanscrit-Français - 1866", "sa", "fr", False),
    "krm": ("Kṛdantarūpamālā - 1965", "sa", "sa", False),
    "sch": ("Schmidt Nachträge zum Sanskrit-Wörterbuch - 1928", "sa", "de", False),
    "acc": ("Aufrecht's Catalogus Catalogorum - 1962", "sa", "en", False),
    "mwe": ("Monier-Williams English-Sanskrit Dictionary - 1851", "en", "sa", False),
    "bop": ("Bopp Glossarium Sanscritum - 1847", "sa", "la", False),
    "skd": ("Sabda-kalpadruma - 1886", "sa", "sa", False),
    "ieg": ("Indian Epigraphical Glossary - 1966", "sa", "en", False),
    "pw": ("Böhtlingk Sanskrit-Wörterbuch in kürzerer Fassung - 1879", "sa", "de", False),
    "pui": ("The Purana Index - 1951", "sa", "en", False),
    "lan": ("Lanman's Sanskrit Reader Vocabulary - 1884", "sa", "en", False),
    "gra": ("Grassmann Wörterbuch zum Rig Veda", "sa", "de", False),
    "inm": ("Index to the Names in the Mahabharata - 1904", "sa", "en", False),
    "bor": ("Borooah English-Sanskrit Dictionary - 1877", "en", "sa", False),
    "armh": ("Abhidhānaratnamālā of Halāyudha - 1861", "sa", "sa", False),
    "snp": ("Meulenbeld's Sanskrit Names of Plants - 1974", "sa", "la", False),
    "vcp": ("Vacaspatyam", "sa", "sa", False),
    "ae": ("Apte Student's English-Sanskrit Dictionary - 1920", "en", "sa", False),
    "bhs": ("Edgerton Buddhist Hybrid Sanskrit Dictionary - 1953", "sa", "en", False),
    "pgn": ("Personal and Geographical Names in the Gupta Inscriptions - 1978", "sa", "en", False),
    "mw72": ("Monier-Williams Sanskrit-English Dictionary - 1872", "sa", "en", False),
    "vei": ("The Vedic Index of Names and Subjects - 1912", "sa", "en", False),
    "ccs": ("Cappeller Sanskrit Wörterbuch - 1887", "sa", "de", False),
    "mci": ("Mahabharata Cultural Index - 1993", "sa", "en", False),
}


def resolve_dictionary(code: str, fallback_name: Optional[str] = None) -> Dictionary:
    """Get metadata for a dictionary code, falling back to the source file's name."""
    if code in DICTIONARY_METADATA:
        name, from_lang, to_lang, favorite = DICTIONARY_METADATA[code]
        return Dictionary(code, name, from_lang, to_lang, favorite)
    return Dictionary(
        code=code,
        name=fallback_name or code,
        from_lang=DEFAULT_FROM_LANG,
        to_lang=DEFAULT_TO_LANG,
        favorite=False,
    )
