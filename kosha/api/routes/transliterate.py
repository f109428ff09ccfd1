from fastapi import APIRouter, HTTPException

from kosha.services.transliterate import devanagari_to_iast, iast_to_devanagari

router = APIRouter()

CONVERTERS = {
    "deva": iast_to_devanagari,
    "iast": devanagari_to_iast,
}


@router.get("")
def transliterate(text: str, direction: str = "deva"):
    """Convert text to Devanagari ("deva") or to IAST ("iast")."""
    if not text.strip():
        raise HTTPException(status_code=400, detail="Text must not be empty")

    converter = CONVERTERS.get(direction)
    if converter is None:
        raise HTTPException(
            status_code=400,
            detail=f"Invalid direction '{direction}'. Use: deva, iast",
        )

    return {"text": text, "direction": direction, "result": converter(text)}
