import re

DISALLOWED_CHARS_RE = re.compile(r"[^\w\s.,?!;:\-'\"]")
REPEATED_PUNCT_RE = re.compile(r"([.!?])\1+")
REPEATED_LETTER_RE = re.compile(r"([a-zA-Z])\1{3,}")
MISSING_SPACE_RE = re.compile(r"([.!?])([a-zA-Z])")


def normalize(text: str) -> str:
    """Clean extracted or synthesized text.

    Stray symbols are dropped first, so a second pass never finds a new run
    of punctuation to collapse.
    """
    if not text:
        return ""
    cleaned = DISALLOWED_CHARS_RE.sub("", text)
    cleaned = REPEATED_PUNCT_RE.sub(r"\1", cleaned)
    cleaned = REPEATED_LETTER_RE.sub(r"\1", cleaned)
    cleaned = MISSING_SPACE_RE.sub(r"\1 \2", cleaned)
    return cleaned.strip()
