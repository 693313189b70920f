import random
import re
from typing import List

SENTENCE_DELIMITERS = re.compile(r"[.!?]+")
PARAGRAPH_BREAK = re.compile(r"\n\n+")

MIN_SENTENCE_CHARS = 30
MIN_SENTENCE_WORDS = 5
MIN_PARAGRAPH_CHARS = 50

DEGENERATE_DOCUMENT_CHUNK = "The document appears to contain limited or poorly formatted content."


def split_into_sentences(text: str) -> List[str]:
    """Sentences long enough to seed a question."""
    sentences = [s.strip() for s in SENTENCE_DELIMITERS.split(text or "")]
    return [
        s for s in sentences
        if len(s) > MIN_SENTENCE_CHARS and len(s.split()) > MIN_SENTENCE_WORDS
    ]


def split_into_paragraphs(text: str) -> List[str]:
    paragraphs = [p.strip() for p in PARAGRAPH_BREAK.split(text or "")]
    return [p for p in paragraphs if len(p) > MIN_PARAGRAPH_CHARS]


def _sample_paragraphs(paragraphs: List[str], count: int, rng: random.Random) -> List[str]:
    chunks = []
    used = set()
    for _ in range(min(count, len(paragraphs))):
        index = rng.randrange(len(paragraphs))
        # Re-draw until an unused paragraph turns up, unless all are used
        while index in used and len(used) < len(paragraphs):
            index = rng.randrange(len(paragraphs))
        used.add(index)
        chunks.append(paragraphs[index])
    return chunks


def _spread_sentences(sentences: List[str], count: int, rng: random.Random) -> List[str]:
    step = max(1, len(sentences) // count)
    chunks = []
    i = 0
    while i < count and i * step < len(sentences):
        chunks.append(sentences[i * step])
        i += 1

    # Only short of count when called with fewer sentences than requested;
    # extract_chunks routes that case to paragraphs or cycling first.
    while len(chunks) < count:
        remaining = [s for s in sentences if s not in chunks]
        if not remaining:
            break
        chunks.append(rng.choice(remaining))
    return chunks


def extract_chunks(text: str, target_count: int, rng: random.Random) -> List[str]:
    """Pick up to ``target_count`` fragments spread across the document."""
    if target_count < 1:
        return []

    sentences = split_into_sentences(text)
    if not sentences:
        return [DEGENERATE_DOCUMENT_CHUNK]

    if len(sentences) < target_count:
        paragraphs = split_into_paragraphs(text)
        if len(paragraphs) >= target_count:
            return _sample_paragraphs(paragraphs, target_count, rng)
        return [sentences[i % len(sentences)] for i in range(target_count)]

    return _spread_sentences(sentences, target_count, rng)
