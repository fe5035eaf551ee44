import hashlib
import logging
import re

import numpy as np

from .llm import embed_text
from .models import Paper

logger = logging.getLogger(__name__)

RECENT_LIMIT = 10
SIMILAR_LIMIT = 5

# In-memory paper store: id -> (paper, embedding)
_papers: dict[str, tuple[Paper, np.ndarray]] = {}


def paper_id_for(text: str) -> str:
    return hashlib.md5(text.strip()[:500].encode()).hexdigest()[:12]


def get_paper(paper_id: str) -> Paper | None:
    entry = _papers.get(paper_id)
    return entry[0] if entry else None


def clear():
    _papers.clear()


def recent_papers(limit: int = RECENT_LIMIT) -> list[Paper]:
    # insertion order breaks timestamp ties
    ordered = sorted(enumerate(p for p, _ in _papers.values()), key=lambda ip: (ip[1].created_at, ip[0]), reverse=True)
    return [p for _, p in ordered[:limit]]


# ===== Metadata Extraction =====

def _extract_title(text: str) -> str:
    for line in text.split("\n")[:10]:
        line = line.strip()
        if 3 < len(line) < 200 and not re.match(r'^(arxiv|doi|http|abstract\b)', line, re.I):
            return line
    return "Untitled"


def _extract_abstract(text: str) -> str:
    m = re.search(r'abstract[:\s]*(.{20,1500}?)(?=\n\s*\n|\bintroduction\b|$)', text, re.I | re.S)
    if m:
        return re.sub(r'\s+', ' ', m.group(1)).strip()
    paragraphs = [p for p in re.split(r'\n\s*\n', text.strip()) if p.strip()]
    body = paragraphs[1] if len(paragraphs) > 1 else (paragraphs[0] if paragraphs else "")
    return re.sub(r'\s+', ' ', body).strip()[:1500]


def _extract_year(text: str) -> int | None:
    m = re.search(r'\b(19[5-9]\d|20\d\d)\b', text[:2000])
    return int(m.group(1)) if m else None


# ===== Similarity =====

def cosine_similarity(a, b) -> float:
    """Cosine of two embeddings, clipped into 0..1; mismatched lengths raise ValueError."""
    a = np.asarray(a, dtype=float)
    b = np.asarray(b, dtype=float)
    if a.shape != b.shape:
        raise ValueError(f"Embedding dimensions differ: {a.shape[0]} vs {b.shape[0]}")
    norm = np.linalg.norm(a) * np.linalg.norm(b)
    if not norm:
        return 0.0
    return float(np.clip(np.dot(a, b) / norm, 0.0, 1.0))


# ===== Operations =====

async def store_paper(text: str) -> Paper:
    if not text.strip():
        raise ValueError("Paper text is empty.")

    pid = paper_id_for(text)
    existing = get_paper(pid)
    if existing:
        logger.info(f"Paper {pid} already stored")
        return existing

    embedding = await embed_text(text)
    paper = Paper(
        id=pid,
        title=_extract_title(text),
        abstract=_extract_abstract(text),
        year=_extract_year(text),
    )
    _papers[pid] = (paper, embedding)
    logger.info(f"Stored paper {pid}: {paper.title!r}")
    return paper


async def find_similar(text: str, limit: int = SIMILAR_LIMIT) -> list[Paper]:
    if not text.strip():
        raise ValueError("Paper text is empty.")

    query = await embed_text(text)
    own_id = paper_id_for(text)
    scored = [
        (cosine_similarity(query, embedding), paper)
        for pid, (paper, embedding) in _papers.items()
        if pid != own_id
    ]
    scored.sort(key=lambda pair: pair[0], reverse=True)
    logger.info(f"Similar search over {len(scored)} papers")
    return [paper.model_copy(update={"similarity": score}) for score, paper in scored[:limit]]
