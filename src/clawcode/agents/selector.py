"""Keyword-based selection of the files sent to the LLM as context."""

import re

from clawcode.models import ScannedFile

MAX_CONTEXT_FILES = 12
MAX_TOTAL_CHARS = 18_000  # Keeps prompts under small-context provider limits
FALLBACK_FILES = 6


def tokenize(task: str) -> set[str]:
    normalized = re.sub(r"[^\w\s./-]", " ", task.lower())
    return {word for word in normalized.split() if len(word) > 1}


def score_file(file: ScannedFile, keywords: set[str]) -> float:
    """Path hits count 10, content hits 2; larger files pay a small penalty."""
    path = file.relative_path.lower()
    content = file.content.lower()
    score = 0.0
    for keyword in keywords:
        if keyword in path:
            score += 10
        if keyword in content:
            score += 2
    if score == 0:
        return 0.0
    size_penalty = min(len(file.content) / 1000, 5)
    return score - size_penalty


def select_relevant_files(task: str, files: list[ScannedFile]) -> list[ScannedFile]:
    """Pick the best-scoring files within the file-count and character budget.

    When nothing scores, the first few files that fit the budget are used so
    the model still sees some of the project.
    """
    keywords = tokenize(task)
    scored = sorted(files, key=lambda f: score_file(f, keywords), reverse=True)

    selected: list[ScannedFile] = []
    total_chars = 0
    for file in scored:
        if len(selected) >= MAX_CONTEXT_FILES:
            break
        if total_chars + len(file.content) > MAX_TOTAL_CHARS:
            continue
        selected.append(file)
        total_chars += len(file.content)

    if not selected and files:
        for file in files[:FALLBACK_FILES]:
            if total_chars + len(file.content) <= MAX_TOTAL_CHARS:
                selected.append(file)
                total_chars += len(file.content)

    return selected
