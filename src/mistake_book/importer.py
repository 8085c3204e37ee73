"""Bulk question import from various file formats."""
import json
import logging
import re
from pathlib import Path
from typing import Optional

from mistake_book.clock import system_clock
from mistake_book.models import QuestionKind, Subject, new_question
from mistake_book.store import create_question

logger = logging.getLogger(__name__)

# Keyword mapping for auto-categorization
SUBJECT_KEYWORDS = {
    Subject.MATH: ["equation", "integral", "derivative", "function", "triangle", "probability", "matrix", "polynomial", "theorem", "sequence", "inequality", "logarithm"],
    Subject.PHYSICS: ["velocity", "acceleration", "force", "newton", "momentum", "energy", "circuit", "voltage", "current", "magnetic", "wavelength", "friction"],
    Subject.CHEMISTRY: ["molecule", "reaction", "mole", "acid", "base", "oxidation", "electron", "bond", "ion", "solution concentration", "catalyst", "ph"],
    Subject.ENGLISH: ["grammar", "tense", "vocabulary", "synonym", "clause", "preposition", "verb", "noun", "essay", "pronoun", "adjective", "reading comprehension"],
}

STRUCTURED_SUFFIXES = (".json", ".yaml", ".yml")
QA_BLOCK = re.compile(r"^Q:\s*(.*?)^A:\s*(.*?)(?=^Q:|\Z)", re.MULTILINE | re.DOTALL)


def read_file_content(file_path: str) -> str:
    path = Path(file_path)
    suffix = path.suffix.lower()

    if suffix in (".txt", ".md"):
        return path.read_text()
    elif suffix == ".json":
        data = json.loads(path.read_text())
        return json.dumps(data, indent=2, default=str)
    elif suffix in (".yaml", ".yml"):
        import yaml
        data = yaml.safe_load(path.read_text())
        return json.dumps(data, indent=2, default=str)
    elif suffix == ".pdf":
        from PyPDF2 import PdfReader
        reader = PdfReader(file_path)
        return "\n".join(page.extract_text() or "" for page in reader.pages)
    elif suffix == ".docx":
        from docx import Document
        doc = Document(file_path)
        return "\n".join(p.text for p in doc.paragraphs)
    elif suffix in (".html", ".htm"):
        from bs4 import BeautifulSoup
        html = path.read_text()
        return BeautifulSoup(html, "html.parser").get_text("\n")
    else:
        # Try reading as plain text
        return path.read_text()


def categorize_content(text: str) -> Subject | None:
    """Guess a subject by keyword matching. Returns None when nothing matches."""
    words = set(re.findall(r"[a-z]+", text.lower()))
    text_lower = text.lower()
    scores = {}
    for subject, keywords in SUBJECT_KEYWORDS.items():
        # Multi-word keywords match as phrases, single words as whole words
        scores[subject] = sum(1 for kw in keywords if (kw in text_lower if " " in kw else kw in words))
    best = max(scores, key=scores.get)
    return best if scores[best] > 0 else None


def parse_text_questions(text: str) -> list[dict]:
    """Split "Q: ... A: ..." blocks into prompt/solution pairs."""
    return [
        {"prompt": prompt.strip(), "solution": solution.strip()}
        for prompt, solution in QA_BLOCK.findall(text)
        if prompt.strip()
    ]


def parse_structured_questions(content: str) -> list[dict]:
    data = json.loads(content)
    if isinstance(data, dict):
        data = data.get("questions", [])
    if not isinstance(data, list):
        raise ValueError("Expected a list of questions")
    return [item for item in data if isinstance(item, dict) and item.get("prompt")]

def _coerce_enum(enum_cls, value):
    """Match an enum by value or name, ignoring case."""
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        wanted = value.strip().lower()
        for member in enum_cls:
            if wanted in (member.value.lower(), member.name.lower()):
                return member
    raise ValueError(f"{value!r} is not a valid {enum_cls.__name__}")


def _coerce_tags(value) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, (list, tuple, set)):
        return [str(t) for t in value]
    raise ValueError(f"Unsupported tags {value!r}")


def import_file(
    db_path: str,
    file_path: str,
    subject: Optional[Subject] = None,
    kind: QuestionKind = QuestionKind.MISSED_PROBLEM,
    now: Optional[int] = None,
) -> dict:
    """Import questions from a file. Subjects are guessed per question when not given.

    Entries that cannot be converted are counted as failed and skipped.
    """
    now = system_clock() if now is None else now
    content = read_file_content(file_path)
    if Path(file_path).suffix.lower() in STRUCTURED_SUFFIXES:
        entries = parse_structured_questions(content)
    else:
        entries = parse_text_questions(content)

    source = Path(file_path).name
    imported = failed = 0
    for n, entry in enumerate(entries, 1):
        try:
            entry_subject = (
                entry.get("subject") or subject
                or categorize_content(str(entry["prompt"])) or Subject.OTHER
            )
            question = new_question(
                prompt=str(entry["prompt"]),
                solution=str(entry.get("solution", "")),
                kind=_coerce_enum(QuestionKind, entry.get("kind", kind)),
                subject=_coerce_enum(Subject, entry_subject),
                now=now,
                analysis=str(entry.get("analysis", "")),
                source=str(entry.get("source", source)),
                tags=_coerce_tags(entry.get("tags")),
            )
        except ValueError as e:
            logger.warning("Skipping entry %d of %s: %s", n, source, e)
            failed += 1
            continue
        if create_question(db_path, question):
            imported += 1
        else:
            failed += 1
    return {"filename": source, "imported": imported, "failed": failed}
