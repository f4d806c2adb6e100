"""
Metadata extraction for resumes and job descriptions
----------------------------------------------------

Cheap pattern heuristics, not NLP:
- email: first thing that looks like local@domain.tld
- name: first non-blank line, if it is short and has no digits
- skills: whole-word hits against a fixed, ordered skill vocabulary
- requirements: the "Requirements:" / "Qualifications:" / "Required skills:"
  sections of a job description, or its first 500 characters

None of these raise on odd input; missing information comes back as None
or an empty value.
"""

import logging
import re
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Optional, Pattern, Tuple

from ranker.config import DEFAULT_SKILL_TERMS_FILE, settings
from ranker.preprocess import clean_text

logger = logging.getLogger(__name__)

NAME_MAX_LENGTH = 50
REQUIREMENTS_FALLBACK_CHARS = 500

EMAIL_PATTERN = re.compile(r"[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}")

# Tried in this order; each section runs until a blank line, the next
# known header, or the end of the text.
REQUIREMENT_PATTERNS = (
    re.compile(r"requirements?:(.*?)(?=\n\n|responsibilities|qualifications|\Z)", re.I | re.S),
    re.compile(r"qualifications?:(.*?)(?=\n\n|responsibilities|requirements|\Z)", re.I | re.S),
    re.compile(r"required skills?:(.*?)(?=\n\n|responsibilities|qualifications|\Z)", re.I | re.S),
)

PROFILES = ("resume", "job")

SkillVocabulary = Tuple[Tuple[str, Pattern[str]], ...]


@dataclass(frozen=True)
class ResumeMetadata:
    name: Optional[str]
    email: Optional[str]
    skills: Tuple[str, ...] = ()
    text: str = ""

    def to_dict(self) -> dict:
        out = asdict(self)
        out["skills"] = list(self.skills)
        return out


@dataclass(frozen=True)
class JobMetadata:
    requirements: str
    query_text: str = field(default="", repr=False)

    def to_dict(self) -> dict:
        return {"requirements": self.requirements}


def _skill_matcher(label: str) -> Pattern[str]:
    # Labels are literal text ("c++", "c#", "rest api"), so escape them and use
    # lookarounds instead of \b, which never fires after "+" or "#".
    return re.compile(r"(?<![a-z0-9_])" + re.escape(label) + r"(?![a-z0-9_])", re.I)


def load_skill_terms(path: Path) -> list[str]:
    """
    Read skill labels from a plain text file.
    Blank lines and "#" comments are skipped; labels are lowercased and
    deduplicated, keeping the first occurrence.
    """
    seen = set()
    terms: list[str] = []
    for raw in path.read_text(encoding="utf-8").splitlines():
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        term = " ".join(line.lower().split())
        if term not in seen:
            seen.add(term)
            terms.append(term)
    return terms


def build_vocabulary(terms) -> SkillVocabulary:
    """Pair every label with its compiled whole-word matcher."""
    return tuple((term, _skill_matcher(term)) for term in terms)


def _load_default_vocabulary() -> SkillVocabulary:
    path = settings.skill_terms_file
    if not path.exists():
        logger.warning("Skill terms file %s not found; using bundled list", path)
        path = DEFAULT_SKILL_TERMS_FILE
    terms = load_skill_terms(path)
    logger.debug("Loaded %d skill terms from %s", len(terms), path)
    return build_vocabulary(terms)


# Built once at import time and never written again
SKILL_VOCABULARY = _load_default_vocabulary()


def skill_labels(vocabulary: SkillVocabulary = SKILL_VOCABULARY) -> list[str]:
    return [label for label, _ in vocabulary]


def extract_email(text: str) -> Optional[str]:
    if not text:
        return None
    match = EMAIL_PATTERN.search(text)
    return match.group(0) if match else None


def extract_name(text: str) -> Optional[str]:
    """
    Resumes usually lead with the candidate's name, so take the first
    non-blank line and accept it if it is shorter than NAME_MAX_LENGTH
    characters and contains no digits.
    """
    if not text:
        return None
    for line in text.splitlines():
        line = line.strip()
        if not line:
            continue
        if len(line) < NAME_MAX_LENGTH and not any(ch.isdigit() for ch in line):
            return line
        return None
    return None


def extract_skills(text: str, vocabulary: SkillVocabulary = SKILL_VOCABULARY) -> Tuple[str, ...]:
    """Return the vocabulary labels found in text, in vocabulary order."""
    if not text:
        return ()
    # multi-word labels ("machine learning") should survive line breaks
    normalized = " ".join(text.split())
    return tuple(label for label, matcher in vocabulary if matcher.search(normalized))


def extract_requirements(description: str) -> str:
    """
    Pull the requirement sections out of a job description.

    Every header pattern that matches contributes its section, in pattern
    order, joined by a blank line. Without any section the first
    REQUIREMENTS_FALLBACK_CHARS characters of the description are used.
    """
    if not description:
        return ""
    sections = []
    for pattern in REQUIREMENT_PATTERNS:
        match = pattern.search(description)
        if match and match.group(1).strip():
            sections.append(match.group(1).strip())
    return "\n\n".join(sections) or description[:REQUIREMENTS_FALLBACK_CHARS]


def extract_resume_metadata(text: str, vocabulary: SkillVocabulary = SKILL_VOCABULARY) -> ResumeMetadata:
    """
    Resume profile: name, email, skills and the cleaned text to store.

    Cleaning is applied line by line for the name so the first line survives;
    email and skills are read from the raw text, since cleaning drops "+"
    and "#" (jane+hr@..., c++, c#).
    """
    text = text or ""
    cleaned_lines = "\n".join(clean_text(line) for line in text.splitlines())
    return ResumeMetadata(
        name=extract_name(cleaned_lines),
        email=extract_email(text),
        skills=extract_skills(text, vocabulary),
        text=clean_text(text),
    )


def extract_job_metadata(description: str) -> JobMetadata:
    """Job profile: requirements excerpt plus the text candidates are ranked against."""
    description = description or ""
    requirements = extract_requirements(description)
    query_text = description + "\n\n" + requirements if requirements else description
    return JobMetadata(requirements=requirements, query_text=query_text)


def extract_metadata(text: str, profile: str = "resume"):
    """Dispatch on the extraction profile: "resume" or "job"."""
    if profile == "resume":
        return extract_resume_metadata(text)
    if profile == "job":
        return extract_job_metadata(text)
    raise ValueError(f"Unknown extraction profile {profile!r}; expected one of {PROFILES}")
