import re

# Tokens this short ("a", "of", "js") carry almost no signal for matching
MIN_TOKEN_LENGTH = 3

_NON_ALNUM = re.compile(r"[^a-z0-9\s]")
_WHITESPACE = re.compile(r"\s+")
_NOT_KEPT = re.compile(r"[^\w\s@.\-]", re.ASCII)


def tokenize(text: str) -> list[str]:
    """
    Turns raw text into the index terms used for weighting and matching.
    Steps:
      1. Convert to lowercase
      2. Replace anything that isn't a-z, 0-9 or whitespace with a space
      3. Split on whitespace
      4. Drop tokens shorter than MIN_TOKEN_LENGTH characters
    Duplicates and order are kept, since term frequency depends on them.
    """
    if not text:
        return []

    # Lowercase all text
    text = text.lower()

    # Punctuation becomes a boundary, so "react,redux" -> "react redux"
    text = _NON_ALNUM.sub(" ", text)

    return [t for t in text.split() if len(t) >= MIN_TOKEN_LENGTH]


def clean_text(text: str) -> str:
    """
    Normalizes resume text before it is stored and tokenized.
    Collapses whitespace runs to one space, then blanks out everything
    except word characters, whitespace, "@", "." and "-".
    """
    if not text:
        return ""
    text = _WHITESPACE.sub(" ", text)
    text = _NOT_KEPT.sub(" ", text)
    return text.strip()
