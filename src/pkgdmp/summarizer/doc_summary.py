"""First-sentence synopsis of Go doc comments."""

# Words ending in a period that do not end a sentence.
ABBREVIATIONS = frozenset({
    "e.g.", "i.e.", "etc.", "vs.", "cf.", "approx.",
    "mr.", "mrs.", "ms.", "dr.", "st.", "no.",
})

# Synopses starting with these (lower-cased) are dropped, like Go's doc tool.
ILLEGAL_PREFIXES = ("copyright", "all rights", "author")

SENTENCE_ENDS = ".!?"


def first_paragraph(text: str) -> str:
    """Return the lines of text up to the first blank line, joined by spaces."""
    lines = []
    for line in text.strip().split("\n"):
        if not line.strip():
            break
        lines.append(line)
    return " ".join(" ".join(lines).split())


def first_sentence(text: str) -> str:
    """Cut text after the first sentence terminator followed by whitespace.

    A period that belongs to a known abbreviation does not end the sentence.
    """
    for i, ch in enumerate(text):
        if ch not in SENTENCE_ENDS:
            continue
        if i + 1 < len(text) and not text[i + 1].isspace():
            continue
        if ch == ".":
            word = text[:i + 1].rsplit(None, 1)[-1].lower()
            if word in ABBREVIATIONS:
                continue
        return text[:i + 1]
    return text


def synopsis(text: str) -> str:
    """Reduce a doc comment to its first sentence.

    Example: "Foo does X. It also does Y." -> "Foo does X."
    """
    if not text:
        return ""

    s = first_sentence(first_paragraph(text))

    lowered = s.lower()
    for prefix in ILLEGAL_PREFIXES:
        if lowered.startswith(prefix):
            return ""

    return s
