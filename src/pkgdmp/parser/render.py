"""Text helpers shared by the declaration entities."""

from typing import Sequence

COMMENT_WIDTH = 80


def mk_comment(s: str) -> str:
    """Render doc text as `//` comment lines ending with a newline.

    Multi-line text is emitted line by line. Single-line text is word
    wrapped to stay under COMMENT_WIDTH characters.
    """
    s = s.strip()
    if not s:
        return ""

    lines = s.split("\n")
    if len(lines) > 1:
        return "".join(f"// {line}\n" if line else "//\n" for line in lines)

    wrapped = []
    words: list[str] = []
    line_len = len("// ")

    for word in s.split():
        if not words or line_len + len(word) + 1 < COMMENT_WIDTH:
            words.append(word)
            line_len += len(word) + 1
            continue
        wrapped.append("// " + " ".join(words))
        words = [word]
        line_len = len("// ") + len(word) + 1

    wrapped.append("// " + " ".join(words))

    return "\n".join(wrapped) + "\n"


def fields_list(fields: Sequence) -> str:
    return ", ".join(f.render() for f in fields)


def results_list(results: Sequence) -> str:
    """Render a result list; a single unnamed result has no parentheses."""
    if not results:
        return ""
    if len(results) == 1 and not results[0].names:
        return results[0].render()
    return f"({fields_list(results)})"


def signature(params: Sequence, results: Sequence) -> str:
    """Render `(params) results` with no trailing space for empty results."""
    res = results_list(results)
    if res:
        return f"({fields_list(params)}) {res}"
    return f"({fields_list(params)})"
