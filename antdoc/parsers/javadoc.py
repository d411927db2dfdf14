"""
Splitting of Javadoc comments into main description and block tags.
"""
import re
from typing import Dict, List, Tuple

_LINE_PREFIX = re.compile(r"^\s*\*? ?")
_BLOCK_TAG = re.compile(r"^@([\w.\-]+)\s*(.*)$")


def strip_comment_delimiters(comment: str) -> List[str]:
    """Remove "/**", "*/" and the leading asterisks of each line."""
    body = comment.strip()
    if body.startswith("/**"):
        body = body[3:]
    elif body.startswith("/*"):
        body = body[2:]
    if body.endswith("*/"):
        body = body[:-2]
    return [_LINE_PREFIX.sub("", line, count=1).rstrip() for line in body.splitlines()]


def split_doc_comment(comment: str) -> Tuple[str, Dict[str, List[str]]]:
    """
    Split a doc comment.

    Args:
        comment: The raw comment, including its delimiters

    Returns:
        The main description, and a mapping from block tag name (with its
        leading "@") to the tag values in order of appearance
    """
    text_lines: List[str] = []
    tags: Dict[str, List[str]] = {}
    current_tag = None
    current_value: List[str] = []

    def flush():
        if current_tag is not None:
            tags.setdefault(current_tag, []).append(" ".join(v for v in current_value if v).strip())

    for line in strip_comment_delimiters(comment):
        m = _BLOCK_TAG.match(line.strip())
        if m:
            flush()
            current_tag = "@" + m.group(1)
            current_value = [m.group(2).strip()]
        elif current_tag is not None:
            current_value.append(line.strip())
        else:
            text_lines.append(line)
    flush()

    return "\n".join(text_lines).strip(), tags


def first_sentence(text: str) -> str:
    """
    The first sentence of a description: up to the first period followed by
    white space, or the first block-level HTML tag.
    """
    text = text.strip()
    m = re.search(r"\.(?=\s)|<(?:p|pre|dl|ul|ol|table|h\d)\b", text, re.IGNORECASE)
    if m is None:
        return text
    end = m.start() + 1 if text[m.start()] == "." else m.start()
    return text[:end].strip()
