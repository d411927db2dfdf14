"""
Conversions between identifier notations.
"""
import re
from typing import List, Tuple

_WORD = re.compile(r"[A-Z]+(?=[A-Z][a-z])|[A-Z]?[a-z]+|[A-Z]+|\d+")

# Words, plus runs of anything else ("_", "$", non-ASCII letters), which are kept as written.
_TOKEN = re.compile(_WORD.pattern + r"|[^A-Za-z\d]+")


def camel_case_words(identifier: str) -> List[str]:
    """Split "FileSet" into ["File", "Set"] and "HTTPProxy" into ["HTTP", "Proxy"]."""
    return _WORD.findall(identifier)


def _tokens(identifier: str) -> List[Tuple[str, bool]]:
    return [(token, _WORD.fullmatch(token) is not None) for token in _TOKEN.findall(identifier)]


def to_lower_camel_case(identifier: str) -> str:
    """
    Convert a camel-case word sequence to lower camel case.

    "FileSet" -> "fileSet", "URL" -> "url", "HTTPProxy" -> "httpProxy",
    "Foo_bar" -> "foo_bar"
    """
    tokens = _tokens(identifier)
    if not any(is_word for _, is_word in tokens):
        return identifier
    result = []
    previous_is_word = False
    for token, is_word in tokens:
        if not is_word:
            result.append(token)
        elif previous_is_word:
            result.append(token[:1].upper() + token[1:].lower())
        else:
            result.append(token.lower())
        previous_is_word = is_word
    return "".join(result)


def to_lower_case_hyphenated(identifier: str) -> str:
    """"destFile" -> "dest-file", "FileSet" -> "file-set", "dest_file" -> "dest_file"."""
    result = []
    previous_is_word = False
    for token, is_word in _tokens(identifier):
        if is_word and previous_is_word:
            result.append("-")
        result.append(token.lower() if is_word else token)
        previous_is_word = is_word
    return "".join(result)


def first_letter_to_upper_case(text: str) -> str:
    return text[:1].upper() + text[1:]
