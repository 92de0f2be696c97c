"""Text normalization and signature parsing helpers for similarity checks."""

import logging
import re
import string
from functools import lru_cache

logger = logging.getLogger(__name__)

_COMMENT_OR_LITERAL = re.compile(
    r"""(?P<literal>"(?:\\.|[^"\\\n])*"|'(?:\\.|[^'\\\n])*')"""
    r"|/\*.*?\*/"
    r"|//[^\n]*",
    re.DOTALL,
)
_ANNOTATION = re.compile(r"@[\w.$]+(?:\s*\([^()]*\))?")
_WHITESPACE_RUN = re.compile(r"\s+")
_TOKEN_SEPARATORS = re.compile(r"[\s" + re.escape(string.punctuation) + r"]+")

COMMON_KEYWORDS: frozenset[str] = frozenset(
    (
        "public private protected static final abstract "
        "class interface extends implements return if "
        "else for while do switch case default "
        "try catch finally throw throws new this "
        "super import package void int long double "
        "float boolean char byte short null true false"
    ).split()
)


@lru_cache(maxsize=8192)
def normalize_body(body: str) -> str:
    """Normalize a method body for structural comparison.

    Block and line comments are removed first, then whitespace runs collapse to
    a single space and the result is trimmed. Comment markers inside string and
    character literals are left alone.

    Args:
        body: Raw method body text.

    Returns:
        Normalized body text.
    """
    text = _COMMENT_OR_LITERAL.sub(_keep_literal, body)
    return _WHITESPACE_RUN.sub(" ", text).strip()


def _keep_literal(match: re.Match[str]) -> str:
    return match.group("literal") or " "


@lru_cache(maxsize=8192)
def extract_content_tokens(body: str) -> frozenset[str]:
    """Return the lower-cased identifier-like tokens of a body.

    Tokens shorter than two characters and common keywords are dropped.
    """
    return frozenset(
        token
        for token in _TOKEN_SEPARATORS.split(body.lower())
        if len(token) > 1 and token not in COMMON_KEYWORDS
    )


def extract_return_type(signature: str) -> str:
    """Return the declaration clause between the leading token and ``(``.

    For ``public int sum(int a)`` this is ``int sum``, method name included.

    Args:
        signature: Declaration text.

    Returns:
        Trimmed clause, or an empty string for signatures without a space
        before the parameter list.
    """
    space_index = signature.find(" ")
    if space_index == -1:
        return ""
    paren_index = signature.find("(", space_index)
    if paren_index == -1:
        return ""
    return signature[space_index + 1 : paren_index].strip()


@lru_cache(maxsize=8192)
def extract_parameter_types(signature: str) -> tuple[str, ...]:
    """Return ordered parameter type tokens of a declaration.

    Commas nested inside generic brackets do not split parameters. Leading
    ``final`` modifiers and annotations, including their arguments, are ignored.

    Args:
        signature: Declaration text.

    Returns:
        Parameter type tokens; empty when the parameter list is missing,
        blank or unbalanced.
    """
    signature = _ANNOTATION.sub(" ", signature)
    start = signature.find("(")
    if start == -1:
        return ()
    end = _matching_paren(signature, start)
    if end == -1:
        logger.debug(f"Unbalanced parameter list (signature={signature!r})")
        return ()
    params = signature[start + 1 : end]
    if not params.strip():
        return ()
    types: list[str] = []
    for param in _split_top_level(params):
        tokens = [token for token in param.split() if token != "final"]
        if len(tokens) > 1:
            types.append(" ".join(tokens[:-1]))
        else:
            types.append(tokens[0] if tokens else "")
    return tuple(types)


def _matching_paren(text: str, start: int) -> int:
    depth = 0
    for index in range(start, len(text)):
        char = text[index]
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
            if depth == 0:
                return index
    return -1


def _split_top_level(params: str) -> list[str]:
    """Split a parameter list on commas outside ``<...>``."""
    parts: list[str] = []
    depth = 0
    current: list[str] = []
    for char in params:
        if char == "<":
            depth += 1
        elif char == ">" and depth > 0:
            depth -= 1
        elif char == "," and depth == 0:
            parts.append("".join(current))
            current = []
            continue
        current.append(char)
    parts.append("".join(current))
    return parts
