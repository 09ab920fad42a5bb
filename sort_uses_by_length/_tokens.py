"""A small PHP tokenizer and the token lookups the checker needs."""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Collection

INLINE_HTML = "INLINE_HTML"
OPEN_TAG = "OPEN_TAG"
CLOSE_TAG = "CLOSE_TAG"
WHITESPACE = "WHITESPACE"
COMMENT = "COMMENT"
DOC_COMMENT = "DOC_COMMENT"
STRING = "STRING"
VARIABLE = "VARIABLE"
NAME = "NAME"
NUMBER = "NUMBER"
SEMICOLON = "SEMICOLON"
PUNCT = "PUNCT"

# Comments that can sit on the line above a statement (docblocks excluded)
INLINE_COMMENT_KINDS = frozenset({COMMENT})
EMPTY_KINDS = frozenset({WHITESPACE, COMMENT, DOC_COMMENT})

NEWLINE_RE = re.compile(r"\r\n|\n|\r")
_OPEN_TAG_RE = re.compile(r"<\?php(?:\r\n|\n|\r|[ \t])?|<\?=", re.IGNORECASE)
_PHP_TOKEN_RE = re.compile(
    r"""
    (?P<CLOSE_TAG>\?>(?:\r\n|\n|\r)?)
    |(?P<WHITESPACE>[ \t\f\v]*(?:\r\n|\n|\r)|[ \t\f\v]+)
    |(?P<DOC_COMMENT>/\*\*(?!/).*?(?:\*/|\Z))
    |(?P<BLOCK_COMMENT>/\*.*?(?:\*/|\Z))
    |(?P<LINE_COMMENT>(?://|\#(?!\[))(?:[^\r\n?]|\?(?!>))*(?:\r\n|\n|\r)?)
    |(?P<HEREDOC><<<[ \t]*(?P<quote>["']?)(?P<label>[^\W\d]\w*)(?P=quote)
        (?:\r\n|\n|\r)(?:.*?(?:\r\n|\n|\r))?[ \t]*(?P=label)(?!\w))
    |(?P<STRING>'(?:[^'\\]|\\.)*'?|"(?:[^"\\]|\\.)*"?|`(?:[^`\\]|\\.)*`?)
    |(?P<VARIABLE>\$+[^\W\d]\w*)
    |(?P<NAME>\\?[^\W\d]\w*(?:\\[^\W\d]\w*)*\\?)
    |(?P<NUMBER>\d[\w.]*)
    |(?P<SEMICOLON>;)
    |(?P<PUNCT>.)
    """,
    re.VERBOSE | re.DOTALL,
)
_GROUP_TO_KIND = {
    "BLOCK_COMMENT": COMMENT,
    "LINE_COMMENT": COMMENT,
    "HEREDOC": STRING,
}


@dataclass(frozen=True)
class Token:
    kind: str
    content: str
    line: int
    column: int

    @property
    def end_line(self) -> int:
        """Line on which the token's last visible character sits."""
        return self.line + len(NEWLINE_RE.findall(self.content.rstrip("\r\n")))

    def is_keyword(self, *words: str) -> bool:
        return self.kind == NAME and self.content.lower() in words


def tokenize(source: str) -> list[Token]:
    """Split PHP source into tokens whose contents join back to the source."""
    tokens: list[Token] = []
    pos = 0
    line = 1
    column = 1
    in_php = False

    def emit(kind: str, content: str) -> None:
        nonlocal line, column, pos
        tokens.append(Token(kind, content, line, column))
        newlines = list(NEWLINE_RE.finditer(content))
        if newlines:
            line += len(newlines)
            column = len(content) - newlines[-1].end() + 1
        else:
            column += len(content)
        pos += len(content)

    while pos < len(source):
        if not in_php:
            match = _OPEN_TAG_RE.search(source, pos)
            if match is None:
                emit(INLINE_HTML, source[pos:])
                break
            if match.start() > pos:
                emit(INLINE_HTML, source[pos:match.start()])
            emit(OPEN_TAG, match.group())
            in_php = True
            continue

        match = _PHP_TOKEN_RE.match(source, pos)
        if match is None or match.lastgroup is None:
            emit(PUNCT, source[pos])
            continue

        group = match.lastgroup
        emit(_GROUP_TO_KIND.get(group, group), match.group())
        if group == CLOSE_TAG:
            in_php = False

    return tokens


def detect_eol(source: str) -> str:
    """Return the line ending used by the first line of the source."""
    match = NEWLINE_RE.search(source)
    return match.group() if match else "\n"


def _kinds(kinds: str | Collection[str]) -> Collection[str]:
    return (kinds,) if isinstance(kinds, str) else kinds


def find_next(
    tokens: list[Token],
    kinds: str | Collection[str],
    start: int,
    end: int | None = None,
) -> int | None:
    """Find the first token of the given kind(s) in [start, end)."""
    kinds = _kinds(kinds)
    stop = len(tokens) if end is None else min(end, len(tokens))
    for i in range(start, stop):
        if tokens[i].kind in kinds:
            return i
    return None


def find_previous(
    tokens: list[Token],
    kinds: str | Collection[str],
    start: int,
    end: int = 0,
) -> int | None:
    """Find the last token of the given kind(s) in [end, start]."""
    kinds = _kinds(kinds)
    for i in range(min(start, len(tokens) - 1), end - 1, -1):
        if tokens[i].kind in kinds:
            return i
    return None


def find_next_effective(tokens: list[Token], start: int) -> int | None:
    """Find the next token that is neither whitespace nor a comment."""
    for i in range(start, len(tokens)):
        if tokens[i].kind not in EMPTY_KINDS:
            return i
    return None


def find_previous_effective(tokens: list[Token], start: int) -> int | None:
    for i in range(min(start, len(tokens) - 1), -1, -1):
        if tokens[i].kind not in EMPTY_KINDS:
            return i
    return None


def find_previous_non_whitespace(tokens: list[Token], start: int) -> int | None:
    for i in range(min(start, len(tokens) - 1), -1, -1):
        if tokens[i].kind != WHITESPACE:
            return i
    return None


def get_content(tokens: list[Token], start: int, end: int) -> str:
    """Join token contents from start to end, both inclusive."""
    return "".join(token.content for token in tokens[start:end + 1])


def get_multiline_comment_start(tokens: list[Token], comment_end: int) -> int:
    """Walk back over comments on directly preceding lines.

    Consecutive `//` lines form one comment block; the returned pointer is
    the first comment of that block.
    """
    start = comment_end
    while True:
        previous = find_previous_non_whitespace(tokens, start - 1)
        if previous is None or tokens[previous].kind not in INLINE_COMMENT_KINDS:
            return start
        if tokens[previous].end_line + 1 != tokens[start].line:
            return start
        start = previous
