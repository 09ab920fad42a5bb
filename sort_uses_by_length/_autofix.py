from __future__ import annotations

import functools
from typing import Sequence

from sort_uses_by_length._data import UseStatement
from sort_uses_by_length._detection import compare_use_statements
from sort_uses_by_length._fixer import PhpFile
from sort_uses_by_length._tokens import COMMENT
from sort_uses_by_length._tokens import DOC_COMMENT
from sort_uses_by_length._tokens import INLINE_COMMENT_KINDS
from sort_uses_by_length._tokens import NEWLINE_RE
from sort_uses_by_length._tokens import SEMICOLON
from sort_uses_by_length._tokens import find_next
from sort_uses_by_length._tokens import find_previous_non_whitespace
from sort_uses_by_length._tokens import get_content
from sort_uses_by_length._tokens import get_multiline_comment_start


def _has_blank_line(whitespace: str) -> bool:
    """Check whether whitespace spans at least one empty line."""
    lines = NEWLINE_RE.split(whitespace)
    return any(not line.strip() for line in lines[1:-1])


def _find_attached_comment(
    php_file: PhpFile,
    pointer: int,
) -> tuple[int, int] | None:
    """Find the first and last token of the comment block above a statement.

    The comment must be an inline comment with no blank line between it and
    the statement.
    """
    tokens = php_file.tokens
    before = find_previous_non_whitespace(tokens, pointer - 1)
    if before is None or tokens[before].kind not in INLINE_COMMENT_KINDS:
        return None

    # Line comments carry their own newline
    whitespace = get_content(tokens, before + 1, pointer - 1)
    if tokens[before].content.endswith(("\n", "\r")):
        whitespace = "\n" + whitespace
    if _has_blank_line(whitespace):
        return None

    return get_multiline_comment_start(tokens, before), before


def _find_detached_comments(php_file: PhpFile, start: int, end: int) -> str | None:
    """Return the raw text of comments in [start, end), if there are any."""
    tokens = php_file.tokens
    comments = [
        i for i in range(start, end)
        if tokens[i].kind in (COMMENT, DOC_COMMENT)
    ]
    if not comments:
        return None
    return get_content(tokens, comments[0], comments[-1]).rstrip("\r\n")


def _render(use_statement: UseStatement) -> str:
    keyword = use_statement.kind.keyword
    use_type = f"{keyword} " if keyword is not None else ""

    if use_statement.name_as_referenced == use_statement.unqualified_name:
        return f"use {use_type}{use_statement.fully_qualified_name};"

    return (
        f"use {use_type}{use_statement.fully_qualified_name} "
        f"as {use_statement.name_as_referenced};"
    )


def fix_order_by_length(
    php_file: PhpFile,
    use_statements: Sequence[UseStatement],
    psr12_compatible: bool = True,
) -> bool:
    """Rewrite a group of use statements in sorted order.

    Comments directly above a statement move with it. Other comments inside
    the group stay at the same position in the list, followed by a blank
    line. The whole group is replaced in one changeset; returns whether the
    fixer accepted it.
    """
    tokens = php_file.tokens
    eol = php_file.eol_char

    first_pointer = use_statements[0].pointer
    last_semicolon = find_next(tokens, SEMICOLON, use_statements[-1].pointer)
    if last_semicolon is None:
        return False

    comments_before: dict[int, str] = {}
    # Comments not attached to a statement, keyed by position in the group
    slot_comments: dict[int, str] = {}
    previous_pointer: int | None = None

    for index, use_statement in enumerate(use_statements):
        pointer = use_statement.pointer
        if pointer == previous_pointer:
            continue  # Another name from the same statement

        region_end = pointer
        attached = _find_attached_comment(php_file, pointer)
        if attached is not None:
            comment_start, comment_end = attached
            comments_before[pointer] = get_content(tokens, comment_start, comment_end)
            region_end = comment_start
            if index == 0:
                first_pointer = comment_start

        if previous_pointer is not None:
            # Bounded by this statement, so it is the previous one's semicolon
            semicolon = find_next(tokens, SEMICOLON, previous_pointer, pointer)
            if semicolon is None:
                return False
            detached = _find_detached_comments(php_file, semicolon + 1, region_end)
            if detached is not None:
                slot_comments[index] = detached

        previous_pointer = pointer

    ordered = sorted(
        use_statements,
        key=functools.cmp_to_key(
            functools.partial(
                compare_use_statements,
                psr12_compatible=psr12_compatible,
            ),
        ),
    )

    lines: list[str] = []
    emitted: set[int] = set()
    for index, use_statement in enumerate(ordered):
        pointer = use_statement.pointer
        text = ""
        if index in slot_comments:
            text += slot_comments[index] + eol + eol
        if pointer in comments_before and pointer not in emitted:
            text += comments_before[pointer].rstrip("\r\n") + eol
        emitted.add(pointer)
        lines.append(text + _render(use_statement))

    fixer = php_file.fixer
    fixer.begin_changeset()
    fixer.remove_between(first_pointer, last_semicolon)
    fixer.add_content(first_pointer, eol.join(lines))
    return fixer.end_changeset()
