from __future__ import annotations

from sort_uses_by_length._data import UseKind
from sort_uses_by_length._data import UseStatement
from sort_uses_by_length._tokens import CLOSE_TAG
from sort_uses_by_length._tokens import EMPTY_KINDS
from sort_uses_by_length._tokens import OPEN_TAG
from sort_uses_by_length._tokens import PUNCT
from sort_uses_by_length._tokens import SEMICOLON
from sort_uses_by_length._tokens import Token
from sort_uses_by_length._tokens import find_next
from sort_uses_by_length._tokens import find_next_effective
from sort_uses_by_length._tokens import find_previous_effective

_KIND_KEYWORDS = {
    "function": UseKind.FUNCTION,
    "const": UseKind.CONSTANT,
}


def _is_namespace_declaration(tokens: list[Token], pointer: int) -> bool:
    # 'namespace\foo()' is a single NAME token, so only declarations remain
    if not tokens[pointer].is_keyword("namespace"):
        return False
    following = find_next_effective(tokens, pointer + 1)
    return following is not None and (
        tokens[following].kind != PUNCT or tokens[following].content == "{"
    )


def _starts_statement(previous: Token) -> bool:
    if previous.kind in (OPEN_TAG, CLOSE_TAG, SEMICOLON):
        return True
    return previous.kind == PUNCT and previous.content in ("{", "}")


def get_use_statement_pointers(tokens: list[Token]) -> list[int]:
    """Find `use` keywords that import names.

    Trait uses inside class bodies and closure `use (...)` clauses are
    skipped; only file-level and namespace-level statements count.
    """
    pointers: list[int] = []
    # One entry per open brace: True when it opens a namespace body
    braces: list[bool] = []
    in_namespace_header = False

    for i, token in enumerate(tokens):
        if token.kind == SEMICOLON:
            in_namespace_header = False
        elif token.kind == PUNCT and token.content == "{":
            braces.append(in_namespace_header)
            in_namespace_header = False
        elif token.kind == PUNCT and token.content == "}":
            if braces:
                braces.pop()
        elif _is_namespace_declaration(tokens, i):
            in_namespace_header = True
        elif token.is_keyword("use") and all(braces):
            # Rules out closure 'use (...)' and calls such as '$x->use()'
            previous = find_previous_effective(tokens, i - 1)
            if previous is None or _starts_statement(tokens[previous]):
                pointers.append(i)

    return pointers


def parse_use_statement(tokens: list[Token], pointer: int) -> list[UseStatement]:
    """Parse the statement starting at a `use` keyword.

    A statement may import several names (`use A, B;` or the grouped
    `use A\\{B, function c};`), so a list is returned. Statements without a
    terminating semicolon yield nothing.
    """
    semicolon = find_next(tokens, SEMICOLON, pointer + 1)
    if semicolon is None:
        return []

    parts = [
        token.content
        for token in tokens[pointer + 1:semicolon]
        if token.kind not in EMPTY_KINDS
    ]

    kind = UseKind.CLASS
    if parts and parts[0].lower() in _KIND_KEYWORDS:
        kind = _KIND_KEYWORDS[parts[0].lower()]
        parts = parts[1:]

    prefix = ""
    if "{" in parts:
        brace = parts.index("{")
        prefix = "".join(parts[:brace])
        closing = parts.index("}") if "}" in parts else len(parts)
        parts = parts[brace + 1:closing]

    # Split on commas into the individual imported names
    items: list[list[str]] = [[]]
    for part in parts:
        if part == ",":
            items.append([])
        else:
            items[-1].append(part)

    statements: list[UseStatement] = []
    for item in items:
        if not item:
            continue  # Trailing comma in a group use

        item_kind = kind
        if len(item) > 1 and item[0].lower() in _KIND_KEYWORDS:
            item_kind = _KIND_KEYWORDS[item[0].lower()]
            item = item[1:]

        fully_qualified_name = (prefix + item[0]).lstrip("\\")
        alias = None
        if len(item) >= 3 and item[1].lower() == "as":
            alias = item[2]
            # 'use Foo\Bar as Bar' refers to the same name as 'use Foo\Bar'
            if alias == fully_qualified_name.rpartition("\\")[2]:
                alias = None

        statements.append(
            UseStatement(
                kind=item_kind,
                fully_qualified_name=fully_qualified_name,
                alias=alias,
                pointer=pointer,
            ),
        )

    return statements


def _only_comments_between(tokens: list[Token], start: int, end: int) -> bool:
    return all(token.kind in EMPTY_KINDS for token in tokens[start:end])


def get_file_use_statements(
    tokens: list[Token],
) -> dict[int, list[list[UseStatement]]]:
    """Collect a file's use statements into groups.

    Keys are the pointer of the closest preceding `namespace` declaration
    or open tag. Each scope holds one or more groups: runs of statements
    with nothing but whitespace and comments between them.
    """
    scope_pointers = [
        i
        for i, token in enumerate(tokens)
        if token.kind == OPEN_TAG or _is_namespace_declaration(tokens, i)
    ]
    if not scope_pointers:
        return {}

    groups: dict[int, list[list[UseStatement]]] = {}
    previous_semicolon: int | None = None
    for pointer in get_use_statement_pointers(tokens):
        statements = parse_use_statement(tokens, pointer)
        if not statements:
            continue

        scope = scope_pointers[0]
        for candidate in reversed(scope_pointers):
            if candidate < pointer:
                scope = candidate
                break

        scope_groups = groups.setdefault(scope, [])
        if (
            not scope_groups or
            previous_semicolon is None or
            not _only_comments_between(tokens, previous_semicolon + 1, pointer)
        ):
            scope_groups.append([])
        scope_groups[-1].extend(statements)
        previous_semicolon = find_next(tokens, SEMICOLON, pointer + 1)

    return groups
