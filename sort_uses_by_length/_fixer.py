"""A parsed PHP file and the token-level fixer that edits it."""
from __future__ import annotations

from pathlib import Path

from sort_uses_by_length._data import Diagnostic
from sort_uses_by_length._tokens import Token
from sort_uses_by_length._tokens import detect_eol
from sort_uses_by_length._tokens import tokenize


class Fixer:
    """Collects edits to token contents.

    Edits made inside a changeset are applied together by `end_changeset`,
    or not at all when one of the tokens was already changed in this pass.
    """

    def __init__(self, tokens: list[Token], enabled: bool = False) -> None:
        self.enabled = enabled
        self.num_fixes = 0
        self._contents = [token.content for token in tokens]
        self._fixed: set[int] = set()
        self._changeset: dict[int, str] | None = None

    def begin_changeset(self) -> None:
        self._changeset = {}

    def end_changeset(self) -> bool:
        changeset, self._changeset = self._changeset, None
        if not changeset:
            return False
        if self._fixed.intersection(changeset):
            return False

        for pointer, content in changeset.items():
            self._contents[pointer] = content
        self._fixed.update(changeset)
        self.num_fixes += 1
        return True

    def get_token_content(self, pointer: int) -> str:
        if self._changeset is not None and pointer in self._changeset:
            return self._changeset[pointer]
        return self._contents[pointer]

    def replace_token(self, pointer: int, content: str) -> bool:
        if self._changeset is not None:
            self._changeset[pointer] = content
            return True
        if pointer in self._fixed:
            return False

        self._contents[pointer] = content
        self._fixed.add(pointer)
        self.num_fixes += 1
        return True

    def add_content(self, pointer: int, content: str) -> bool:
        """Append content after the token's current content."""
        return self.replace_token(pointer, self.get_token_content(pointer) + content)

    def remove_between(self, start: int, end: int) -> None:
        """Blank out every token from start to end, both inclusive."""
        for pointer in range(start, end + 1):
            self.replace_token(pointer, "")

    def get_contents(self) -> str:
        return "".join(self._contents)


class PhpFile:
    """Tokens, diagnostics and fixer for one PHP source."""

    def __init__(
        self,
        source: str,
        path: Path | None = None,
        fix: bool = False,
    ) -> None:
        self.path = path
        self.source = source
        self.tokens = tokenize(source)
        self.eol_char = detect_eol(source)
        self.fixer = Fixer(self.tokens, enabled=fix)
        self.diagnostics: list[Diagnostic] = []

    def add_fixable_error(self, message: str, pointer: int, code: str) -> bool:
        """Record the error and return whether the caller should fix it."""
        token = self.tokens[pointer]
        self.diagnostics.append(
            Diagnostic(
                code=code,
                message=message,
                pointer=pointer,
                line=token.line,
                column=token.column,
            ),
        )
        return self.fixer.enabled
