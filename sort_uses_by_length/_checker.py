from __future__ import annotations

from pathlib import Path

from sort_uses_by_length._autofix import fix_order_by_length
from sort_uses_by_length._data import Diagnostic
from sort_uses_by_length._detection import find_first_violation
from sort_uses_by_length._fixer import PhpFile
from sort_uses_by_length._tokens import OPEN_TAG
from sort_uses_by_length._tokens import find_previous
from sort_uses_by_length._use_statements import get_file_use_statements

CODE_INCORRECT_ORDER = "IncorrectlyOrderedUses"

# Upper bound on check-and-fix passes over one file
MAX_FIX_PASSES = 50


class ImportOrderChecker:
    """Checks that use statements are sorted by length."""

    def __init__(self, psr12_compatible: bool = True) -> None:
        self.psr12_compatible = psr12_compatible

    def process(self, php_file: PhpFile, open_tag_pointer: int) -> None:
        """Report the first misordered use statement of the file.

        Runs only for the file's first open tag. At most one error is
        reported; when fixing, the offending group is rewritten.
        """
        if find_previous(php_file.tokens, OPEN_TAG, open_tag_pointer - 1) is not None:
            return

        file_use_statements = get_file_use_statements(php_file.tokens)
        for groups in file_use_statements.values():
            for use_statements in groups:
                index = find_first_violation(
                    use_statements,
                    psr12_compatible=self.psr12_compatible,
                )
                if index is None:
                    continue

                use_statement = use_statements[index]
                fix = php_file.add_fixable_error(
                    "Use statements should be sorted by length. "
                    f"The first wrong one is {use_statement.fully_qualified_name}.",
                    use_statement.pointer,
                    CODE_INCORRECT_ORDER,
                )
                if fix:
                    fix_order_by_length(
                        php_file,
                        use_statements,
                        psr12_compatible=self.psr12_compatible,
                    )
                return

    def run(self, php_file: PhpFile) -> None:
        for pointer, token in enumerate(php_file.tokens):
            if token.kind == OPEN_TAG:
                self.process(php_file, pointer)


def check_source(
    source: str,
    psr12_compatible: bool = True,
    path: Path | None = None,
) -> list[Diagnostic]:
    """Check PHP source without changing it."""
    php_file = PhpFile(source, path=path)
    ImportOrderChecker(psr12_compatible=psr12_compatible).run(php_file)
    return php_file.diagnostics


def fix_source(source: str, psr12_compatible: bool = True) -> str:
    """Return the source with every group of use statements sorted.

    Each pass fixes one group, so passes repeat until nothing changes.
    """
    checker = ImportOrderChecker(psr12_compatible=psr12_compatible)
    for _ in range(MAX_FIX_PASSES):
        php_file = PhpFile(source, fix=True)
        checker.run(php_file)
        if php_file.fixer.num_fixes == 0:
            break
        source = php_file.fixer.get_contents()
    return source
