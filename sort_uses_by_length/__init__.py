from __future__ import annotations

from sort_uses_by_length._autofix import fix_order_by_length
from sort_uses_by_length._checker import CODE_INCORRECT_ORDER
from sort_uses_by_length._checker import ImportOrderChecker
from sort_uses_by_length._checker import check_source
from sort_uses_by_length._checker import fix_source
from sort_uses_by_length._data import Diagnostic
from sort_uses_by_length._data import UseKind
from sort_uses_by_length._data import UseStatement
from sort_uses_by_length._detection import compare_use_statements
from sort_uses_by_length._detection import find_first_violation
from sort_uses_by_length._fixer import Fixer
from sort_uses_by_length._fixer import PhpFile
from sort_uses_by_length._main import check_file
from sort_uses_by_length._main import collect_php_files
from sort_uses_by_length._main import main
from sort_uses_by_length._use_statements import get_file_use_statements

__all__ = [
    # Data types
    "UseKind",
    "UseStatement",
    "Diagnostic",
    # Ordering
    "compare_use_statements",
    "find_first_violation",
    "fix_order_by_length",
    # File handling
    "PhpFile",
    "Fixer",
    "get_file_use_statements",
    "ImportOrderChecker",
    "CODE_INCORRECT_ORDER",
    "check_source",
    "fix_source",
    "check_file",
    # CLI
    "collect_php_files",
    "main",
]
