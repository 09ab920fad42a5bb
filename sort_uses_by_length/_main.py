from __future__ import annotations

import argparse
import sys
from pathlib import Path

from sort_uses_by_length._checker import check_source
from sort_uses_by_length._checker import fix_source


def check_file(
    filepath: Path,
    fix: bool = False,
    psr12_compatible: bool = True,
) -> tuple[int, list[str]]:
    """Check a file for misordered use statements.

    Returns:
        Tuple of (number of violations found, list of messages)
    """
    messages: list[str] = []

    try:
        # Bytes keep the file's line endings intact
        source = filepath.read_bytes().decode("utf-8")
    except (OSError, UnicodeDecodeError) as e:
        messages.append(f"Error reading {filepath}: {e}")
        return 0, messages

    diagnostics = check_source(source, psr12_compatible=psr12_compatible, path=filepath)

    if not diagnostics:
        return 0, messages

    for diagnostic in diagnostics:
        messages.append(
            f"{filepath}:{diagnostic.line}:{diagnostic.column}: "
            f"{diagnostic.message} ({diagnostic.code})",
        )

    if fix:
        new_source = fix_source(source, psr12_compatible=psr12_compatible)
        if new_source != source:
            filepath.write_bytes(new_source.encode("utf-8"))
            messages.append(f"Fixed use statement order in {filepath}")

    return len(diagnostics), messages


def collect_php_files(paths: list[Path]) -> list[Path]:
    """Collect all PHP files from given paths."""
    files: list[Path] = []

    for path in paths:
        if path.is_file():
            if path.suffix == ".php":
                files.append(path)
        elif path.is_dir():
            files.extend(sorted(path.rglob("*.php")))

    return files


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Check that PHP use statements are sorted by length.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s src/Foo.php              Check a single file
  %(prog)s src/                     Check all .php files in a directory
  %(prog)s --fix src/               Sort use statements in place
  %(prog)s --no-psr12 src/          Put constant imports before functions
        """,
    )
    parser.add_argument(
        "paths",
        nargs="+",
        type=Path,
        help="Files or directories to check",
    )
    parser.add_argument(
        "--fix",
        action="store_true",
        help="Automatically reorder use statements",
    )
    parser.add_argument(
        "--quiet",
        "-q",
        action="store_true",
        help="Only show summary, not individual issues",
    )
    parser.add_argument(
        "--no-psr12",
        dest="psr12_compatible",
        action="store_false",
        help="Order classes, then constants, then functions",
    )

    args = parser.parse_args(argv)

    files = collect_php_files(args.paths)

    if not files:
        print("No PHP files found", file=sys.stderr)
        return 1

    total_violations = 0
    total_files_with_issues = 0

    for filepath in files:
        count, messages = check_file(
            filepath,
            fix=args.fix,
            psr12_compatible=args.psr12_compatible,
        )
        if count > 0:
            total_violations += count
            total_files_with_issues += 1
        elif messages:
            # Read errors
            for msg in messages:
                print(msg, file=sys.stderr)
            continue
        if not args.quiet:
            for msg in messages:
                print(msg)

    if total_violations > 0:
        action = "Fixed" if args.fix else "Found"
        print(
            f"\n{action} unsorted use statements "
            f"in {total_files_with_issues} file(s)",
        )
        return 0 if args.fix else 1
    else:
        print("All use statements are sorted")
        return 0


if __name__ == "__main__":
    raise SystemExit(main())
