"""Tests for use statement extraction (_use_statements.py)."""
from __future__ import annotations

import pytest

from sort_uses_by_length import UseKind
from sort_uses_by_length import get_file_use_statements
from sort_uses_by_length._tokens import tokenize


def _groups(source):
    """Flatten to lists of (kind, name, alias) tuples per group."""
    result = []
    for groups in get_file_use_statements(tokenize(source)).values():
        for group in groups:
            result.append(
                [(u.kind, u.fully_qualified_name, u.alias) for u in group],
            )
    return result


# =============================================================================
# Statement forms
# =============================================================================


@pytest.mark.parametrize(
    ('source', 'expected'),
    (
        pytest.param(
            '<?php\nuse App\\Foo;\n',
            [(UseKind.CLASS, 'App\\Foo', None)],
            id='class import',
        ),
        pytest.param(
            '<?php\nuse function App\\f;\n',
            [(UseKind.FUNCTION, 'App\\f', None)],
            id='function import',
        ),
        pytest.param(
            '<?php\nuse CONST App\\X;\n',
            [(UseKind.CONSTANT, 'App\\X', None)],
            id='const import keyword is case insensitive',
        ),
        pytest.param(
            '<?php\nuse \\App\\Foo as Bar;\n',
            [(UseKind.CLASS, 'App\\Foo', 'Bar')],
            id='leading backslash and alias',
        ),
        pytest.param(
            '<?php\nuse App\\Foo as Foo;\n',
            [(UseKind.CLASS, 'App\\Foo', None)],
            id='alias equal to name is dropped',
        ),
        pytest.param(
            '<?php\nuse App\\A, App\\B as C;\n',
            [
                (UseKind.CLASS, 'App\\A', None),
                (UseKind.CLASS, 'App\\B', 'C'),
            ],
            id='comma separated',
        ),
        pytest.param(
            '<?php\nuse App\\{Long, function f, const X, A as B,};\n',
            [
                (UseKind.CLASS, 'App\\Long', None),
                (UseKind.FUNCTION, 'App\\f', None),
                (UseKind.CONSTANT, 'App\\X', None),
                (UseKind.CLASS, 'App\\A', 'B'),
            ],
            id='mixed group use with trailing comma',
        ),
        pytest.param(
            '<?php\nuse function App\\{f, g};\n',
            [
                (UseKind.FUNCTION, 'App\\f', None),
                (UseKind.FUNCTION, 'App\\g', None),
            ],
            id='function group use',
        ),
        pytest.param(
            '<?php\nuse /* odd */ App\\Foo;\n',
            [(UseKind.CLASS, 'App\\Foo', None)],
            id='comment inside statement',
        ),
    ),
)
def test_statement_forms(source, expected):
    assert _groups(source) == [expected]


def test_records_share_statement_pointer():
    groups = get_file_use_statements(tokenize('<?php\nuse A, B;\n'))
    (group,) = next(iter(groups.values()))
    assert group[0].pointer == group[1].pointer
    assert group[1].name_as_referenced == 'B'


def test_unterminated_statement_is_skipped():
    assert _groups('<?php\nuse App\\Foo') == []


# =============================================================================
# What is not an import
# =============================================================================


@pytest.mark.parametrize(
    'source',
    (
        pytest.param(
            '<?php\nclass A\n{\n    use SomeTrait;\n}\n',
            id='trait use in class',
        ),
        pytest.param(
            '<?php\n$f = function () use ($x) {\n    return $x;\n};\n',
            id='closure use',
        ),
        pytest.param(
            '<?php\n$obj->use();\n',
            id='method named use',
        ),
        pytest.param(
            '<?php\n$s = "use App\\\\Foo;";\n',
            id='inside a string',
        ),
        pytest.param(
            '<?php\n// use App\\Foo;\n',
            id='inside a comment',
        ),
        pytest.param(
            '<html>use App\\Foo;</html>\n',
            id='inline html',
        ),
    ),
)
def test_not_imports(source):
    assert _groups(source) == []


# =============================================================================
# Grouping
# =============================================================================


def test_groups_keyed_by_namespace():
    source = (
        '<?php\n'
        'namespace First;\n'
        'use B\\Long;\n'
        'use A;\n'
        'namespace Second;\n'
        'use D;\n'
    )
    groups = get_file_use_statements(tokenize(source))

    assert len(groups) == 2
    names = [
        [u.fully_qualified_name for u in scope[0]] for scope in groups.values()
    ]
    assert names == [['B\\Long', 'A'], ['D']]


def test_braced_namespaces():
    source = (
        '<?php\n'
        'namespace First {\n'
        '    use B\\Long;\n'
        '    class X { use T; }\n'
        '}\n'
        'namespace {\n'
        '    use A;\n'
        '}\n'
    )
    assert _groups(source) == [
        [(UseKind.CLASS, 'B\\Long', None)],
        [(UseKind.CLASS, 'A', None)],
    ]


def test_code_splits_groups():
    source = (
        '<?php\n'
        'use B\\Long;\n'
        '// comments do not split\n'
        '\n'
        'use A;\n'
        '$x = 1;\n'
        'use C;\n'
    )
    assert [[name for _, name, _ in g] for g in _groups(source)] == [
        ['B\\Long', 'A'],
        ['C'],
    ]


def test_no_php_code():
    assert get_file_use_statements(tokenize('plain text')) == {}
