"""AST helpers and import collection for the built-in templates.

This module provides helper functions for building Python AST nodes and a
collector that turns gathered imports into sorted import statements.
"""

import ast
import sys
from collections.abc import Iterable

__all__ = [
    # AST helpers
    '_name',
    '_attr',
    '_argument',
    '_call',
    '_func',
    '_all',
    # Import collection
    'ImportCollector',
]


def _name(name: str) -> ast.Name:
    return ast.Name(id=name, ctx=ast.Load())


def _attr(value: str | ast.expr, attr: str) -> ast.Attribute:
    return ast.Attribute(
        value=_name(value) if isinstance(value, str) else value,
        attr=attr,
        ctx=ast.Load(),
    )


def _argument(name: str, value: ast.expr | None = None) -> ast.arg:
    return ast.arg(
        arg=name,
        annotation=value,
    )


def _call(
    func: ast.expr,
    args: list[ast.expr] | None = None,
    keywords: list[ast.keyword] | None = None,
) -> ast.Call:
    return ast.Call(
        func=func,
        args=args or [],
        keywords=keywords or [],
    )


def _func(
    name: str,
    args: list[ast.arg],
    body: list[ast.stmt],
    returns: ast.expr | None = None,
    kwargs: ast.arg | None = None,
    kwonlyargs: list[ast.arg] | None = None,
    kw_defaults: list[ast.expr] | None = None,
) -> ast.FunctionDef:
    return ast.FunctionDef(
        name=name,
        args=ast.arguments(
            posonlyargs=[],
            args=args,
            kwarg=kwargs,
            kwonlyargs=kwonlyargs or [],
            kw_defaults=kw_defaults or [],
            defaults=[],
        ),
        body=body,
        decorator_list=[],
        returns=returns,
        type_params=[],
    )


def _all(names: Iterable[str]) -> ast.Assign:
    return ast.Assign(
        targets=[ast.Name(id='__all__', ctx=ast.Store())],
        value=ast.Tuple(
            elts=[ast.Constant(value=name) for name in names], ctx=ast.Load()
        ),
    )


# =============================================================================
# Import Collection
# =============================================================================


class ImportCollector:
    """Collects imports for generated code and emits them sorted.

    Example:
        >>> collector = ImportCollector()
        >>> collector.add_import('typing', 'Any')
        >>> collector.add_imports({'httpx': {'Client', 'Response'}})
        >>> imports = collector.to_ast()
    """

    def __init__(self):
        self._imports: dict[str, set[str]] = {}

    def add_imports(self, imports: dict[str, set[str]]) -> None:
        for module, names in imports.items():
            self._imports.setdefault(module, set()).update(names)

    def add_import(self, module: str, name: str) -> None:
        self._imports.setdefault(module, set()).add(name)

    def _get_import_category(self, module: str) -> int:
        """Return 0 for standard library, 1 for third-party, 2 for relative imports."""
        if module.startswith('.'):
            return 2

        if module.split('.')[0] in sys.stdlib_module_names:
            return 0

        return 1

    def to_ast(self) -> list[ast.ImportFrom]:
        """Convert collected imports to ``from ... import ...`` statements.

        Standard library imports come first, then third-party, then
        relative imports; modules and names are sorted alphabetically.
        """
        import_stmts = []

        sorted_modules = sorted(
            self._imports.items(),
            key=lambda x: (self._get_import_category(x[0]), x[0]),
        )

        for module, names in sorted_modules:
            if module.startswith('.'):
                level = len(module) - len(module.lstrip('.'))
                import_module = module.lstrip('.') or None
            else:
                level = 0
                import_module = module

            import_stmts.append(
                ast.ImportFrom(
                    module=import_module,
                    names=[ast.alias(name=name) for name in sorted(names)],
                    level=level,
                )
            )
        return import_stmts

    def has_imports(self) -> bool:
        return bool(self._imports)
