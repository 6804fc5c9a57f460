"""Built-in templates.

The ``default`` template renders one module of plain functions, one per
operation, each wrapping a call on an :class:`httpx.Client`::

    def getPetById(client: Client, petId: Any, **kwargs: Any) -> Response:
        '''Find pet by ID'''
        return client.request('GET', '/pet/{petId}'.format(**{'petId': petId}), **kwargs)
"""

import ast
import re

from pontgen.codegen.ast_utils import (
    ImportCollector,
    _all,
    _argument,
    _attr,
    _call,
    _func,
    _name,
)
from pontgen.codegen.template import DEFAULT_TEMPLATE, register_template
from pontgen.codegen.types import ResolvedOperation, ServiceModule
from pontgen.codegen.utils import sanitize_parameter_field_name

__all__ = ['render_operation', 'render_service_module']

_PLACEHOLDER_RE = re.compile(r'\{([^}]+)\}')
_BODY_METHODS = frozenset({'post', 'put', 'patch', 'delete'})
_RESERVED_ARGS = frozenset({'client', 'body', 'kwargs', 'params'})


def _unique(name: str, taken: set[str]) -> str:
    while name in taken or name in _RESERVED_ARGS:
        name += '_'
    taken.add(name)
    return name


def _url_expr(path: str, placeholders: dict[str, str]) -> ast.expr:
    if not placeholders:
        return ast.Constant(value=path)

    mapping = ast.Dict(
        keys=[ast.Constant(value=raw) for raw in placeholders],
        values=[_name(arg) for arg in placeholders.values()],
    )
    return _call(
        _attr(ast.Constant(value=path), 'format'),
        keywords=[ast.keyword(arg=None, value=mapping)],
    )


def _params_expr(query: dict[str, str]) -> ast.expr:
    # {k: v for k, v in {...}.items() if v is not None}
    return ast.DictComp(
        key=_name('k'),
        value=_name('v'),
        generators=[
            ast.comprehension(
                target=ast.Tuple(
                    elts=[
                        ast.Name(id='k', ctx=ast.Store()),
                        ast.Name(id='v', ctx=ast.Store()),
                    ],
                    ctx=ast.Store(),
                ),
                iter=_call(
                    _attr(
                        ast.Dict(
                            keys=[ast.Constant(value=raw) for raw in query],
                            values=[_name(arg) for arg in query.values()],
                        ),
                        'items',
                    )
                ),
                ifs=[
                    ast.Compare(
                        left=_name('v'), ops=[ast.IsNot()], comparators=[ast.Constant(None)]
                    )
                ],
                is_async=0,
            )
        ],
    )


def render_operation(resolved: ResolvedOperation) -> ast.FunctionDef:
    """Build the function wrapping one operation."""
    operation = resolved.operation
    taken: set[str] = set()

    placeholders = {
        raw: _unique(sanitize_parameter_field_name(raw), taken)
        for raw in _PLACEHOLDER_RE.findall(operation.path)
    }
    query = {
        p.name: _unique(p.name_sanitized, taken)
        for p in operation.query_parameters
    }

    args = [_argument('client', _name('Client'))]
    args += [_argument(arg, _name('Any')) for arg in placeholders.values()]

    kwonlyargs = [_argument(arg, _name('Any')) for arg in query.values()]
    keywords = []

    if query:
        keywords.append(ast.keyword(arg='params', value=_params_expr(query)))

    if operation.method in _BODY_METHODS:
        kwonlyargs.append(_argument('body', _name('Any')))
        keywords.append(ast.keyword(arg='json', value=_name('body')))

    keywords.append(ast.keyword(arg=None, value=_name('kwargs')))

    body: list[ast.stmt] = []
    if operation.description:
        body.append(ast.Expr(value=ast.Constant(value=operation.description)))

    body.append(
        ast.Return(
            value=_call(
                _attr('client', 'request'),
                args=[
                    ast.Constant(value=operation.method.upper()),
                    _url_expr(operation.path, placeholders),
                ],
                keywords=keywords,
            )
        )
    )

    return _func(
        name=resolved.identifier,
        args=args,
        body=body,
        returns=_name('Response'),
        kwargs=_argument('kwargs', _name('Any')),
        kwonlyargs=kwonlyargs,
        kw_defaults=[ast.Constant(value=None) for _ in kwonlyargs],
    )


@register_template(DEFAULT_TEMPLATE)
def render_service_module(module: ServiceModule) -> str:
    """Render a module of httpx call wrappers."""
    imports = ImportCollector()
    imports.add_import('typing', 'Any')
    imports.add_imports({'httpx': {'Client', 'Response'}})

    body: list[ast.stmt] = []
    if module.description:
        body.append(ast.Expr(value=ast.Constant(value=module.description)))

    body += imports.to_ast()
    body.append(_all(op.identifier for op in module.operations))
    body += [render_operation(op) for op in module.operations]

    mod = ast.Module(body=body, type_ignores=[])
    ast.fix_missing_locations(mod)
    return ast.unparse(mod) + '\n'
