"""Grouping of operations into modules and naming of both.

The resolver is the only place where the naming rules are combined:

1. The same-path prefix of the whole source decides the path group of
   untagged operations.
2. Operations are grouped by their first tag, or by path group.
3. Each module gets its own same-path prefix, which is stripped from the
   URL templates before identifiers are derived from them.
4. Duplicate identifiers inside a module, and duplicate module names, are
   reported as :class:`~pontgen.exceptions.NamingCollisionError` instead of
   silently overwriting one another.
"""

import logging
from collections.abc import Iterable, Mapping

from pontgen.codegen.identifiers import (
    get_identifier_from_operator_id,
    get_identifier_from_url,
    to_python_identifier,
)
from pontgen.codegen.paths import get_max_same_path, group_by_first_segment
from pontgen.codegen.types import Operation, ResolvedOperation, ServiceModule, Tag
from pontgen.codegen.utils import (
    get_duplicate_by_id,
    has_chinese,
    to_dash_default_case,
    transform_camel_case,
    transform_description,
)
from pontgen.exceptions import NamingCollisionError

logger = logging.getLogger(__name__)

__all__ = ['ModuleResolver', 'check_duplicates', 'module_name_for_tag']

DEFAULT_MODULE_NAME = 'root'


def _camel_or_self(name: str) -> str:
    return transform_camel_case(name) or name


def module_name_for_tag(tag: Tag, tagged_by_name: bool = True) -> str:
    """Derive a module name from a tag.

    With ``tagged_by_name`` the tag name is used, so ``'UserController'``
    and ``'user-controller'`` both become ``'user'``. Tag names written in
    Chinese, or ``tagged_by_name=False``, use the description instead:
    ``'Pet Store Controller'`` becomes ``'petStore'``.

    Returns an empty string when the tag offers nothing usable.
    """
    name = ''

    if tagged_by_name and not has_chinese(tag.name):
        name = _camel_or_self(to_dash_default_case(tag.name))
    elif tag.description:
        name = transform_description(tag.description)

    if not name and not has_chinese(tag.name):
        name = _camel_or_self(to_dash_default_case(tag.name))

    return name


def check_duplicates(entries: list, id_key: str, scope: str) -> None:
    """Raise a :class:`NamingCollisionError` naming both colliding entries."""
    duplicate = get_duplicate_by_id(entries, id_key)

    if duplicate is None:
        return

    key = getattr(duplicate, id_key)
    first = next(entry for entry in entries if getattr(entry, id_key) == key)
    raise NamingCollisionError(key, str(first), str(duplicate), scope=scope)


class ModuleResolver:
    """Resolves the modules of one data source.

    Example:
        >>> resolver = ModuleResolver(tags, using_operation_id=True)
        >>> modules = resolver.resolve(operations)
    """

    def __init__(
        self,
        tags: Mapping[str, Tag] | None = None,
        using_operation_id: bool = False,
        tagged_by_name: bool = True,
        scope: str = 'data source',
    ):
        self.tags = dict(tags or {})
        self.using_operation_id = using_operation_id
        self.tagged_by_name = tagged_by_name
        self.scope = scope

    def resolve(self, operations: Iterable[Operation]) -> list[ServiceModule]:
        """Group ``operations`` into named modules with named operations.

        Raises:
            IdentifierError: If an operation's URL yields no identifier.
            NamingCollisionError: If two operations of a module, or two
                modules, resolve to the same name.
        """
        operations = list(operations)
        paths = [op.path for op in operations]
        path_groups = group_by_first_segment(paths, get_max_same_path(paths))
        segments = {
            path: segment for segment, grouped in path_groups.items() for path in grouped
        }

        groups: dict[tuple[str, str], list[Operation]] = {}
        for operation in operations:
            groups.setdefault(self._group_key(operation, segments), []).append(operation)

        modules = [self._build_module(key, ops) for key, ops in groups.items()]
        check_duplicates(modules, 'name', scope=self.scope)

        logger.debug(
            f'Resolved {len(operations)} operations into {len(modules)} modules'
        )
        return modules

    def _group_key(
        self, operation: Operation, segments: Mapping[str, str]
    ) -> tuple[str, str]:
        if operation.tags:
            tag = self.tags.get(operation.tags[0], Tag(operation.tags[0]))
            if module_name_for_tag(tag, self.tagged_by_name):
                return 'tag', tag.name

        return 'path', segments[operation.path]

    def _module_name(self, kind: str, value: str) -> tuple[str, str]:
        if kind == 'tag':
            tag = self.tags.get(value, Tag(value))
            name = module_name_for_tag(tag, self.tagged_by_name)
            return name, tag.description or tag.name

        segment = value.strip('{}')
        if not segment:
            return DEFAULT_MODULE_NAME, ''
        return _camel_or_self(segment), segment

    def _build_module(self, key: tuple[str, str], operations: list[Operation]) -> ServiceModule:
        name, description = self._module_name(*key)
        module = ServiceModule(
            name=to_python_identifier(name),
            description=description,
            same_path=get_max_same_path(op.path for op in operations),
        )

        for operation in operations:
            module.operations.append(
                ResolvedOperation(operation, self._identifier(operation, module.same_path))
            )

        check_duplicates(module.operations, 'identifier', scope=str(module))
        return module

    def _identifier(self, operation: Operation, same_path: str) -> str:
        if self.using_operation_id and operation.operation_id:
            identifier = get_identifier_from_operator_id(operation.operation_id)
        else:
            identifier = get_identifier_from_url(operation.path, operation.method, same_path)

        return to_python_identifier(identifier)
