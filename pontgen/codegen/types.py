"""Data records passed between the stages of a generation run.

- Operation, Parameter and Tag are read from the API description and never
  mutated afterwards
- ResolvedOperation pairs an operation with its generated identifier
- ServiceModule is one generated module, the unit handed to a template
"""

import dataclasses
from typing import Literal

__all__ = [
    'Parameter',
    'Operation',
    'Tag',
    'ResolvedOperation',
    'ServiceModule',
]


@dataclasses.dataclass(frozen=True)
class Parameter:
    name: str
    name_sanitized: str
    location: Literal['query', 'path', 'header', 'cookie', 'body', 'formData']
    required: bool
    description: str | None = None


@dataclasses.dataclass(frozen=True)
class Tag:
    name: str
    description: str = ''


@dataclasses.dataclass(frozen=True)
class Operation:
    """One callable API action as described by the API description.

    Attributes:
        path: The URL template, e.g. ``/users/{id}``.
        method: Lower-case HTTP verb.
        operation_id: The operationId, if the description carries one.
        description: Summary or description of the operation.
        tags: Tag names, the first one decides the owning module.
        parameters: Declared parameters, path-level ones included.
    """

    path: str
    method: str
    operation_id: str | None = None
    description: str = ''
    tags: tuple[str, ...] = ()
    parameters: tuple[Parameter, ...] = ()

    @property
    def path_parameters(self) -> list[Parameter]:
        return [p for p in self.parameters if p.location == 'path']

    @property
    def query_parameters(self) -> list[Parameter]:
        return [p for p in self.parameters if p.location == 'query']

    def __str__(self) -> str:
        return f'{self.method.upper()} {self.path}'


@dataclasses.dataclass(frozen=True)
class ResolvedOperation:
    operation: Operation
    identifier: str

    @property
    def name(self) -> str:
        """Alias for identifier, the key used for collision checks."""
        return self.identifier

    def __str__(self) -> str:
        return f"'{self.operation}'"


@dataclasses.dataclass
class ServiceModule:
    """A group of operations emitted into one generated module.

    Attributes:
        name: Module name, a valid Python identifier.
        description: Human readable description, used as module docstring.
        same_path: Longest path prefix shared by every operation.
        operations: Operations with their identifiers, in description order.
    """

    name: str
    description: str = ''
    same_path: str = ''
    operations: list[ResolvedOperation] = dataclasses.field(default_factory=list)

    def __str__(self) -> str:
        return f"module '{self.name}'"
