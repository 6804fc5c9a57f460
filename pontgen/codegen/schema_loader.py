"""Loading of API descriptions and extraction of their operations.

This module fetches an OpenAPI 3 or Swagger 2 document from a URL or a
local file (JSON or YAML) and reads the plain operation metadata the
naming engine works on. Schemas and types are not interpreted.
"""

import json
import logging
from pathlib import Path
from typing import Any

import httpx
import yaml

from pontgen.codegen.types import Operation, Parameter, Tag
from pontgen.codegen.utils import is_url, sanitize_parameter_field_name
from pontgen.exceptions import SchemaLoadError

logger = logging.getLogger(__name__)

__all__ = ['HTTP_METHODS', 'SchemaLoader', 'extract_operations', 'extract_tags']

HTTP_METHODS = ('get', 'put', 'post', 'delete', 'options', 'head', 'patch', 'trace')


class SchemaLoader:
    """Loads API descriptions from URLs or file paths.

    Example:
        >>> loader = SchemaLoader()
        >>> document = loader.load('https://api.example.com/v2/api-docs')
        >>> # or
        >>> document = loader.load('/path/to/openapi.yaml')
    """

    def __init__(
        self,
        http_client: httpx.Client | None = None,
        base_path: str | Path | None = None,
        timeout: float = 30.0,
    ):
        """Initialize the loader.

        Args:
            http_client: Optional HTTP client to use for URL requests.
            base_path: Base path for relative file sources. Defaults to the
                current working directory.
            timeout: Timeout in seconds for URL requests without a client.
        """
        self._http_client = http_client
        self._base_path = Path(base_path) if base_path else Path.cwd()
        self._timeout = timeout

    def load(self, source: str) -> dict[str, Any]:
        """Load an API description as a plain dictionary.

        Raises:
            SchemaLoadError: If the source cannot be fetched or parsed, or
                does not contain a ``paths`` mapping.
        """
        if is_url(source):
            content = self._load_from_url(source)
        else:
            content = self._load_from_file(source)

        if not isinstance(content, dict) or not isinstance(content.get('paths'), dict):
            raise SchemaLoadError(
                source, cause=ValueError('document has no "paths" mapping')
            )

        logger.debug(f'Loaded API description from {source}')
        return content

    def _load_from_url(self, url: str) -> Any:
        try:
            if self._http_client:
                response = self._http_client.get(url)
            else:
                response = httpx.get(url, follow_redirects=True, timeout=self._timeout)

            response.raise_for_status()
            content_type = response.headers.get('content-type', '')
            content = response.text

            if 'yaml' in content_type or url.endswith(('.yaml', '.yml')):
                return yaml.safe_load(content)
            return json.loads(content)

        except httpx.HTTPError as e:
            raise SchemaLoadError(url, cause=e)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise SchemaLoadError(url, cause=e)

    def _load_from_file(self, file_path: str) -> Any:
        path = Path(file_path)
        if not path.is_absolute():
            path = self._base_path / path

        if not path.exists():
            raise SchemaLoadError(
                str(file_path), cause=FileNotFoundError(f'File not found: {path}')
            )

        try:
            content = path.read_text(encoding='utf-8')
            if path.suffix.lower() in ('.yaml', '.yml'):
                return yaml.safe_load(content)
            return json.loads(content)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise SchemaLoadError(str(file_path), cause=e)
        except OSError as e:
            raise SchemaLoadError(str(file_path), cause=e)


def _read_parameters(raw_parameters: list[Any] | None) -> list[Parameter]:
    parameters = []

    for raw in raw_parameters or []:
        # Component references are not resolved, they carry no usable name.
        if not isinstance(raw, dict) or '$ref' in raw or not raw.get('name'):
            continue

        location = raw.get('in', 'query')
        parameters.append(
            Parameter(
                name=raw['name'],
                name_sanitized=sanitize_parameter_field_name(raw['name']),
                location=location,
                required=bool(raw.get('required', location == 'path')),
                description=raw.get('description'),
            )
        )

    return parameters


def _merge_parameters(
    path_level: list[Parameter], operation_level: list[Parameter]
) -> tuple[Parameter, ...]:
    # Operation-level parameters override path-level ones with the same name and location.
    merged = {(p.name, p.location): p for p in path_level}
    merged.update({(p.name, p.location): p for p in operation_level})
    return tuple(merged.values())


def extract_operations(document: dict[str, Any]) -> list[Operation]:
    """Read every operation of an OpenAPI 3 or Swagger 2 document.

    Operations are returned in document order: paths as listed, and verbs
    in :data:`HTTP_METHODS` order within a path.
    """
    operations = []

    for path, path_item in (document.get('paths') or {}).items():
        if not isinstance(path_item, dict):
            continue

        path_parameters = _read_parameters(path_item.get('parameters'))

        for method in HTTP_METHODS:
            raw = path_item.get(method)
            if not isinstance(raw, dict):
                continue

            operations.append(
                Operation(
                    path=path,
                    method=method,
                    operation_id=raw.get('operationId') or None,
                    description=raw.get('summary') or raw.get('description') or '',
                    tags=tuple(raw.get('tags') or ()),
                    parameters=_merge_parameters(
                        path_parameters, _read_parameters(raw.get('parameters'))
                    ),
                )
            )

    return operations


def extract_tags(document: dict[str, Any]) -> dict[str, Tag]:
    """Return the document's declared tags keyed by name."""
    tags = {}

    for raw in document.get('tags') or []:
        if isinstance(raw, dict) and raw.get('name'):
            tags[raw['name']] = Tag(raw['name'], raw.get('description') or '')

    return tags
