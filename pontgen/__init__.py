"""pontgen - Generate Python API clients from remote API descriptions.

pontgen reads one or more OpenAPI / Swagger descriptions and writes one
Python module per group of operations, each operation wrapped in a plain
function calling an httpx client. Operation and module names are derived
deterministically from URL templates, operation ids and tags, so
regenerating from an unchanged description yields the same code.

Quick Start:
    >>> from pontgen import Codegen, Config
    >>>
    >>> config = Config(origin_url='https://api.example.com/v2/api-docs')
    >>> for data_source in config.get_data_sources_config('.'):
    ...     Codegen(data_source).generate()

CLI Usage:
    $ pontgen generate                  # uses ./pont-config.json
    $ pontgen generate -c pont.yaml
    $ pontgen check                     # validate and show data sources
"""

from pontgen.codegen.codegen import Codegen
from pontgen.codegen.schema_loader import SchemaLoader
from pontgen.config import Config, DataSourceConfig, OriginConfig, get_config
from pontgen.exceptions import (
    CodeGenerationError,
    ConfigurationError,
    IdentifierError,
    NamingCollisionError,
    OutputError,
    PontgenError,
    SchemaLoadError,
    TemplateError,
)

__all__ = [
    # Main classes
    'Codegen',
    'SchemaLoader',
    # Configuration
    'Config',
    'DataSourceConfig',
    'OriginConfig',
    'get_config',
    # Exceptions
    'PontgenError',
    'ConfigurationError',
    'TemplateError',
    'SchemaLoadError',
    'CodeGenerationError',
    'IdentifierError',
    'NamingCollisionError',
    'OutputError',
]

from importlib.metadata import PackageNotFoundError, version as _pkg_version

try:
    __version__ = _pkg_version('pontgen')
except PackageNotFoundError:
    __version__ = 'unknown'
