"""Code generation module for pontgen.

Main Components:
    - Codegen: Runs the generation of one data source
    - SchemaLoader: Loads API descriptions from URLs or files
    - ModuleResolver: Groups operations into modules and names them
    - load_template: Returns the render function of a template
    - FileEmitter: Formats and writes the rendered modules

Example:
    >>> from pontgen.codegen import Codegen
    >>> from pontgen.config import DataSourceConfig
    >>>
    >>> config = DataSourceConfig(origin_url='./openapi.json', out_dir='./service')
    >>> Codegen(config).generate()
"""

from pontgen.codegen.codegen import Codegen
from pontgen.codegen.emitter import FileEmitter
from pontgen.codegen.formatter import format_source
from pontgen.codegen.identifiers import (
    get_identifier_from_operator_id,
    get_identifier_from_url,
)
from pontgen.codegen.paths import get_max_same_path
from pontgen.codegen.resolver import ModuleResolver
from pontgen.codegen.schema_loader import SchemaLoader, extract_operations, extract_tags
from pontgen.codegen.template import load_template, register_template
from pontgen.codegen.types import (
    Operation,
    Parameter,
    ResolvedOperation,
    ServiceModule,
    Tag,
)

__all__ = [
    # Main codegen class
    'Codegen',
    # Loading
    'SchemaLoader',
    'extract_operations',
    'extract_tags',
    # Naming
    'ModuleResolver',
    'get_identifier_from_url',
    'get_identifier_from_operator_id',
    'get_max_same_path',
    # Templates and output
    'load_template',
    'register_template',
    'format_source',
    'FileEmitter',
    # Records
    'Operation',
    'Parameter',
    'Tag',
    'ResolvedOperation',
    'ServiceModule',
]
