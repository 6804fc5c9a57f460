"""Generation run for a single data source."""

import logging
from typing import TYPE_CHECKING

from pontgen.codegen.emitter import FileEmitter
from pontgen.codegen.resolver import ModuleResolver
from pontgen.codegen.schema_loader import SchemaLoader, extract_operations, extract_tags
from pontgen.codegen.template import load_template
from pontgen.codegen.types import ServiceModule
from pontgen.exceptions import CodeGenerationError

if TYPE_CHECKING:
    from pontgen.config import DataSourceConfig

logger = logging.getLogger(__name__)

__all__ = ['Codegen']


class Codegen:
    """Generates the client modules of one data source.

    The run loads the API description, groups and names its operations,
    renders every module with the configured template and writes the
    formatted result to the output directory.

    Example:
        >>> config = DataSourceConfig(origin_url='./openapi.json', out_dir='./service')
        >>> Codegen(config).generate()
    """

    def __init__(
        self,
        config: 'DataSourceConfig',
        loader: SchemaLoader | None = None,
        format_code: bool = True,
    ):
        self.config = config
        self.loader = loader or SchemaLoader()
        self.format_code = format_code

    @property
    def label(self) -> str:
        return self.config.name or self.config.origin_url

    def resolve(self) -> list[ServiceModule]:
        """Load the API description and resolve its modules.

        Raises:
            SchemaLoadError: If the description cannot be loaded.
            IdentifierError: If an operation cannot be named.
            NamingCollisionError: If two names collide.
        """
        document = self.loader.load(self.config.origin_url)
        operations = extract_operations(document)

        resolver = ModuleResolver(
            extract_tags(document),
            using_operation_id=self.config.using_operation_id,
            tagged_by_name=self.config.tagged_by_name,
            scope=f"data source '{self.label}'",
        )
        return resolver.resolve(operations)

    def generate(self) -> list[str]:
        """Run the generation and return the written file paths.

        The template is loaded before anything is written, so a broken
        template never leaves a partial output behind.

        Raises:
            TemplateError: If the template cannot be loaded.
            CodeGenerationError: If the template fails on a module.
        """
        modules = self.resolve()
        template = load_template(self.config.template_path)

        rendered = {}
        for module in modules:
            try:
                source = template(module)
            except Exception as e:
                raise CodeGenerationError(
                    'Template failed', context=str(module), cause=e
                ) from e

            if not isinstance(source, str):
                raise CodeGenerationError(
                    f'Template must return str, got {type(source).__name__}',
                    context=str(module),
                )
            rendered[module.name] = source

        emitter = FileEmitter(
            self.config.output_dir,
            format_code=self.format_code,
            formatter_options=self.config.formatter_options,
        )
        for name, source in rendered.items():
            emitter.emit_module(name, source)
        emitter.emit_init(list(rendered))

        logger.info(
            f'Generated {len(modules)} modules for {self.label} in {self.config.output_dir}'
        )
        return emitter.written_files
