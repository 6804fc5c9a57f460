"""Custom exceptions for pontgen.

This module defines the hierarchy of exceptions raised while resolving
configuration, naming operations and emitting generated client code.

Configuration and template errors are fatal for the whole run. Identifier
and naming collision errors are fatal only for the data source being
generated, so other origins can still be processed.
"""


class PontgenError(Exception):
    """Base exception for all pontgen errors.

    Example:
        try:
            codegen.generate()
        except PontgenError as e:
            print(f"pontgen error: {e}")
    """

    def __init__(self, message: str, *args, **kwargs):
        self.message = message
        super().__init__(message, *args, **kwargs)


class ConfigurationError(PontgenError):
    """Error in configuration.

    Raised when the configuration file cannot be read or parsed, or when a
    required origin field is missing.

    Attributes:
        config_path: The path to the configuration file, if applicable.
        field: The configuration field that is invalid, e.g. ``origins[1].name``.
    """

    def __init__(
        self, message: str, config_path: str | None = None, field: str | None = None
    ):
        self.config_path = config_path
        self.field = field
        full_message = message
        if config_path:
            full_message = f"{message} in '{config_path}'"
        if field:
            full_message += f' (field: {field})'
        super().__init__(full_message)


class TemplateError(PontgenError):
    """A template could not be read or compiled into a generator.

    Attributes:
        template_path: The path or registered name of the template.
        cause: The underlying exception that caused the failure.
    """

    def __init__(self, template_path: str, cause: Exception | str | None = None):
        self.template_path = template_path
        self.cause = cause
        message = f"Failed to load template '{template_path}'"
        if cause:
            message += f': {cause}'
        super().__init__(message)


class SchemaLoadError(PontgenError):
    """Failed to load an API description from a source.

    Attributes:
        source: The source path or URL that failed to load.
        cause: The underlying exception that caused the failure.
    """

    def __init__(self, source: str, cause: Exception | None = None):
        self.source = source
        self.cause = cause
        message = f"Failed to load API description from '{source}'"
        if cause:
            message += f': {cause}'
        super().__init__(message)


class CodeGenerationError(PontgenError):
    """Error during code generation.

    Attributes:
        context: Additional context about what was being generated.
        cause: The underlying exception that caused the failure.
    """

    def __init__(
        self, message: str, context: str | None = None, cause: Exception | None = None
    ):
        self.context = context
        self.cause = cause
        full_message = message
        if context:
            full_message = f'{message} (while generating {context})'
        if cause:
            full_message += f': {cause}'
        super().__init__(full_message)


class IdentifierError(CodeGenerationError):
    """An identifier could not be derived from a URL template.

    Attributes:
        url: The URL template that produced no usable segment.
        reason: Explanation of why no identifier could be derived.
    """

    def __init__(self, url: str, reason: str | None = None):
        self.url = url
        self.reason = reason
        message = f"Cannot derive an identifier from url '{url}'"
        if reason:
            message += f': {reason}'
        super().__init__(message)


class NamingCollisionError(CodeGenerationError):
    """Two entries resolved to the same generated name.

    Attributes:
        identifier: The colliding name.
        first: Description of the entry that claimed the name first.
        second: Description of the later entry with the same name.
        scope: The module or data source in which the collision happened.
    """

    def __init__(
        self,
        identifier: str,
        first: str,
        second: str,
        scope: str | None = None,
    ):
        self.identifier = identifier
        self.first = first
        self.second = second
        self.scope = scope
        message = f"Name '{identifier}' is used by both {first} and {second}"
        super().__init__(message, context=scope)


class OutputError(PontgenError):
    """Error writing generated output.

    Attributes:
        output_path: The path where output was being written.
        cause: The underlying exception that caused the failure.
    """

    def __init__(self, output_path: str, cause: Exception | None = None):
        self.output_path = output_path
        self.cause = cause
        message = f"Failed to write output to '{output_path}'"
        if cause:
            message += f': {cause}'
        super().__init__(message)
