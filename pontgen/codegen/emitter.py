"""Writing of rendered modules to the output directory.

The emitter formats every rendered module, writes it as ``<name>.py`` and
finishes the package with an ``__init__.py`` importing every module.
"""

import ast
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from upath import UPath

from pontgen.codegen.ast_utils import _all
from pontgen.codegen.formatter import format_source
from pontgen.exceptions import OutputError

logger = logging.getLogger(__name__)

__all__ = ['FileEmitter']


class FileEmitter:
    """Emits generated modules to Python files.

    Existing files with the same names are overwritten; nothing is merged.

    Example:
        >>> emitter = FileEmitter('./service', formatter_options={'line_length': 100})
        >>> emitter.emit_module('pet', source)
        >>> emitter.emit_init(['pet'])
    """

    def __init__(
        self,
        output_dir: str | Path | UPath,
        format_code: bool = True,
        formatter_options: Mapping[str, Any] | None = None,
    ):
        """Initialize the file emitter.

        Args:
            output_dir: Directory where files will be written.
            format_code: Whether to format code with black.
            formatter_options: Options passed through to black.
        """
        self.output_dir = UPath(output_dir)
        self.format_code = format_code
        self.formatter_options = dict(formatter_options or {})
        self._written_files: list[str] = []

    @property
    def written_files(self) -> list[str]:
        return list(self._written_files)

    def emit_module(self, name: str, source: str) -> str:
        """Format and write one module, returning the written path."""
        if self.format_code:
            source = format_source(source, self.formatter_options)

        return self._write_file(f'{name}.py', source)

    def emit_init(self, modules: list[str]) -> str:
        """Write an ``__init__.py`` importing the generated modules."""
        body: list[ast.stmt] = [
            ast.ImportFrom(module=None, names=[ast.alias(name=name)], level=1)
            for name in modules
        ]
        body.append(_all(modules))

        mod = ast.Module(body=body, type_ignores=[])
        ast.fix_missing_locations(mod)

        return self.emit_module('__init__', ast.unparse(mod) + '\n')

    def _write_file(self, filename: str, content: str) -> str:
        file_path = self.output_dir / filename

        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
            file_path.write_text(content, encoding='utf-8')
        except OSError as e:
            raise OutputError(str(file_path), cause=e)

        logger.debug(f'Wrote {file_path}')
        self._written_files.append(str(file_path))

        return str(file_path)
