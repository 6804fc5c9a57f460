"""Best-effort formatting of generated source with black."""

import logging
from collections.abc import Mapping
from typing import Any

import black

from pontgen.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

__all__ = ['DEFAULT_FORMATTER_OPTIONS', 'format_source']

# Keep the quotes the templates emit.
DEFAULT_FORMATTER_OPTIONS: dict[str, Any] = {'string_normalization': False}


def _build_mode(options: Mapping[str, Any] | None) -> black.Mode:
    try:
        return black.Mode(**{**DEFAULT_FORMATTER_OPTIONS, **(options or {})})
    except TypeError as e:
        raise ConfigurationError(f'Invalid formatter options: {e}', field='formatterOptions')


def format_source(source: str, options: Mapping[str, Any] | None = None) -> str:
    """Format ``source`` with black, falling back to the unformatted text.

    A syntax error in the generated code is logged together with the code
    and never aborts the run.

    Args:
        source: The generated Python source.
        options: Keyword arguments for :class:`black.Mode`.

    Raises:
        ConfigurationError: If ``options`` contains keys black does not know.
    """
    mode = _build_mode(options)

    try:
        return black.format_str(source, mode=mode)
    except black.InvalidInput as e:
        logger.error(f'Failed to format generated code: {e}\nCode:\n{source}')
        return source
