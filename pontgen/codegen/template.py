"""Loading of templates, the functions that render a module's source.

A template is any callable taking a :class:`~pontgen.codegen.types.ServiceModule`
and returning Python source text. Templates come from two places:

- Built-in templates registered by name with :func:`register_template`.
- Python files defining a ``generate`` function, compiled on demand.

Compiled file templates are cached by path and content hash. Editing a
template between two loads in the same process always recompiles it, and
the compiled module is never registered in ``sys.modules``.
"""

import hashlib
import logging
import types
from collections.abc import Callable
from pathlib import Path

from pontgen.codegen.types import ServiceModule
from pontgen.exceptions import TemplateError

logger = logging.getLogger(__name__)

__all__ = [
    'DEFAULT_TEMPLATE',
    'ENTRY_POINT',
    'TemplateFn',
    'clear_template_cache',
    'get_registered_templates',
    'load_template',
    'register_template',
]

TemplateFn = Callable[[ServiceModule], str]

DEFAULT_TEMPLATE = 'default'
ENTRY_POINT = 'generate'

_registry: dict[str, TemplateFn] = {}
_cache: dict[tuple[str, str], TemplateFn] = {}


def register_template(name: str) -> Callable[[TemplateFn], TemplateFn]:
    """Register a built-in template under ``name``.

    Example:
        >>> @register_template('stub')
        ... def stub(module):
        ...     return 'pass\\n'
    """

    def decorator(fn: TemplateFn) -> TemplateFn:
        if name in _registry and _registry[name] is not fn:
            raise ValueError(f"Template '{name}' is already registered")
        _registry[name] = fn
        return fn

    return decorator


def get_registered_templates() -> dict[str, TemplateFn]:
    _ensure_builtins()
    return dict(_registry)


def clear_template_cache() -> None:
    _cache.clear()


def _ensure_builtins() -> None:
    # The built-in templates register themselves on import.
    from pontgen.codegen import templates  # noqa: F401


def _template_file(template_path: str | Path) -> Path:
    path = Path(template_path)
    if not path.suffix:
        path = path.with_suffix('.py')
    return path.resolve()


def _compile_template(path: Path, source: str, digest: str) -> TemplateFn:
    try:
        code = compile(source, str(path), 'exec')
    except SyntaxError as e:
        raise TemplateError(str(path), cause=e)

    module = types.ModuleType(f'pontgen_template_{digest[:16]}')
    module.__file__ = str(path)

    try:
        exec(code, module.__dict__)
    except Exception as e:
        raise TemplateError(str(path), cause=e)

    entry_point = getattr(module, ENTRY_POINT, None)
    if not callable(entry_point):
        raise TemplateError(
            str(path), cause=f"template must define a callable '{ENTRY_POINT}'"
        )

    return entry_point


def load_template(template_path: str | Path | None = None) -> TemplateFn:
    """Return the render function of a template.

    Args:
        template_path: A registered template name, a path to a Python
            template file (``.py`` is appended when the path has no
            suffix), or ``None`` for the default template.

    Raises:
        TemplateError: If the file cannot be read or compiled, or does not
            define a callable ``generate``.
    """
    _ensure_builtins()

    if template_path is None:
        template_path = DEFAULT_TEMPLATE

    if isinstance(template_path, str) and template_path in _registry:
        return _registry[template_path]

    path = _template_file(template_path)

    try:
        source = path.read_text(encoding='utf-8')
    except OSError as e:
        raise TemplateError(str(path), cause=e)

    digest = hashlib.sha256(source.encode('utf-8')).hexdigest()
    key = (str(path), digest)

    if key not in _cache:
        logger.debug(f'Compiling template {path} ({digest[:12]})')
        generate = _compile_template(path, source, digest)
        for stale in [k for k in _cache if k[0] == key[0]]:
            del _cache[stale]
        _cache[key] = generate

    return _cache[key]
