import keyword
import re
import unicodedata
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any, TypeVar
from urllib.parse import urlparse

__all__ = (
    'get_duplicate_by_id',
    'has_chinese',
    'is_url',
    'look_for_files',
    'sanitize_parameter_field_name',
    'to_dash_case',
    'to_dash_default_case',
    'to_upper_first_letter',
    'transform_camel_case',
    'transform_description',
)

T = TypeVar('T')

SKIPPED_DIRECTORIES = frozenset({'.git', 'node_modules', '.venv', 'venv', '__pycache__'})

_UPPERCASE_RE = re.compile(r'[A-Z]')
_CHINESE_RE = re.compile(
    '[\u3400-\u4db5\u4e00-\u9fcc\uf900-\ufaff\u3000-\u3009\u2026'
    '\uff01-\uff5e\U00020000-\U0002a6d6\U0002a700-\U0002b734]'
)
_CONTROLLER_SUFFIX = '-controller'


def is_url(text):
    try:
        result = urlparse(text)
        return all([result.scheme, result.netloc])
    except (ValueError, AttributeError):
        return False


def remove_accents(input_str):
    nfkd_form = unicodedata.normalize('NFKD', input_str)
    return ''.join(c for c in nfkd_form if not unicodedata.combining(c))


def sanitize_name_python_keywords(name: str) -> str:
    if keyword.iskeyword(name):
        return f'{name}_'
    return name


def sanitize_parameter_field_name(name: str) -> str:
    """Sanitize parameter names to be valid Python identifiers.

    - Replace spaces and hyphens with underscores
    - Remove other invalid characters
    - Ensure it doesn't start with a digit
    """
    if not name:
        raise ValueError('Name cannot be empty')

    sanitized = sanitize_name_python_keywords(name)
    sanitized = re.sub(r'[-\s]+', '_', remove_accents(sanitized))
    sanitized = re.sub(r'[^A-Za-z0-9_]', '', sanitized)

    if sanitized and sanitized[0].isdigit():
        sanitized = '_' + sanitized
    return sanitized


def transform_camel_case(name: str) -> str:
    """Camel-case a hyphen or space separated name.

    Hyphens take priority over spaces. Each word is title-cased and the
    first character of the result is lower-cased, so ``'my-url-name'``
    becomes ``'myUrlName'``.

    A name with neither delimiter yields an empty string; callers fall back
    to the original name themselves.
    """
    words: list[str] = []

    if '-' in name:
        words = name.split('-')
    elif ' ' in name:
        words = name.split(' ')

    new_name = ''.join(word[:1].upper() + word[1:].lower() for word in words)

    return new_name[:1].lower() + new_name[1:]


def transform_description(description: str) -> str:
    """Turn a tag description such as ``'User Controller'`` into ``'user'``."""
    words = [word for word in description.split(' ') if word != 'Controller']

    if not words:
        return ''

    first_word, *rest = words

    return ''.join([first_word[:1].lower() + first_word[1:], *rest])


def to_upper_first_letter(text: str) -> str:
    return text[:1].upper() + text[1:]


def to_dash_case(name: str) -> str:
    """Convert ``'myUrlName'`` (or ``'My Url Name'``) to ``'my-url-name'``."""
    dash_name = _UPPERCASE_RE.sub(
        lambda match: '-' + match.group(0).lower(), name.replace(' ', '')
    )

    if dash_name.startswith('-'):
        return dash_name[1:]

    return dash_name


def to_dash_default_case(name: str) -> str:
    """Like :func:`to_dash_case`, also dropping a trailing ``-controller``."""
    dash_name = to_dash_case(name)

    if dash_name.endswith(_CONTROLLER_SUFFIX):
        return dash_name[: -len(_CONTROLLER_SUFFIX)]

    return dash_name


def has_chinese(text: str | None) -> bool:
    return bool(text) and _CHINESE_RE.search(text) is not None


def _get_key(item: Any, id_key: str) -> Any:
    if isinstance(item, Mapping):
        return item.get(id_key)
    return getattr(item, id_key, None)


def get_duplicate_by_id(items: Sequence[T] | None, id_key: str = 'name') -> T | None:
    """Return the first item whose ``id_key`` repeats an earlier item's.

    Items may be mappings or plain objects. Returns ``None`` when every key
    is unique or the sequence is empty.

    Example:
        >>> get_duplicate_by_id([{'name': 'a'}, {'name': 'b'}, {'name': 'a'}])
        {'name': 'a'}
    """
    if not items:
        return None

    items = list(items)

    for index, item in enumerate(items):
        key = _get_key(item, id_key)
        if any(_get_key(other, id_key) == key for other in items[:index]):
            return item

    return None


def look_for_files(directory: str | Path, file_name: str) -> Path | None:
    """Recursively search ``directory`` for a file called ``file_name``.

    VCS, dependency and virtualenv folders are skipped. Entries are visited
    in sorted order so the result is stable.
    """
    directory = Path(directory)

    for entry in sorted(directory.iterdir()):
        if entry.is_symlink():
            continue

        if entry.is_dir():
            if entry.name in SKIPPED_DIRECTORIES:
                continue

            result = look_for_files(entry, file_name)
            if result:
                return result
        elif entry.is_file() and entry.name == file_name:
            return entry

    return None
