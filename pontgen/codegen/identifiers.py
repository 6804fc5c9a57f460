"""Identifier derivation for generated operations.

Identifiers are deterministic functions of the URL template, the HTTP verb
and the same-path prefix of the owning module (or of the operation id when
a data source prefers operation ids), so regenerating a client from an
unchanged API description yields the same names.
"""

import keyword
import re

from pontgen.codegen.utils import to_upper_first_letter, transform_camel_case
from pontgen.exceptions import IdentifierError

__all__ = (
    'REPLACE_WORDS',
    'RESERVED_WORDS',
    'get_identifier_from_operator_id',
    'get_identifier_from_url',
    'to_python_identifier',
)

# Positionally paired: RESERVED_WORDS[i] is replaced by REPLACE_WORDS[i].
RESERVED_WORDS = ['delete']
REPLACE_WORDS = ['remove']

_NON_DOT_RE = re.compile(r'[^.]+')
_PATH_PARAM_RE = re.compile(r'^\{(.+)\}$')
_USING_SUFFIX_RE = re.compile(r'(.+)(Using.+)')
_INVALID_CHARS_RE = re.compile(r'\W')


def _segment_name(segment: str) -> str:
    if '-' in segment or ' ' in segment:
        return transform_camel_case(segment)
    return segment


def get_identifier_from_url(url: str, request_type: str, same_path: str = '') -> str:
    """Build an identifier from a URL template.

    ``same_path`` is stripped from the front of ``url``, the rest is cut at
    the first ``.`` and every path segment is upper-cased on its first
    letter. Path parameters become ``By<Name>``.

    Example:
        >>> get_identifier_from_url('/a/b/{id}', 'get', '/a')
        'getBById'

    Raises:
        IdentifierError: If nothing but dots remains after stripping.
    """
    match = _NON_DOT_RE.search(url[len(same_path):])

    if match is None:
        raise IdentifierError(
            url, reason=f"no path segment left after removing prefix '{same_path}'"
        )

    parts = []
    for segment in match.group(0).split('/'):
        param = _PATH_PARAM_RE.match(segment)
        if param:
            parts.append('By' + to_upper_first_letter(_segment_name(param.group(1))))
        else:
            parts.append(to_upper_first_letter(_segment_name(segment)))

    return request_type + ''.join(parts)


def get_identifier_from_operator_id(operation_id: str) -> str:
    """Strip the ``Using<Verb>`` suffix some generators append to operation ids.

    The stripped id is swapped for its replacement when it exactly matches
    an entry of :data:`RESERVED_WORDS`.

    Example:
        >>> get_identifier_from_operator_id('listUsersUsingGET')
        'listUsers'
        >>> get_identifier_from_operator_id('deleteUsingDELETE')
        'remove'
    """
    identifier = _USING_SUFFIX_RE.sub(r'\1', operation_id, count=1)

    if identifier not in RESERVED_WORDS:
        return identifier

    return REPLACE_WORDS[RESERVED_WORDS.index(identifier)]


def to_python_identifier(name: str) -> str:
    """Make a generated name safe to use as a Python identifier."""
    sanitized = _INVALID_CHARS_RE.sub('', name)

    if not sanitized:
        raise IdentifierError(name, reason='no valid identifier characters')

    if sanitized[0].isdigit():
        sanitized = '_' + sanitized

    if keyword.iskeyword(sanitized):
        sanitized += '_'

    return sanitized
