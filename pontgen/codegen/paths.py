"""Same-path prefix detection for URL templates.

The longest leading path shared segment-wise by every URL template of a
group is stripped before identifiers are derived, and it also decides
which operations land in the same generated module when the API
description carries no tags.
"""

from collections.abc import Iterable

__all__ = ('get_max_same_path', 'group_by_first_segment', 'strip_same_path')


def _reduce_same_path(paths: list[str], same_path: str) -> str:
    if not paths:
        return same_path

    # A path at its last segment cannot prove a shared first segment.
    if any('/' not in path for path in paths):
        return same_path

    segments = [path.split('/', 1) for path in paths]
    first_seg = segments[0][0]

    if all(seg == first_seg for seg, _ in segments):
        return _reduce_same_path(
            [rest for _, rest in segments], f'{same_path}/{first_seg}'
        )

    return same_path


def get_max_same_path(paths: Iterable[str], same_path: str = '') -> str:
    """Return the longest leading path shared by every path in ``paths``.

    The final segment of a path is never part of the result, so two
    operations on ``/users`` and ``/users/{id}`` share ``''`` while
    ``/a/b/c`` and ``/a/b/d`` share ``'/a/b'``.

    Args:
        paths: URL templates, usually starting with ``/``.
        same_path: Prefix already known to be shared; the result extends it.

    Returns:
        The shared prefix with a leading ``/``, or ``same_path`` unchanged
        when nothing more is shared.
    """
    return _reduce_same_path([path.removeprefix('/') for path in paths], same_path)


def strip_same_path(path: str, same_path: str) -> str:
    if same_path and path.startswith(same_path):
        return path[len(same_path):]
    return path


def group_by_first_segment(paths: Iterable[str], same_path: str = '') -> dict[str, list[str]]:
    """Group paths by their first segment after ``same_path``.

    Groups keep the order in which their first path was seen. A path left
    empty by stripping lands in the ``''`` group.
    """
    groups: dict[str, list[str]] = {}

    for path in paths:
        rest = strip_same_path(path, same_path).lstrip('/')
        groups.setdefault(rest.split('/', 1)[0], []).append(path)

    return groups
