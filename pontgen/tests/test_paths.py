"""Test same-path prefix detection."""

from pontgen.codegen.paths import (
    get_max_same_path,
    group_by_first_segment,
    strip_same_path,
)


class TestGetMaxSamePath:
    """Test get_max_same_path function."""

    def test_shared_prefix(self):
        assert get_max_same_path(['/a/b/c', '/a/b/d']) == '/a/b'

    def test_nothing_shared(self):
        assert get_max_same_path(['/a/b', '/x/y']) == ''

    def test_path_without_separator_stops(self):
        assert get_max_same_path(['noSlash', '/a/b']) == ''

    def test_empty(self):
        assert get_max_same_path([]) == ''
        assert get_max_same_path([], '/api') == '/api'

    def test_last_segment_never_included(self):
        """Identical paths keep their final segment for naming."""
        assert get_max_same_path(['/a/b', '/a/b']) == '/a'
        assert get_max_same_path(['/api/pet/{petId}']) == '/api/pet'

    def test_parent_and_child(self):
        assert get_max_same_path(['/users', '/users/{id}']) == ''
        assert get_max_same_path(['/v1/users', '/v1/users/{id}']) == '/v1'

    def test_accumulator_is_extended(self):
        assert get_max_same_path(['/b/c', '/b/d'], '/a') == '/a/b'

    def test_accepts_iterables(self):
        assert get_max_same_path(p for p in ['/a/b/c', '/a/b/d']) == '/a/b'


class TestStripSamePath:
    """Test strip_same_path function."""

    def test_strips_prefix(self):
        assert strip_same_path('/api/users', '/api') == '/users'

    def test_not_a_prefix(self):
        assert strip_same_path('/v2/users', '/api') == '/v2/users'

    def test_empty_prefix(self):
        assert strip_same_path('/users', '') == '/users'


class TestGroupByFirstSegment:
    """Test group_by_first_segment function."""

    def test_groups_in_first_seen_order(self):
        paths = ['/v1/users', '/v1/orders/{id}', '/v1/users/{id}']
        assert group_by_first_segment(paths, '/v1') == {
            'users': ['/v1/users', '/v1/users/{id}'],
            'orders': ['/v1/orders/{id}'],
        }

    def test_path_equal_to_prefix(self):
        assert group_by_first_segment(['/v1'], '/v1') == {'': ['/v1']}
