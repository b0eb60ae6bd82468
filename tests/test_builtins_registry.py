"""Tests for the builtin registry and the uuid/random builtins."""

import random
import re

import pytest

from mqttvars.builtin_vars import BUILTIN_NAMES, BuiltinContext, BuiltinRegistry, is_builtin

from tests.conftest import make_context


UUID_PATTERN = re.compile(r'^[0-9a-f]{8}-[0-9a-f]{4}-4[0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$')


class TestRegistry:
    """Test builtin lookup and dispatch."""

    @pytest.mark.parametrize('name', ['now', 'timestamp', 'uuid', 'random', 'rand'])
    def test_builtin_names_recognized(self, registry, name):
        assert registry.is_builtin(name)
        assert is_builtin(name)

    def test_membership_is_case_insensitive(self, registry):
        """Membership mirrors resolution, which lowercases the name."""
        assert registry.is_builtin('NOW')
        assert is_builtin('Uuid')
        assert registry.resolve('NOW', ['utc']) == '2024-06-15T10:30:45.123Z'

    @pytest.mark.parametrize('name', ['device_id', 'custom', '', 'nowish'])
    def test_non_builtins(self, registry, name):
        assert not registry.is_builtin(name)
        assert registry.resolve(name) is None

    def test_builtin_names_order(self, registry):
        assert registry.builtin_names() == ['now', 'timestamp', 'uuid', 'random', 'rand']
        assert BUILTIN_NAMES == registry.builtin_names()

    def test_failing_resolver_returns_none(self, caplog):
        """A resolver error leaves the expression unresolved instead of raising."""
        def broken_clock():
            raise RuntimeError("clock unavailable")

        registry = BuiltinRegistry(BuiltinContext(clock=broken_clock))
        with caplog.at_level('WARNING'):
            assert registry.resolve('now', ['utc']) is None
        assert 'clock unavailable' in caplog.text

    def test_default_context_uses_wall_clock(self):
        value = BuiltinRegistry().resolve('now', ['unix'])
        assert re.match(r'^\d{10}$', value)


class TestUuid:
    """Test the uuid builtin."""

    def test_format(self, registry):
        for _ in range(50):
            assert UUID_PATTERN.match(registry.resolve('uuid'))

    def test_consecutive_values_differ(self, registry):
        values = [registry.resolve('uuid') for _ in range(100)]
        assert len(set(values)) == len(values)

    def test_seeded_source_is_repeatable(self):
        first = BuiltinRegistry(make_context(seed=7)).resolve('uuid')
        second = BuiltinRegistry(make_context(seed=7)).resolve('uuid')
        assert first == second

    def test_modifiers_ignored(self, registry):
        assert UUID_PATTERN.match(registry.resolve('uuid', ['utc', '1-10']))


class TestRandom:
    """Test the random/rand builtin."""

    def test_default_range(self, registry):
        for _ in range(200):
            assert 0 <= int(registry.resolve('random')) <= 100

    def test_explicit_range(self, registry):
        values = {int(registry.resolve('random', ['1-10'])) for _ in range(500)}
        assert values <= set(range(1, 11))
        # Both ends are reachable
        assert 1 in values and 10 in values

    def test_rand_alias(self, registry):
        assert 0 <= int(registry.resolve('rand')) <= 100

    def test_first_range_wins(self, registry):
        for _ in range(20):
            assert registry.resolve('random', ['5-5', '1-100']) == '5'

    def test_non_range_modifiers_ignored(self, registry):
        for _ in range(20):
            assert 3 <= int(registry.resolve('random', ['utc', '3-4'])) <= 4

    def test_reversed_range_does_not_raise(self, registry):
        assert re.match(r'^-?\d+$', registry.resolve('random', ['10-1']))

    def test_draw_comes_from_context_rng(self):
        context = BuiltinContext(rng=random.Random(99))
        expected = random.Random(99).random()
        assert BuiltinRegistry(context).resolve('random', ['0-999']) == str(int(expected * 1000))
