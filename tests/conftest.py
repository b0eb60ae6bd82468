"""Shared fixtures: a fixed clock and seeded random source."""

import random
from datetime import datetime, timedelta, timezone

import pytest

from mqttvars.builtin_vars import BuiltinContext, BuiltinRegistry
from mqttvars.variables import VariableSubstitutor


FIXED_INSTANT = datetime(2024, 6, 15, 10, 30, 45, 123000, tzinfo=timezone.utc)

# Fixed-offset zone so 'local' rendering does not depend on the host
PLUS_TWO = timezone(timedelta(hours=2))


def make_context(instant=FIXED_INSTANT, seed=1234, local_tz=PLUS_TWO) -> BuiltinContext:
    """Build a context with a frozen clock."""
    return BuiltinContext(clock=lambda: instant, rng=random.Random(seed), local_tz=local_tz)


@pytest.fixture
def context():
    return make_context()


@pytest.fixture
def registry(context):
    return BuiltinRegistry(context)


@pytest.fixture
def substitutor(registry):
    return VariableSubstitutor(registry)
