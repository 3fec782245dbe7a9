import random
import uuid

import pytest
from django.core.cache import cache
from django.core.cache.backends.locmem import LocMemCache

from huff.registry import OperationRegistry
from huff.service import CompressionService


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def registry():
    return OperationRegistry(cache=LocMemCache(f"test-{uuid.uuid4()}", {}), timeout=60)


@pytest.fixture
def service(registry):
    return CompressionService(registry=registry)


@pytest.fixture(autouse=True)
def clear_default_cache():
    yield
    cache.clear()
