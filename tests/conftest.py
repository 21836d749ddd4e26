"""Pytest fixtures for submission_lock tests."""
import os

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "tests.settings")

import pytest  # noqa: E402

from submission_lock.store import InMemoryLockStore  # noqa: E402


class ScriptedLockStore:
    """Lock store answering each call from a script and recording calls."""

    def __init__(self, acquire_results=(), release_results=()):
        self.acquire_results = list(acquire_results)
        self.release_results = list(release_results)
        self.acquire_calls = []
        self.release_calls = []

    def try_acquire(self, lock_id, resource_key, lock_type):
        self.acquire_calls.append((lock_id, resource_key, lock_type))
        return self.acquire_results.pop(0) if self.acquire_results else False

    def try_release(self, lock_id, resource_key, lock_type):
        self.release_calls.append((lock_id, resource_key, lock_type))
        return self.release_results.pop(0) if self.release_results else False


class FixedRandom:
    """random.Random stand-in returning a constant."""

    def __init__(self, value=0.5):
        self.value = value

    def random(self):
        return self.value


class FakeClock:
    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture
def sleeps():
    return []


@pytest.fixture
def fake_sleep(sleeps):
    return sleeps.append


@pytest.fixture
def fixed_random():
    return FixedRandom(0.5)


@pytest.fixture
def scripted_store_factory():
    return ScriptedLockStore


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def memory_store(clock):
    return InMemoryLockStore(clock=clock)


@pytest.fixture
def clear_cache():
    from django.core.cache import cache

    cache.clear()
    yield cache
    cache.clear()
