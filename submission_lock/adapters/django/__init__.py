# Django adapter: submission locks over the Django cache.
# Public API: import from here (lazy to avoid AppRegistryNotReady).
# Each symbol is loaded from its defining module.

__all__ = [
    "CacheLockStore",
    "get_submission_lock",
    "submission_lock",
    "is_submission_locked",
    "serialize_submission_task",
    "get_lock_task_retry_kwargs",
    "submission_task",
]

_BASE = "submission_lock.adapters.django"
_SUBMODULES = (
    "apps",
    "checks",
    "conf",
    "services",
    "tasks",
)
_SYMBOLS = (
    ("CacheLockStore", f"{_BASE}.services.cache_store", "CacheLockStore"),
    ("get_submission_lock", f"{_BASE}.services.lock", "get_submission_lock"),
    ("submission_lock", f"{_BASE}.services.lock", "submission_lock"),
    ("is_submission_locked", f"{_BASE}.services.lock", "is_submission_locked"),
    ("serialize_submission_task", f"{_BASE}.services.lock", "serialize_submission_task"),
    ("get_lock_task_retry_kwargs", f"{_BASE}.conf", "get_lock_task_retry_kwargs"),
    ("submission_task", f"{_BASE}.tasks", "submission_task"),
)
_LAZY = {name: (mod, attr) for name, mod, attr in _SYMBOLS}


def __getattr__(name):
    from importlib import import_module

    if name in _SUBMODULES:
        return import_module(f".{name}", __name__)
    if name in _LAZY:
        mod_path, attr = _LAZY[name]
        mod = import_module(mod_path)
        return getattr(mod, attr)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
