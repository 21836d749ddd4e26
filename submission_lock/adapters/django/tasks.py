"""
Celery integration: declare a task that runs under its submission lock.
The task is re-queued with backoff when the lock cannot be acquired.
"""
from celery import shared_task

from submission_lock.adapters.django.conf import get_lock_task_retry_kwargs
from submission_lock.adapters.django.services.lock import (
    serialize_submission_task,
)


def submission_task(
    name=None,
    form_param="form_id",
    instance_param="instance_id",
    max_retries=None,
    **options,
):
    """
    Decorator combining @shared_task (bound, auto-retry on LockTimeout) with
    serialize_submission_task. The decorated function receives the task as
    its first argument.

    Example:
        @submission_task(name="forms.tasks.update_submission")
        def update_submission(self, form_id, instance_id, data):
            ...
    """
    def decorator(func):
        task_kwargs = {**get_lock_task_retry_kwargs(max_retries), **options}
        if name:
            task_kwargs["name"] = name
        locked = serialize_submission_task(form_param, instance_param)(func)
        return shared_task(**task_kwargs)(locked)
    return decorator
