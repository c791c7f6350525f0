"""Run async service calls from synchronous click commands."""

import asyncio
from collections.abc import Awaitable, Callable
from functools import wraps
from typing import TypeVar

T = TypeVar("T")


def coro(f: Callable[..., Awaitable[T]]) -> Callable[..., T]:
    """Make an async function usable as a click command callback.

    Usage:
        @cli.command()
        @coro
        async def my_command():
            click.echo(await some_async_function())
    """

    @wraps(f)
    def wrapper(*args, **kwargs) -> T:
        return asyncio.run(f(*args, **kwargs))

    return wrapper
