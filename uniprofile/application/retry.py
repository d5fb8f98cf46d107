"""Retry executor for Result-returning operations."""

import asyncio
from typing import Awaitable, Callable, TypeVar

import logfire

from uniprofile.domain.error import ValidationError
from uniprofile.domain.value import Failure, Result, RetryPolicy

T = TypeVar("T")


def is_retryable(failure: Failure) -> bool:
    """Local validation failures will fail the same way again."""
    return not isinstance(failure.error, ValidationError)


class RetryExecutor:
    """Runs an operation until it succeeds or the policy is exhausted.

    Attempts are sequential with a cooperative ``asyncio.sleep`` between
    them. Stops at the first success or the first non-retryable failure and
    returns the last result.
    """

    def __init__(
        self,
        policy: RetryPolicy,
        should_retry: Callable[[Failure], bool] = is_retryable,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self.policy = policy
        self.should_retry = should_retry
        self.sleep = sleep

    async def run(
        self, operation: Callable[[], Awaitable[Result[T]]], name: str = "operation"
    ) -> Result[T]:
        attempt = 0
        while True:
            attempt += 1
            result = await operation()
            if result.ok:
                return result

            if attempt >= self.policy.max_attempts or not self.should_retry(result):
                logfire.warn(
                    "Giving up",
                    operation=name,
                    attempts=attempt,
                    error=result.message,
                )
                return result

            logfire.info(
                "Retrying after failure",
                operation=name,
                attempt=attempt,
                delay=self.policy.delay,
                error=result.message,
            )
            await self.sleep(self.policy.delay)
