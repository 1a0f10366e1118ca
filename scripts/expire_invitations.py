#!/usr/bin/env python3
"""Expire stale invitations and purge expired sign-up data.

Meant to run periodically (cron). Expiry is also enforced on read, so a
missed run never lets an old invitation be accepted.
"""

import asyncio
import sys

import logfire
from dishka import make_async_container

from yard.application.usecase.invitation import ExpireInvitationsUseCase
from yard.config import Settings
from yard.util.di import PROVIDERS, get_provider
from yard.util.logging import setup_logging
from yard.util.observability import configure_logfire


async def run() -> None:
    container = make_async_container(
        *(get_provider(base, use_mock=False)() for base in PROVIDERS)
    )
    try:
        async with container() as request_container:
            use_case = await request_container.get(ExpireInvitationsUseCase)
            result = await use_case.execute()
        logfire.info(
            "Expiry sweep finished",
            invitations_expired=result.invitations_expired,
            pending_profiles_removed=result.pending_profiles_removed,
        )
    finally:
        await container.close()


def main() -> int:
    settings = Settings()
    configure_logfire(settings)
    setup_logging(settings)

    try:
        asyncio.run(run())
        return 0
    except Exception as e:
        logfire.error(
            "Expiry sweep failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise


if __name__ == "__main__":
    sys.exit(main())
