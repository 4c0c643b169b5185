"""Entry point: build the site context, restore the session and report on it."""

import asyncio

import structlog

from core.config import get_settings
from core.logging import setup_logging
from infrastructure.container import create_site_context

logger = structlog.get_logger()


async def run() -> None:
    """Bootstrap the session and load what the public pages need."""
    settings = get_settings()
    context = create_site_context(settings)
    try:
        await context.session.bootstrap()
        projects = await context.projects.fetch()
        testimonials = await context.reviews.fetch_approved()
        site_settings = await context.settings.get()

        logger.info(
            "site_context_ready",
            app=settings.app_name,
            app_env=settings.app_env,
            backend=context.backend.mode.value,
            session_state=context.session.state.value,
            identity_id=context.session.identity.id if context.session.identity else None,
            is_admin=context.session.is_admin,
            projects=len(projects),
            approved_reviews=len(testimonials),
            org_name=site_settings.org_name if site_settings else None,
        )

        if context.session.is_admin:
            stats = await context.stats.compute()
            logger.info("dashboard_stats", **stats.__dict__)
    finally:
        await context.aclose()


def main() -> None:
    setup_logging(get_settings())
    asyncio.run(run())


if __name__ == "__main__":
    main()
