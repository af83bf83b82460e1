from fastapi import FastAPI

from commits_bot.api.routes.commands import router
from commits_bot.core.observability import configure_logging
from commits_bot.core.observability import init_sentry
from commits_bot.settings import Settings


def create_app() -> FastAPI:
    """Build the command gateway with settings read from the environment."""

    settings = Settings()
    configure_logging(settings)
    init_sentry(settings)

    app = FastAPI(title="commits-bot")
    app.include_router(router)
    return app


app = create_app()
