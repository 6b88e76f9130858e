from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.responses import RedirectResponse
from fastapi.staticfiles import StaticFiles

from app.config import Config, load_config
from app.context import AppContext
from app.middleware.error_handler import register_error_handlers
from app.utils.flash import FlashMiddleware
import logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Connect the document store on startup; a failure is logged, not fatal."""
    ctx: AppContext = app.state.context
    await ctx.database.initialize()
    try:
        yield
    finally:
        await ctx.database.close()


def create_app(config: Optional[Config] = None) -> FastAPI:
    config = config or load_config()

    # Configure logging
    logging.basicConfig(level=config.LOG_LEVEL)

    app = FastAPI(title=config.APP_NAME, lifespan=lifespan)
    app.state.context = AppContext.build(config)

    # Add middleware
    app.add_middleware(FlashMiddleware)

    # Mount static files and uploads
    config.UPLOAD_DIR.mkdir(parents=True, exist_ok=True)
    app.mount("/static", StaticFiles(directory=str(config.STATIC_DIR)), name="static")
    app.mount("/uploads", StaticFiles(directory=str(config.UPLOAD_DIR)), name="uploads")

    from app.routes import health, users

    @app.get("/", include_in_schema=False)
    async def root():
        return RedirectResponse(url="/users/")

    # Include all routers
    app.include_router(health.router)
    app.include_router(users.router)

    # Error handlers come after every router
    register_error_handlers(app)

    logger.info("All routes loaded successfully")
    return app


# Served with `uvicorn app.main:create_app --factory` or `python -m app.main`
if __name__ == "__main__":
    import uvicorn
    config = load_config()
    uvicorn.run(create_app(config), host="0.0.0.0", port=config.PORT)
