from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api import agent, health, validate
from .cache import AgentSessionCache, AgentStore
from .config import settings
from .core.agent import AgentWrapper
from .core.chat import ChatRequestHandler
from .core.credentials import CredentialValidator
from .logging_config import get_logger, setup_logging
from .middleware import RequestLoggingMiddleware

APP_NAME = "AgentKit Chat API"
APP_VERSION = "0.1.0"
APP_DESCRIPTION = "Chat with an on-chain agent using your own model and wallet platform keys"


def create_app(
    wrapper: Optional[AgentWrapper] = None,
    validator: Optional[CredentialValidator] = None,
    store: Optional[AgentStore] = None,
    configure_logging: bool = True,
) -> FastAPI:
    """Build the API with its components; tests pass fakes for any of them."""
    if configure_logging:
        setup_logging()

    wrapper = wrapper or AgentWrapper()
    cache = AgentSessionCache(builder=wrapper.construct, store=store)

    app = FastAPI(
        title=APP_NAME,
        description=APP_DESCRIPTION,
        version=APP_VERSION,
        docs_url="/docs",
        redoc_url="/redoc"
    )

    app.state.session_cache = cache
    app.state.chat_handler = ChatRequestHandler(
        cache=cache,
        wrapper=wrapper,
        logger=get_logger("agent.handler"),
    )
    app.state.credential_validator = validator or CredentialValidator()

    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Configure appropriately for production
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health.router, tags=["Health"])
    app.include_router(validate.router, tags=["Credentials"])
    app.include_router(agent.router, tags=["Agent"])

    @app.get("/")
    async def root():
        """Root endpoint with basic info"""
        return {
            "name": APP_NAME,
            "version": APP_VERSION,
            "description": APP_DESCRIPTION,
            "docs": "/docs",
            "health": "/healthz"
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        reload=True,
        log_level=settings.log_level.lower()
    )
