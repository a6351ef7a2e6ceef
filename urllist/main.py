from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from urllist.core.config import settings
from urllist.exceptions.handlers import register_exception_handlers
from urllist.routers import router
from urllist.services.container import container
from urllist.services.web_fetcher import WebFetcherInterface


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    fetcher = container.get_service(WebFetcherInterface)
    await fetcher.aclose()


def create_app() -> FastAPI:
    app = FastAPI(
        title="URL List",
        description="Link preview metadata for URL List collections",
        version="1.0.0",
        lifespan=lifespan,
    )

    # CORS configuration
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    register_exception_handlers(app)

    # Include the centralized router
    app.include_router(router, prefix="/api")
    return app


app = create_app()
