"""Dependency injection container."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from dishka import AsyncContainer, make_async_container
from dishka.integrations.fastapi import FastapiProvider, setup_dishka
from fastapi import FastAPI

from folio.util.di import PROVIDERS, get_provider


def create_container() -> AsyncContainer:
    """Build the production container: real OAuth clients and PostgreSQL.

    Settings are loaded from environment variables when first requested,
    so building the container itself never touches the database.
    """
    provider_instances = [get_provider(base, use_mock=False)() for base in PROVIDERS]
    # FastapiProvider exposes the current Request to request-scoped factories
    return make_async_container(*provider_instances, FastapiProvider())


@asynccontextmanager
async def container_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Close the container on shutdown so the database pool is disposed."""
    yield
    await app.state.dishka_container.close()


def setup_di(app: FastAPI, container: AsyncContainer) -> None:
    """Attach the container to the app.

    Routes resolve dependencies with ``FromDishka[...]``; plain FastAPI
    dependencies such as the session gate read
    ``request.state.dishka_container``.

    Args:
        app: FastAPI application
        container: DI container (production or test)
    """
    setup_dishka(container, app)
