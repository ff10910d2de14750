"""Application factory.

Run with: uvicorn --factory arrmap.main:create_app
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from http import HTTPStatus
from typing import TYPE_CHECKING

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.middleware.cors import CORSMiddleware

from arrmap.api.main import api_router
from arrmap.constants import API_V1_STR
from arrmap.core.config import ArrMapConf
from arrmap.database.handlers import TorrentArrMappingHandler
from arrmap.utils.api_models import MessageResponseModel
from arrmap.utils.logger import get_logger, setup_logger
from arrmap.version import PROGRAM_NAME, __version__

if TYPE_CHECKING:
    from fastapi.routing import APIRoute
else:
    APIRoute = object

logger = get_logger(__name__)


def custom_generate_unique_id(route: APIRoute) -> str:
    return f"{route.tags[0]}-{route.name}"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Close the mapping store on shutdown."""
    yield
    store: TorrentArrMappingHandler | None = getattr(app.state, "mapping_store", None)
    if store is not None:
        store.close()


async def request_validation_exception_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed requests are a 400, not FastAPI's default 422."""
    errors = [str(error.get("msg", "")) for error in exc.errors()]
    response = MessageResponseModel(message="Invalid request body", errors=errors)
    return JSONResponse(status_code=HTTPStatus.BAD_REQUEST, content=jsonable_encoder(response))


def create_app(
    settings: ArrMapConf | None = None,
    store: TorrentArrMappingHandler | None = None,
) -> FastAPI:
    """Create the app, opening the mapping store from settings unless one is supplied.

    Raises MappingStoreInitError if the database can't be opened.
    """
    if settings is None:
        settings = ArrMapConf()

    setup_logger(settings=settings.logging)

    if store is None:
        store = TorrentArrMappingHandler(database_path=settings.database.path)

    msg = f""">>>
-------------------------------------------------------------------------------
{PROGRAM_NAME}
Version: {__version__}
Database: {settings.database.path}
Environment: {settings.ENVIRONMENT.capitalize()}
-------------------------------------------------------------------------------"""
    logger.info(msg)

    app = FastAPI(
        title=PROGRAM_NAME,
        version=__version__,
        openapi_url=f"{API_V1_STR}/openapi.json",
        generate_unique_id_function=custom_generate_unique_id,
        lifespan=lifespan,
    )
    app.state.mapping_store = store
    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)  # type: ignore[arg-type]
    app.include_router(api_router, prefix=API_V1_STR)

    if settings.all_cors_origins:
        app.add_middleware(
            middleware_class=CORSMiddleware,
            allow_origins=settings.all_cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    return app
