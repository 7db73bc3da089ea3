import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from backend.auth.dependencies import get_current_user
from backend.auth.validators import STEP_REQUIRED_FIELDS
from backend.core import config
from backend.core.errors import AppError, StoreUnavailable, UnknownError, ValidationError
from backend.database import Database
from backend.routes import auth_routes, comment_routes, like_routes, post_routes, user_routes

logger = logging.getLogger(__name__)


def invalid_field(exc: RequestValidationError) -> str:
    """Name the first body field pydantic rejected; unparseable bodies count as missing fields."""
    for error in exc.errors():
        location = error.get('loc', ())
        if len(location) > 1 and isinstance(location[-1], str) and error.get('type') != 'json_invalid':
            return location[-1]
    return STEP_REQUIRED_FIELDS


def create_app(database: Database | None = None) -> FastAPI:
    logging.basicConfig(level=config.LOG_LEVEL)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        config.validate_runtime_config()
        try:
            app.state.database.create_all()
        except SQLAlchemyError:
            logger.exception('Database initialization failed. Check DATABASE_URL.')
        yield
        app.state.database.dispose()

    app = FastAPI(title='Classroom Feed API', lifespan=lifespan)
    app.state.database = database or Database()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ALLOW_ORIGINS,
        allow_credentials=True,
        allow_methods=['*'],
        allow_headers=['*'],
    )

    @app.exception_handler(AppError)
    async def handle_app_error(request: Request, exc: AppError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(SQLAlchemyError)
    async def handle_store_error(request: Request, exc: SQLAlchemyError) -> JSONResponse:
        logger.exception('Store failure on %s %s', request.method, request.url.path, exc_info=exc)
        error = StoreUnavailable()
        return JSONResponse(status_code=error.status_code, content=error.to_dict())

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        error = ValidationError(invalid_field(exc), 'Invalid request data')
        return JSONResponse(status_code=error.status_code, content=error.to_dict())

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        logger.exception('Unhandled error on %s %s', request.method, request.url.path, exc_info=exc)
        error = UnknownError()
        return JSONResponse(status_code=error.status_code, content=error.to_dict())

    @app.get('/')
    def root():
        return {'status': 'Classroom Feed API Running'}

    # Everything outside /auth goes through the access guard.
    protected = [Depends(get_current_user)]
    app.include_router(auth_routes.router, prefix='/auth')
    app.include_router(user_routes.router, prefix='/users', dependencies=protected)
    app.include_router(post_routes.router, prefix='/posts', dependencies=protected)
    app.include_router(comment_routes.router, dependencies=protected)
    app.include_router(like_routes.router, dependencies=protected)
    return app


app = create_app()
