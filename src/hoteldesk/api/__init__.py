import os

from fastapi import APIRouter, FastAPI, Request
from fastapi.responses import JSONResponse

from .routes import editor, events, modules


def create_app(config_obj=None) -> FastAPI:
    from ..components.factory import create_default_registry
    from ..config import Config
    from ..db import close_db, create_tables, init_db
    from ..errors import ConflictException, FormValidationError, NotFoundException
    from ..store import ModuleStore

    if config_obj is None:
        config_file = os.environ.get("CONFIG_FILE")
        config_obj = Config.load_from_file(config_file) if config_file else Config()

    app = FastAPI(title="HotelDesk API")

    app.state.config = config_obj
    app.state.registry = create_default_registry(config_obj.engine.code_prefix)
    app.state.store = ModuleStore()

    init_db(config_obj.database_path)
    create_tables()

    api_router = APIRouter(prefix="/api/v1")
    api_router.include_router(modules.router)
    api_router.include_router(events.router)
    api_router.include_router(editor.router)
    app.include_router(api_router)

    @app.exception_handler(NotFoundException)
    async def not_found_handler(request: Request, exc: NotFoundException):
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(ConflictException)
    async def conflict_handler(request: Request, exc: ConflictException):
        return JSONResponse(status_code=409, content={"detail": str(exc)})

    @app.exception_handler(FormValidationError)
    async def form_error_handler(request: Request, exc: FormValidationError):
        return JSONResponse(
            status_code=422,
            content={"detail": str(exc), "errors": exc.errors},
        )

    @app.on_event("shutdown")
    def shutdown_db():
        close_db()

    return app
