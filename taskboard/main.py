from contextlib import asynccontextmanager

from fastapi import FastAPI
from sqlalchemy.exc import SQLAlchemyError

from taskboard.db import init_db
from taskboard.errors import unhandled_store_error
from taskboard.log import configure_logging
from taskboard.rbac.guard import RouteGuardMiddleware
from taskboard.routes.auth import router as auth_router
from taskboard.routes.health import router as health_router
from taskboard.routes.pages import router as pages_router
from taskboard.routes.projects import router as projects_router
from taskboard.routes.tasks import router as tasks_router
from taskboard.routes.users import router as users_router

@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    yield

def create_app() -> FastAPI:
    configure_logging()
    app = FastAPI(title="taskboard-api", version="0.1.0", lifespan=lifespan)
    app.add_middleware(RouteGuardMiddleware)
    app.add_exception_handler(SQLAlchemyError, unhandled_store_error)
    app.include_router(health_router)
    app.include_router(pages_router)
    app.include_router(auth_router)
    app.include_router(projects_router)
    app.include_router(tasks_router)
    app.include_router(users_router)
    return app

app = create_app()
