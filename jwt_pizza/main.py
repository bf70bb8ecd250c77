import logging
from typing import Optional

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from jwt_pizza import __version__
from jwt_pizza.core.config import Settings, configure_logging, get_settings
from jwt_pizza.core.database import build_engine, build_session_factory, init_db
from jwt_pizza.core.deps import set_auth_user
from jwt_pizza.core.error_handling import register_exception_handlers
from jwt_pizza.core.security import TokenCodec, build_password_context
from jwt_pizza.routes.auth import router as auth_router
from jwt_pizza.routes.franchise import router as franchise_router
from jwt_pizza.routes.health import router as health_router
from jwt_pizza.routes.order import router as order_router
from jwt_pizza.routes.user import router as user_router
from jwt_pizza.services.seed import seed_defaults
from jwt_pizza.services.session_manager import SessionManager


logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    # Every request resolves its user (or None) before route dependencies run
    app = FastAPI(title="JWT Pizza API", version=__version__, dependencies=[Depends(set_auth_user)])

    engine = build_engine(settings)
    password_context = build_password_context(settings)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)
    app.state.codec = TokenCodec(settings)
    app.state.session_manager = SessionManager(app.state.codec, password_context)

    origins = settings.cors_origins
    if origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    register_exception_handlers(app)

    app.include_router(health_router, tags=["health"])
    app.include_router(auth_router, prefix="/api/auth", tags=["auth"])
    app.include_router(user_router, prefix="/api/user", tags=["user"])
    app.include_router(order_router, prefix="/api/order", tags=["order"])
    app.include_router(franchise_router, prefix="/api/franchise", tags=["franchise"])

    if settings.env in {"dev", "test"}:
        init_db(engine)
        with app.state.session_factory() as db:
            seed_defaults(db, settings, password_context)
        logger.info("seeded default admin and menu")

    return app
