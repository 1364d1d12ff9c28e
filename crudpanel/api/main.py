from __future__ import annotations

from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from crudpanel import __version__
from crudpanel.core.fields import CrudPanel
from crudpanel.core.settings import Settings, load_settings

from crudpanel.api.endpoints import fields, health
from crudpanel.api.middleware.error_shaping import SafeErrorMiddleware, install_field_error_handlers
from crudpanel.api.middleware.request_context import (
    RequestContextMiddleware,
    SecurityHeadersMiddleware,
)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or load_settings()

    app = FastAPI(
        title="CRUD Panel Fields API",
        version=__version__,
    )
    app.state.settings = settings
    # one field registry per allowed operation, process lifetime
    app.state.panels = {op: CrudPanel(operation=op) for op in settings.operations}

    # ------------------------------------------------------------
    # Middleware stack (ORDER MATTERS)
    # Starlette reverses add_middleware order: the LAST call = OUTERMOST wrapper.
    # Runtime order (outermost -> innermost):
    #   SafeErrorMiddleware -> CORSMiddleware -> SecurityHeaders -> RequestContext -> handler
    # ------------------------------------------------------------
    app.add_middleware(RequestContextMiddleware)
    app.add_middleware(SecurityHeadersMiddleware, enabled=settings.security_headers_enabled)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(SafeErrorMiddleware)

    install_field_error_handlers(app)

    app.include_router(health.router)
    app.include_router(fields.router, prefix="/api/v1")

    return app


app = create_app()
