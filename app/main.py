"""
Main entry point for the FastAPI application.

- Initializes the FastAPI app
- Includes all API routers
- Adds CORS and request context middleware
- Starts the notification dispatcher with the app
"""

# app/main.py
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core import logging_config  # noqa: F401
from app.core.config import settings
from app.core.error_handlers import register_error_handlers
from app.middleware.request_context_middleware import RequestContextMiddleware
from app.api.v1.router import api_router
from app.services.notifications import NotificationDispatcher, NotificationHub

import logging
logging.getLogger('sqlalchemy.engine').setLevel(logging.WARNING)
logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

app = FastAPI(title="SkillSwap Backend")

app.add_middleware(RequestContextMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

# Include versioned API routes
app.include_router(api_router, prefix="/api/v1")

@app.on_event("startup")
async def startup_event():
    # Created here so the registry and queue belong to the serving event loop
    app.state.notification_hub = NotificationHub()
    app.state.notification_dispatcher = NotificationDispatcher(app.state.notification_hub)
    app.state.notification_dispatcher.start()

@app.on_event("shutdown")
async def shutdown_event():
    await app.state.notification_dispatcher.stop()
