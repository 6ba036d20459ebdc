"""
Main application entry point for the Contact Management API.

This module initializes the FastAPI application, configures logging
and CORS, registers the error envelope handlers and includes routers
for users, contacts and addresses.

Modules:
- FastAPI: Web framework
- CORSMiddleware: Middleware for handling CORS
- contact_api.database: Database engine
- contact_api.models: SQLAlchemy models
- contact_api.auth: Registration and login router
- contact_api.users: Current user router
- contact_api.contacts: Contacts router
- contact_api.addresses: Addresses router
- contact_api.errors: Error envelope handlers
- contact_api.core: Application settings
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from contact_api.database import engine
from contact_api import models, contacts, addresses
from contact_api.auth import router as auth_router
from contact_api.users import router as users_router
from contact_api.errors import register_exception_handlers
from contact_api.logging_config import setup_logging
from contact_api.core import get_settings

settings = get_settings()
setup_logging(settings.LOG_LEVEL, settings.LOG_FILE)
logger = logging.getLogger(__name__)

# Create tables (for development only)
models.Base.metadata.create_all(bind=engine)

# Initialize FastAPI application
app = FastAPI(title=settings.PROJECT_NAME)

# Configure CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Include routers for application areas
app.include_router(auth_router)
app.include_router(users_router)
app.include_router(contacts.router)
app.include_router(addresses.router)

logger.info("%s ready, database at %s", settings.PROJECT_NAME, engine.url)


@app.get("/")
def root():
    """
    Root endpoint for the API.

    Returns a simple JSON message directing users to the Swagger UI.

    Returns:
        dict: JSON message with information about the API
    """
    return {"msg": "Contact Management API. Visit /docs for Swagger UI"}
