"""Stormtrooper Backend Application.

Backend for the Stormtrooper live-streaming companion app. It keeps track of
users, links their Facebook accounts, and stores their stream records.

Modules:
    - auth: JWT authentication and external token encryption
    - middleware: Error handling and standardized error responses
    - models: SQLAlchemy models for users, external accounts and streams
    - schemas: Pydantic models for request/response validation
    - services: Account linking, merging and stream management
    - config: Application configuration management
    - main: FastAPI application entry point
"""

__version__ = "1.0.0"
__author__ = "Stormtrooper Team"
