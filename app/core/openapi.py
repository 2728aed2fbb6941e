"""
OpenAPI schema customization for Swagger UI documentation.

Adds the documented server host, the API-key security definition used by
clients to pass bearer tokens, and the password policy description on the
auth request schema.
"""

from fastapi import FastAPI
from fastapi.openapi.utils import get_openapi

from app.core.config import settings

SECURITY_SCHEME_NAME = "custom-auth"


def get_custom_openapi(app: FastAPI):
    """
    Generate custom OpenAPI schema.

    Args:
        app: FastAPI application instance

    Returns:
        dict: Modified OpenAPI schema

    Note:
        The schema is built once and cached on the application.
    """
    if app.openapi_schema:
        return app.openapi_schema

    openapi_schema = get_openapi(
        title=app.title,
        version=app.version,
        description=app.description,
        routes=app.routes,
    )

    # Advertise HTTPS only, on the configured public host
    if settings.domain:
        openapi_schema["servers"] = [{"url": f"https://{settings.domain}"}]

    _add_security_scheme(openapi_schema)
    _add_password_policy_description(openapi_schema)

    app.openapi_schema = openapi_schema
    return app.openapi_schema


def _add_security_scheme(openapi_schema: dict) -> None:
    """
    Add the API-key security definition for the Authorization header.

    Args:
        openapi_schema: The OpenAPI schema dictionary to modify
    """
    components = openapi_schema.setdefault("components", {})
    components.setdefault("securitySchemes", {})[SECURITY_SCHEME_NAME] = {
        "type": "apiKey",
        "name": "Authorization",
        "in": "header",
        "description": "Copy 'Bearer ' + token into field",
    }
    openapi_schema["security"] = [{SECURITY_SCHEME_NAME: []}]


def _add_password_policy_description(openapi_schema: dict) -> None:
    """
    Describe the configured password policy on the AuthRequest schema.

    Args:
        openapi_schema: The OpenAPI schema dictionary to modify
    """
    schemas = openapi_schema.get("components", {}).get("schemas", {})
    if "AuthRequest" not in schemas:
        return

    password = schemas["AuthRequest"].get("properties", {}).get("password")
    if password is None:
        return

    policy = settings.password_policy
    password["description"] = (
        f"Password ({policy.min_length}-{policy.max_length} chars) made of ASCII letters, "
        f"digits and the symbols {settings.password_symbols} . Must contain at least "
        f"{policy.min_distinct_categories} of: uppercase, lowercase, digit, symbol."
    )
    password["minLength"] = policy.min_length
    password["maxLength"] = policy.max_length
