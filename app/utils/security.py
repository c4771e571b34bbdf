"""
Security utilities and authentication
"""

import hmac
from typing import Callable, Optional, Type, TypeVar

from fastapi import Depends, Request
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, ValidationError

from app.core.config import Settings, get_settings
from app.core.errors import Unauthorized

ModelT = TypeVar("ModelT", bound=BaseModel)

def password_matches(submitted: Optional[str], config: Settings) -> bool:
    """Constant-time comparison against the configured admin password"""
    if not isinstance(submitted, str):
        return False
    return hmac.compare_digest(
        submitted.encode("utf-8"),
        config.ADMIN_PASSWORD.encode("utf-8")
    )

def verify_admin_password(
    submitted: Optional[str],
    config: Settings,
    message: str = "Non autorizzato"
) -> None:
    """Raise Unauthorized unless the submitted password is the admin secret"""
    if not password_matches(submitted, config):
        raise Unauthorized(message)

def admin_body(model: Type[ModelT], message: str = "Non autorizzato") -> Callable:
    """Dependency that checks the admin password before validating the JSON body.

    An unauthenticated caller gets 401 whatever else the body holds, so
    validation details are only reported once the password is accepted.
    """
    async def dependency(
        request: Request,
        config: Settings = Depends(get_settings)
    ) -> ModelT:
        try:
            body = await request.json()
        except ValueError:
            body = None

        password = body.get("password") if isinstance(body, dict) else None
        verify_admin_password(password, config, message)

        try:
            return model.model_validate(body)
        except ValidationError as e:
            raise RequestValidationError(
                [{**err, "loc": ("body", *err["loc"])} for err in e.errors(include_url=False)]
            )

    return dependency
