"""
Guest-facing RSVP routes
"""

import logging
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.db import get_db
from app.core.errors import RSVPError
from app.schemas.guest import RegisterRequest
from app.services.email_service import BrevoEmailService, get_email_service
from app.services.rsvp_service import RSVPService
from app.utils.responses import success_response, internal_error

logger = logging.getLogger(__name__)

router = APIRouter()

@router.post("/register")
async def register(
    payload: RegisterRequest,
    db: Session = Depends(get_db),
    email_service: BrevoEmailService = Depends(get_email_service)
):
    """Record an RSVP for one or more guests"""
    try:
        message = await RSVPService(email_service).submit(db, payload)
    except RSVPError:
        raise
    except Exception:
        logger.exception("Registration error")
        return internal_error("Errore durante la registrazione")

    return success_response(message=message)
