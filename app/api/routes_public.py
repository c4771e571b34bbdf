"""
Public API routes - no authentication required
"""

import logging
from fastapi import APIRouter, Depends
from fastapi.responses import Response
from sqlalchemy.orm import Session

from app.core.db import get_db
from app.services.excel_service import ExcelService
from app.services.qr_service import QRService
from app.services.registration_service import RegistrationService
from app.utils.responses import internal_error

logger = logging.getLogger(__name__)

router = APIRouter()

@router.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "ok"}

@router.get("/api/guests")
async def list_guests(db: Session = Depends(get_db)):
    """Guest names and RSVP state for the public RSVP page"""
    try:
        guests = RegistrationService.list_public(db)
    except Exception:
        logger.exception("Database error while listing guests")
        return internal_error("Errore nel recupero degli ospiti")

    return {"guests": guests}

@router.get("/api/invitation/qr.png")
async def get_invitation_qr():
    """QR code image linking to the RSVP page"""
    qr_bytes = QRService.generate_invitation_qr()

    return Response(
        content=qr_bytes,
        media_type="image/png",
        headers={"Content-Disposition": "inline; filename=invito_qr.png"}
    )

@router.get("/api/template/lista_invitati_template.xlsx")
async def download_import_template():
    """Download the Excel template for bulk guest import"""
    template_bytes = ExcelService.create_template()

    return Response(
        content=template_bytes,
        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        headers={"Content-Disposition": "attachment; filename=lista_invitati_template.xlsx"}
    )
