"""
Admin API routes - require the shared admin password
"""

import logging
from typing import Optional
from fastapi import APIRouter, Depends, UploadFile, File, Form
from fastapi.responses import Response
from sqlalchemy.orm import Session

from app.core.config import Settings, get_settings
from app.core.db import get_db
from app.core.errors import RSVPError
from app.schemas.common import PasswordRequest
from app.schemas.guest import (
    AddGuestRequest,
    DeleteRegistrationRequest,
    GuestResponse,
    UpdateGuestRequest,
)
from app.services.excel_service import ExcelService
from app.services.registration_service import RegistrationService
from app.services.repositories import GuestRepo
from app.services.stats_service import StatsService
from app.utils.responses import success_response, error_response, internal_error
from app.utils.security import admin_body, verify_admin_password

logger = logging.getLogger(__name__)

router = APIRouter()

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

@router.post("/add-guest")
async def add_guest(
    payload: AddGuestRequest = Depends(admin_body(AddGuestRequest, "Password non valida")),
    db: Session = Depends(get_db)
):
    """Add a guest to the invitation list"""
    try:
        guest = RegistrationService.add_guest(db, payload.name, payload.email)
    except RSVPError:
        raise
    except Exception:
        logger.exception("Error adding guest")
        return internal_error("Errore durante l'aggiunta dell'ospite")

    return success_response(
        guest=GuestResponse.model_validate(guest).model_dump(by_alias=True, mode="json")
    )

@router.post("/delete-registration")
async def delete_registration(
    payload: DeleteRegistrationRequest = Depends(admin_body(DeleteRegistrationRequest)),
    db: Session = Depends(get_db)
):
    """Delete a guest's registration together with its family members"""
    try:
        RegistrationService.delete_registration(db, payload.guest_id)
    except RSVPError:
        raise
    except Exception:
        logger.exception("Error deleting registration")
        return internal_error("Errore durante l'eliminazione")

    return success_response(message="Registrazione eliminata")

@router.post("/lista-invitati")
async def list_guests_with_stats(
    payload: PasswordRequest = Depends(admin_body(PasswordRequest, "Password non valida")),
    db: Session = Depends(get_db)
):
    """Full guest list with dashboard statistics"""
    try:
        guests, stats = RegistrationService.list_with_stats(db)
    except Exception:
        logger.exception("Error loading guest list")
        return internal_error("Errore nel recupero dei dati")

    return success_response(guests=guests, stats=stats)

@router.post("/update-guest")
async def update_guest(
    payload: UpdateGuestRequest = Depends(admin_body(UpdateGuestRequest)),
    db: Session = Depends(get_db)
):
    """Rename a guest and replace its registration and family members"""
    try:
        message = RegistrationService.update_guest(db, payload)
    except RSVPError:
        raise
    except Exception:
        logger.exception("Error updating guest")
        return internal_error("Errore durante l'aggiornamento")

    return success_response(message=message)

@router.post("/lista-invitati/export")
async def export_guest_list(
    payload: PasswordRequest = Depends(admin_body(PasswordRequest, "Password non valida")),
    db: Session = Depends(get_db)
):
    """Download the guest list and statistics as an Excel workbook"""
    try:
        guests = GuestRepo.list_all(db)
        stats = StatsService.compute(guests).model_dump(by_alias=True)
        excel_content = ExcelService.export_guest_list(guests, stats)
    except Exception:
        logger.exception("Error exporting guest list")
        return internal_error("Errore durante l'esportazione")

    return Response(
        content=excel_content,
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": "attachment; filename=lista_invitati.xlsx"}
    )

@router.post("/import-guests")
async def import_guests(
    password: Optional[str] = Form(None),
    file: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    config: Settings = Depends(get_settings)
):
    """Bulk-add guests from an Excel sheet with Nome/Email columns"""
    verify_admin_password(password, config, "Password non valida")

    if file is None or not file.filename or not file.filename.lower().endswith(".xlsx"):
        return error_response(
            message="Formato non valido. Carica un file Excel (.xlsx)",
            error_code="BAD_INPUT",
            status_code=400
        )

    file_content = await file.read()
    if len(file_content) > config.MAX_UPLOAD_SIZE:
        return error_response(
            message="File troppo grande",
            error_code="BAD_INPUT",
            status_code=400
        )

    try:
        success, errors, created, skipped = ExcelService.import_guests(file_content, db)
    except Exception:
        logger.exception("Error importing guests")
        return internal_error("Errore durante l'importazione")

    if not success:
        return error_response(
            message="Validazione del file Excel non riuscita",
            error_code="BAD_INPUT",
            details=errors,
            status_code=422
        )

    return success_response(created=created, skipped=skipped)
