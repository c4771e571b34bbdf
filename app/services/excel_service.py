"""
Excel processing service for guest list import/export
"""

import io
import logging
from typing import Dict, List, Tuple
import pandas as pd
from sqlalchemy.orm import Session

from app.models import Guest
from app.services.email_templates import dietary_label

logger = logging.getLogger(__name__)

class ExcelService:
    """Service for handling Excel operations"""

    NAME_COLUMNS = ['nome', 'name']
    EMAIL_COLUMNS = ['email', 'e-mail']
    GUEST_SHEET = 'Lista Invitati'
    SUMMARY_SHEET = 'Riepilogo'

    STAT_LABELS = {
        'totalGuests': 'Invitati totali',
        'totalRegistered': 'Risposte ricevute',
        'pendingGuests': 'In attesa di risposta',
        'totalConfirmedAttending': 'Confermati',
        'totalNotAttending': 'Non partecipano',
        'plusOnes': 'Accompagnatori',
        'familyMembersCount': 'Familiari',
        'totalAttending': 'Totale persone presenti',
    }

    @staticmethod
    def create_template() -> bytes:
        """Create Excel template for importing guests"""
        df = pd.DataFrame([
            ['Mario Rossi', 'mario.rossi@example.com'],
            ['Giulia Bianchi', ''],
        ], columns=['Nome', 'Email'])

        buffer = io.BytesIO()
        with pd.ExcelWriter(buffer, engine='openpyxl') as writer:
            df.to_excel(writer, index=False, sheet_name=ExcelService.GUEST_SHEET)

        return buffer.getvalue()

    @staticmethod
    def _column_mapping(df: pd.DataFrame) -> Dict[str, str]:
        column_mapping = {}
        for col in df.columns:
            col_lower = str(col).lower().strip()
            if col_lower in ExcelService.NAME_COLUMNS:
                column_mapping['name'] = col
            elif col_lower in ExcelService.EMAIL_COLUMNS:
                column_mapping['email'] = col
        return column_mapping

    @staticmethod
    def validate_import_structure(df: pd.DataFrame) -> Tuple[bool, List[str]]:
        """Validate that the sheet has a guest name column"""
        errors = []

        if 'name' not in ExcelService._column_mapping(df):
            errors.append("Colonna obbligatoria mancante: Nome")

        return len(errors) == 0, errors

    @staticmethod
    def import_guests(
        file_content: bytes,
        db: Session
    ) -> Tuple[bool, List[str], int, List[str]]:
        """Create guests from an uploaded sheet.

        Returns (success, errors, created_count, skipped_names). Blank names
        are ignored; names already on the list are skipped.
        """
        try:
            df = pd.read_excel(io.BytesIO(file_content), dtype=str)
        except Exception as e:
            logger.warning(f"Unreadable guest import file: {e}")
            return False, [f"File Excel non leggibile: {str(e)}"], 0, []

        valid_structure, structure_errors = ExcelService.validate_import_structure(df)
        if not valid_structure:
            return False, structure_errors, 0, []

        column_mapping = ExcelService._column_mapping(df)
        known_names = {name for (name,) in db.query(Guest.name).all()}

        created = 0
        skipped = []
        try:
            for _, row in df.iterrows():
                raw_name = row[column_mapping['name']]
                if pd.isna(raw_name) or str(raw_name).strip() == '':
                    continue
                name = str(raw_name).strip()

                if name in known_names:
                    skipped.append(name)
                    continue

                email = None
                if 'email' in column_mapping:
                    raw_email = row[column_mapping['email']]
                    if not pd.isna(raw_email) and str(raw_email).strip():
                        email = str(raw_email).strip()

                db.add(Guest(name=name, email=email))
                known_names.add(name)
                created += 1

            db.commit()
        except Exception:
            db.rollback()
            raise

        logger.info(f"Imported {created} guests, skipped {len(skipped)}")
        return True, [], created, skipped

    @staticmethod
    def _status(guest: Guest) -> str:
        if guest.registration is None:
            return 'In attesa'
        return 'Confermato' if guest.registration.attending else 'Non partecipa'

    @staticmethod
    def export_guest_list(guests: List[Guest], stats: Dict) -> bytes:
        """Export guests with their registration and a statistics summary"""
        data = []
        for guest in guests:
            registration = guest.registration
            attending = registration is not None and registration.attending
            row = {
                'Nome': guest.name,
                'Email': guest.email or '',
                'Stato': ExcelService._status(guest),
                'Dieta': dietary_label(registration.dietary_preference) if attending else '',
                'Note dieta': (registration.dietary_notes or '') if attending else '',
                'Accompagnatore': (registration.plus_one_name or '') if attending else '',
                'Familiari': ', '.join(m.name for m in registration.family_members) if attending else '',
            }
            data.append(row)

        df = pd.DataFrame(data, columns=[
            'Nome', 'Email', 'Stato', 'Dieta', 'Note dieta', 'Accompagnatore', 'Familiari'
        ])

        summary_rows = [
            {'Voce': label, 'Valore': stats[key]}
            for key, label in ExcelService.STAT_LABELS.items()
        ]
        summary_rows.extend(
            {'Voce': f"Dieta: {dietary_label(code)}", 'Valore': count}
            for code, count in stats['dietaryStats'].items()
        )
        summary = pd.DataFrame(summary_rows, columns=['Voce', 'Valore'])

        buffer = io.BytesIO()
        with pd.ExcelWriter(buffer, engine='openpyxl') as writer:
            df.to_excel(writer, index=False, sheet_name=ExcelService.GUEST_SHEET)
            summary.to_excel(writer, index=False, sheet_name=ExcelService.SUMMARY_SHEET)

        return buffer.getvalue()
