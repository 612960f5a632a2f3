from __future__ import annotations
import re
from datetime import date, datetime
from typing import Optional
from ..text_utils import digits_only

CID_RE = re.compile(r"^[A-Z]\d{2}(\.\d{1,2})?$")
CRM_RE = re.compile(r"^\d{4,6}[-/]?[A-Z]{2}$")
DATE_FORMATS = (
    (re.compile(r"^\d{4}-\d{2}-\d{2}$"), "%Y-%m-%d"),
    (re.compile(r"^\d{2}/\d{2}/\d{4}$"), "%d/%m/%Y"),
)

def _check_digit(digits: str, first_weight: int) -> int:
    total = sum(int(d) * (first_weight - i) for i, d in enumerate(digits))
    resto = 11 - (total % 11)
    return 0 if resto >= 10 else resto

def is_valid_cpf(cpf: str) -> bool:
    """Módulo 11 sobre os 11 dígitos (pontuação já removida).
    - Rejeita sequências repetidas (00000000000, 11111111111...).
    - 1º DV: pesos 10..2 sobre 9 dígitos; 2º DV: pesos 11..2 sobre 10 dígitos.
    """
    if len(cpf) != 11 or not cpf.isdigit() or len(set(cpf)) == 1:
        return False
    if _check_digit(cpf[:9], 10) != int(cpf[9]):
        return False
    return _check_digit(cpf[:10], 11) == int(cpf[10])

def is_valid_tuss(codigo: str) -> bool:
    return len(digits_only(codigo)) == 8

def is_valid_cid(cid: str) -> bool:
    return bool(CID_RE.match(str(cid or "").strip().upper()))

def is_valid_crm(crm: str) -> bool:
    return bool(CRM_RE.match(str(crm or "").strip()))

def parse_guide_date(txt: str) -> Optional[date]:
    """Aceita YYYY-MM-DD ou DD/MM/YYYY; data de calendário inexistente => None."""
    s = str(txt or "").strip()
    for pattern, fmt in DATE_FORMATS:
        if pattern.match(s):
            try:
                return datetime.strptime(s, fmt).date()
            except ValueError:
                return None
    return None
