from __future__ import annotations
from typing import List, NamedTuple
from ..finding import FindingTISS, ERRO, ALERTA, CAMPO_OBRIGATORIO, aprovado
from ..extractor import GuiaTISS

MIN_NOME_PACIENTE = 3

class RequiredField(NamedTuple):
    campo: str
    rotulo: str
    status_ausente: str     # ERRO bloqueia o envio; ALERTA só aumenta o risco
    detalhes: str = ""

REQUIRED_FIELDS = (
    RequiredField("paciente.nome", "Nome do paciente", ERRO, "Campo vazio ou inválido"),
    RequiredField("paciente.cpf", "CPF do paciente", ERRO),
    RequiredField("paciente.carteirinha", "Número da carteirinha", ERRO),
    RequiredField("procedimento.codigoTUSS", "Código TUSS", ERRO),
    RequiredField("procedimento.cid", "CID", ALERTA, "Recomendado para evitar glosas"),
    RequiredField("medico.crm", "CRM do médico", ALERTA),
)

def _values(guia: GuiaTISS) -> dict:
    return {
        "paciente.nome": guia.paciente.nome,
        "paciente.cpf": guia.paciente.cpf,
        "paciente.carteirinha": guia.paciente.carteirinha,
        "procedimento.codigoTUSS": guia.procedimento.codigo_tuss,
        "procedimento.cid": guia.procedimento.cid,
        "medico.crm": guia.medico.crm,
    }

def _is_filled(campo: str, value: str) -> bool:
    value = (value or "").strip()
    if campo == "paciente.nome":
        return len(value) >= MIN_NOME_PACIENTE
    return bool(value)

def check_required_fields(guia: GuiaTISS) -> List[FindingTISS]:
    """Um achado por campo, presente ou não (trilha de auditoria completa)."""
    findings: List[FindingTISS] = []
    values = _values(guia)
    for req in REQUIRED_FIELDS:
        if _is_filled(req.campo, values[req.campo]):
            findings.append(aprovado(req.campo, f"{req.rotulo} preenchido", CAMPO_OBRIGATORIO))
            continue
        if req.status_ausente == ERRO:
            mensagem = f"{req.rotulo} obrigatório"
        else:
            mensagem = f"{req.rotulo} não informado"
        findings.append(FindingTISS(
            campo=req.campo,
            status=req.status_ausente,
            mensagem=mensagem,
            detalhes=req.detalhes,
            critico=req.status_ausente == ERRO,
            tipo_validacao=CAMPO_OBRIGATORIO,
        ))
    return findings
