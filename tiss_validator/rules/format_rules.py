from __future__ import annotations
from typing import Callable, Dict, List
from ..finding import FindingTISS, ERRO, ALERTA, FORMATO, aprovado
from ..extractor import GuiaTISS
from ..text_utils import digits_only
from .checks import is_valid_cpf, is_valid_tuss, is_valid_cid, is_valid_crm, parse_guide_date

def check_cpf(cpf: str) -> FindingTISS:
    cpf_limpo = digits_only(cpf)
    if len(cpf_limpo) != 11:
        return FindingTISS(
            campo="paciente.cpf",
            status=ERRO,
            mensagem="CPF em formato inválido",
            detalhes="CPF deve conter 11 dígitos",
            critico=True,
            tipo_validacao=FORMATO,
        )
    if not is_valid_cpf(cpf_limpo):
        return FindingTISS(
            campo="paciente.cpf",
            status=ERRO,
            mensagem="CPF inválido",
            detalhes="Dígitos verificadores incorretos",
            critico=True,
            tipo_validacao=FORMATO,
        )
    return aprovado("paciente.cpf", "CPF válido", FORMATO)

def check_tuss(codigo: str) -> FindingTISS:
    if not is_valid_tuss(codigo):
        return FindingTISS(
            campo="procedimento.codigoTUSS",
            status=ERRO,
            mensagem="Código TUSS em formato inválido",
            detalhes="Código TUSS deve conter 8 dígitos",
            critico=True,
            tipo_validacao=FORMATO,
        )
    return aprovado("procedimento.codigoTUSS", "Código TUSS em formato válido", FORMATO)

def check_cid(cid: str) -> FindingTISS:
    if not is_valid_cid(cid):
        return FindingTISS(
            campo="procedimento.cid",
            status=ERRO,
            mensagem="CID em formato inválido",
            detalhes="Formato esperado: A00 ou A00.0",
            tipo_validacao=FORMATO,
        )
    return aprovado("procedimento.cid", "CID em formato válido", FORMATO)

def check_crm(crm: str) -> FindingTISS:
    if not is_valid_crm(crm):
        return FindingTISS(
            campo="medico.crm",
            status=ALERTA,
            mensagem="CRM em formato não padrão",
            detalhes="Formato esperado: 12345-UF",
            tipo_validacao=FORMATO,
        )
    return aprovado("medico.crm", "CRM em formato válido", FORMATO)

def check_date(data: str) -> FindingTISS:
    if parse_guide_date(data) is None:
        return FindingTISS(
            campo="procedimento.data",
            status=ERRO,
            mensagem="Data do procedimento inválida",
            detalhes="Formatos aceitos: AAAA-MM-DD ou DD/MM/AAAA",
            tipo_validacao=FORMATO,
        )
    return aprovado("procedimento.data", "Data do procedimento válida", FORMATO)

# campo -> verificação de formato (também usada na revalidação de um campo editado)
FORMAT_CHECKS: Dict[str, Callable[[str], FindingTISS]] = {
    "paciente.cpf": check_cpf,
    "procedimento.codigoTUSS": check_tuss,
    "procedimento.cid": check_cid,
    "medico.crm": check_crm,
    "procedimento.data": check_date,
}

def check_formats(guia: GuiaTISS) -> List[FindingTISS]:
    """Só campos presentes; ausência já foi apontada em campo_obrigatorio."""
    values = {
        "paciente.cpf": guia.paciente.cpf,
        "procedimento.codigoTUSS": guia.procedimento.codigo_tuss,
        "procedimento.cid": guia.procedimento.cid,
        "medico.crm": guia.medico.crm,
        "procedimento.data": guia.procedimento.data,
    }
    return [FORMAT_CHECKS[campo](value) for campo, value in values.items() if value]
