from __future__ import annotations
from datetime import date
from typing import List, Optional
from ..config import RiskPolicy, DEFAULT_POLICY
from ..finding import FindingTISS, ERRO, ALERTA, REGRA_NEGOCIO, aprovado
from ..extractor import GuiaTISS
from .checks import parse_guide_date

def _brl(cents: int) -> str:
    reais = f"{cents / 100:,.2f}"
    return "R$ " + reais.replace(",", "X").replace(".", ",").replace("X", ".")

def check_value(valor: int, policy: RiskPolicy = DEFAULT_POLICY) -> FindingTISS:
    if valor <= 0:
        return FindingTISS(
            campo="procedimento.valor",
            status=ERRO,
            mensagem="Valor do procedimento deve ser maior que zero",
            critico=True,
            tipo_validacao=REGRA_NEGOCIO,
        )
    if valor > policy.high_value_threshold:
        return FindingTISS(
            campo="procedimento.valor",
            status=ALERTA,
            mensagem="Valor do procedimento muito alto",
            detalhes=f"Valores acima de {_brl(policy.high_value_threshold)} podem requerer autorização prévia",
            tipo_validacao=REGRA_NEGOCIO,
        )
    return aprovado("procedimento.valor", "Valor do procedimento dentro dos limites", REGRA_NEGOCIO)

def check_not_future(data: str, today: date) -> Optional[FindingTISS]:
    """Só emite achado quando a data é futura; data ilegível fica com o passe de formato."""
    parsed = parse_guide_date(data)
    if parsed is None or parsed <= today:
        return None
    return FindingTISS(
        campo="procedimento.data",
        status=ERRO,
        mensagem="Data do procedimento não pode ser futura",
        detalhes=f"Data informada: {data}",
        critico=True,
        tipo_validacao=REGRA_NEGOCIO,
    )

def check_business_rules(
    guia: GuiaTISS,
    policy: RiskPolicy = DEFAULT_POLICY,
    today: Optional[date] = None,
) -> List[FindingTISS]:
    findings = [check_value(guia.procedimento.valor, policy)]
    if guia.procedimento.data:
        futura = check_not_future(guia.procedimento.data, today or date.today())
        if futura is not None:
            findings.append(futura)
    return findings
