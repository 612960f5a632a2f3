"""
Score de risco de glosa a partir do conjunto completo de achados.

O score é sempre recalculado do zero sobre todos os achados (nunca por
delta), então a ordem dos achados não altera o resultado.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable

from .config import RiskPolicy, DEFAULT_POLICY
from .finding import FindingTISS, ERRO, ALERTA

RISCO_BAIXO = "baixo"
RISCO_MEDIO = "medio"
RISCO_ALTO = "alto"

LOTE_PRONTO = "pronto"
LOTE_REVISAR = "revisar"
LOTE_CRITICO = "critico"


@dataclass(frozen=True)
class ScoreSummary:
    erros: int
    alertas: int
    erros_criticos: int
    score: int


def summarize(findings: Iterable[FindingTISS], policy: RiskPolicy = DEFAULT_POLICY) -> ScoreSummary:
    erros = alertas = criticos = 0
    for f in findings:
        if f.status == ERRO:
            erros += 1
            if f.critico:
                criticos += 1
        elif f.status == ALERTA:
            alertas += 1
    raw = (
        erros * policy.error_weight
        + criticos * policy.critical_weight
        + alertas * policy.warning_weight
    )
    return ScoreSummary(erros=erros, alertas=alertas, erros_criticos=criticos, score=min(policy.score_cap, raw))


def compute_score(findings: Iterable[FindingTISS], policy: RiskPolicy = DEFAULT_POLICY) -> int:
    """min(cap, erros*20 + erros_criticos*15 + alertas*8) com a política padrão."""
    return summarize(findings, policy).score


def risk_level(score: int, policy: RiskPolicy = DEFAULT_POLICY) -> str:
    if score > policy.high_threshold:
        return RISCO_ALTO
    if score > policy.medium_threshold:
        return RISCO_MEDIO
    return RISCO_BAIXO


def lot_status(score: int, policy: RiskPolicy = DEFAULT_POLICY) -> str:
    """pronto / revisar / critico, derivado só do score."""
    return {
        RISCO_BAIXO: LOTE_PRONTO,
        RISCO_MEDIO: LOTE_REVISAR,
        RISCO_ALTO: LOTE_CRITICO,
    }[risk_level(score, policy)]
