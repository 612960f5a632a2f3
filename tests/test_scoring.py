import random

import pytest

from tiss_validator.config import RiskPolicy
from tiss_validator.finding import FindingTISS, APROVADO, ALERTA, ERRO, FORMATO
from tiss_validator.scoring import summarize, compute_score, risk_level, lot_status


def _f(status, critico=False):
    return FindingTISS(campo="x", status=status, mensagem="m", critico=critico, tipo_validacao=FORMATO)


def test_weights():
    findings = [_f(ERRO, True), _f(ERRO), _f(ALERTA), _f(APROVADO)]
    s = summarize(findings)
    assert (s.erros, s.erros_criticos, s.alertas) == (2, 1, 1)
    assert s.score == 2 * 20 + 15 + 8


def test_empty_and_approved_only():
    assert compute_score([]) == 0
    assert compute_score([_f(APROVADO)] * 10) == 0


def test_saturates_at_cap():
    findings = [_f(ERRO, True)] * 3     # 105 bruto
    assert compute_score(findings) == 100
    assert compute_score(findings * 10) == 100


def test_order_independent():
    findings = [_f(ERRO, True), _f(ERRO), _f(ALERTA), _f(ALERTA), _f(APROVADO)]
    expected = compute_score(findings)
    rng = random.Random(7)
    for _ in range(20):
        shuffled = findings[:]
        rng.shuffle(shuffled)
        assert compute_score(shuffled) == expected


def test_monotonic_in_severity():
    assert compute_score([_f(APROVADO)]) < compute_score([_f(ALERTA)])
    assert compute_score([_f(ALERTA)]) < compute_score([_f(ERRO)])
    assert compute_score([_f(ERRO)]) < compute_score([_f(ERRO, True)])


def test_custom_policy():
    policy = RiskPolicy(error_weight=30, critical_weight=0, warning_weight=10, score_cap=50)
    assert compute_score([_f(ERRO), _f(ALERTA)], policy) == 40
    assert compute_score([_f(ERRO)] * 2, policy) == 50


@pytest.mark.parametrize("score,level,status", [
    (0, "baixo", "pronto"),
    (40, "baixo", "pronto"),
    (41, "medio", "revisar"),
    (70, "medio", "revisar"),
    (71, "alto", "critico"),
    (100, "alto", "critico"),
])
def test_classification(score, level, status):
    assert risk_level(score) == level
    assert lot_status(score) == status
