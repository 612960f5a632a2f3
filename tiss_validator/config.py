"""
Política de risco e limites operacionais do validador TISS.

Os valores padrão reproduzem a política de produto em uso (limite de
valor alto e pesos do score). Todos podem ser sobrescritos por variáveis
de ambiente, sem alterar código.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass

logger = logging.getLogger(__name__)

# Limite de tamanho aplicado na borda (upload), nunca dentro do validador
MAX_XML_SIZE_BYTES = 5 * 1024 * 1024

@dataclass(frozen=True)
class RiskPolicy:
    high_value_threshold: int = 100000   # centavos (R$ 1.000,00)
    error_weight: int = 20
    critical_weight: int = 15
    warning_weight: int = 8
    score_cap: int = 100
    medium_threshold: int = 40           # score > 40 => risco médio
    high_threshold: int = 70             # score > 70 => risco alto

DEFAULT_POLICY = RiskPolicy()

_ENV_FIELDS = {
    "TISS_HIGH_VALUE_THRESHOLD": "high_value_threshold",
    "TISS_ERROR_WEIGHT": "error_weight",
    "TISS_CRITICAL_WEIGHT": "critical_weight",
    "TISS_WARNING_WEIGHT": "warning_weight",
    "TISS_SCORE_CAP": "score_cap",
}

def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw.strip())
    except ValueError:
        logger.warning(f"Ignoring {name}='{raw}': not an integer, using {default}")
        return default

def load_policy() -> RiskPolicy:
    """Monta a RiskPolicy a partir do ambiente (TISS_*), com fallback nos padrões."""
    overrides = {
        attr: _env_int(env, getattr(DEFAULT_POLICY, attr))
        for env, attr in _ENV_FIELDS.items()
    }
    return RiskPolicy(**overrides)
