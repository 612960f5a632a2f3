from __future__ import annotations
import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, List, Optional, Tuple, Union

import pandas as pd

from .config import RiskPolicy, DEFAULT_POLICY
from .finding import FindingTISS, SEVERIDADE, ERRO, FORMATO, ESTRUTURA
from .xml_decoder import decode_xml, TissDecodeError
from .extractor import GuiaTISS, extract_guide
from .scoring import summarize, compute_score, risk_level, lot_status
from .rules.structure_rules import check_structure
from .rules.required_fields import check_required_fields
from .rules.format_rules import check_formats, FORMAT_CHECKS
from .rules.business_rules import check_business_rules

logger = logging.getLogger(__name__)

FINDING_COLUMNS = ["campo", "status", "mensagem", "detalhes", "critico", "tipo_validacao"]


@dataclass(frozen=True)
class ResultadoTISS:
    valid: bool
    validacoes: List[FindingTISS] = field(default_factory=list)
    data: Optional[GuiaTISS] = None     # None só quando o XML nem decodifica


def validate_guide(
    content: Union[str, bytes],
    policy: RiskPolicy = DEFAULT_POLICY,
    today: Optional[date] = None,
) -> ResultadoTISS:
    """Decodifica, extrai e valida uma guia TISS.
    - Passes: estrutura -> campos obrigatórios -> formato -> regras de negócio.
    - Todos os passes rodam até o fim; só a falha de decodificação interrompe.
    - Nunca lança: XML malformado vira um único achado crítico de estrutura.
    """
    try:
        tree = decode_xml(content)
    except TissDecodeError as e:
        return ResultadoTISS(
            valid=False,
            validacoes=[FindingTISS(
                campo="xml",
                status=ERRO,
                mensagem="Erro ao processar XML TISS",
                detalhes=str(e),
                critico=True,
                tipo_validacao=ESTRUTURA,
            )],
        )

    findings: List[FindingTISS] = []
    findings.extend(check_structure(tree))
    guia = extract_guide(tree)
    findings.extend(check_required_fields(guia))
    findings.extend(check_formats(guia))
    findings.extend(check_business_rules(guia, policy, today))

    valid = not any(f.status == ERRO for f in findings)
    s = summarize(findings, policy)
    logger.debug(f"TISS guide validated: valid={valid} erros={s.erros} alertas={s.alertas} score={s.score}")
    return ResultadoTISS(valid=valid, validacoes=findings, data=guia)


def revalidate_field(
    findings: Iterable[FindingTISS],
    campo: str,
    valor: str,
    policy: RiskPolicy = DEFAULT_POLICY,
) -> Tuple[List[FindingTISS], int]:
    """Return (achados_atualizados, score) após editar um único campo.
    - Troca apenas os achados de formato do campo pela nova verificação.
    - Score recalculado sobre o conjunto completo, nunca por delta.
    """
    if campo not in FORMAT_CHECKS:
        raise ValueError(f"Campo sem verificação de formato: {campo}")

    updated: List[FindingTISS] = []
    insert_at: Optional[int] = None
    for f in findings:
        if f.campo == campo and f.tipo_validacao == FORMATO:
            if insert_at is None:
                insert_at = len(updated)
            continue
        updated.append(f)

    if valor:
        novo = FORMAT_CHECKS[campo](valor)
        if insert_at is None:
            # sem achado anterior: entra depois do último achado de formato
            formato_idx = [i for i, f in enumerate(updated) if f.tipo_validacao == FORMATO]
            insert_at = formato_idx[-1] + 1 if formato_idx else len(updated)
        updated.insert(insert_at, novo)

    return updated, compute_score(updated, policy)


def findings_to_frame(findings: Iterable[FindingTISS]) -> pd.DataFrame:
    df_find = pd.DataFrame([f.as_dict() for f in findings], columns=FINDING_COLUMNS)
    # sort: ERRO -> ALERTA -> APROVADO, mantendo a ordem dos passes dentro de cada grupo
    if not df_find.empty:
        df_find["_o"] = df_find["status"].map(lambda x: -SEVERIDADE.get(x, -1))
        df_find = df_find.sort_values(["_o"], kind="stable").drop(columns=["_o"])
    return df_find.reset_index(drop=True)


def batch_frames(
    named_results: Iterable[Tuple[str, ResultadoTISS]],
    policy: RiskPolicy = DEFAULT_POLICY,
) -> Tuple[pd.DataFrame, pd.DataFrame]:
    """Return (df_resumo, df_achados) a partir de resultados já calculados.
    - 'indice' é a posição na entrada (arquivos de mesmo nome não se misturam).
    """
    resumo = []
    achados = []
    for indice, (fname, result) in enumerate(named_results):
        s = summarize(result.validacoes, policy)
        resumo.append({
            "indice": indice,
            "arquivo": fname,
            "valido": result.valid,
            "erros": s.erros,
            "erros_criticos": s.erros_criticos,
            "alertas": s.alertas,
            "score_risco": s.score,
            "nivel_risco": risk_level(s.score, policy),
            "status_lote": lot_status(s.score, policy),
        })
        for f in result.validacoes:
            row = {"indice": indice, "arquivo": fname}
            row.update(f.as_dict())
            achados.append(row)

    df_resumo = pd.DataFrame(resumo, columns=[
        "indice", "arquivo", "valido", "erros", "erros_criticos", "alertas",
        "score_risco", "nivel_risco", "status_lote",
    ])
    df_achados = pd.DataFrame(achados, columns=["indice", "arquivo"] + FINDING_COLUMNS)
    if not df_resumo.empty:
        df_resumo = df_resumo.sort_values(["score_risco"], ascending=False, kind="stable").reset_index(drop=True)
    return df_resumo, df_achados


def validate_batch(
    payloads: Iterable[Tuple[str, Union[str, bytes]]],
    policy: RiskPolicy = DEFAULT_POLICY,
    today: Optional[date] = None,
) -> Tuple[pd.DataFrame, pd.DataFrame]:
    """Return (df_resumo, df_achados) para vários (arquivo, conteúdo)."""
    named_results = [(fname, validate_guide(content, policy, today)) for fname, content in payloads]
    return batch_frames(named_results, policy)
