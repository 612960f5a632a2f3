from __future__ import annotations
from typing import Any, Dict, List, Optional
from ..finding import FindingTISS, ERRO, ESTRUTURA, aprovado
from ..extractor import ROOT_TAGS


def check_structure(tree: Optional[Dict[str, Any]]) -> List[FindingTISS]:
    """Só olha o topo da árvore; conteúdo de campos fica para os outros passes."""
    if not tree:
        return [FindingTISS(
            campo="xml",
            status=ERRO,
            mensagem="XML vazio ou inválido",
            critico=True,
            tipo_validacao=ESTRUTURA,
        )]
    if not any(tree.get(tag) for tag in ROOT_TAGS):
        return [FindingTISS(
            campo="estrutura",
            status=ERRO,
            mensagem="Estrutura XML não segue padrão TISS",
            detalhes=f"Tags principais não encontradas (esperado: {', '.join(ROOT_TAGS)})",
            critico=True,
            tipo_validacao=ESTRUTURA,
        )]
    return [aprovado("estrutura", "Estrutura XML válida", ESTRUTURA)]
