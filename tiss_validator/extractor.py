from __future__ import annotations
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation, ROUND_CEILING
from typing import Any, Dict, Optional, Sequence, Tuple

ROOT_TAGS = ("ans", "lote", "guias")

# campo lógico -> caminhos candidatos (o primeiro preenchido vence)
FIELD_PATHS: Dict[str, Tuple[Tuple[str, ...], ...]] = {
    "paciente.nome": (("beneficiario", "nomeBeneficiario"), ("paciente", "nome")),
    "paciente.cpf": (("beneficiario", "cpf"), ("paciente", "cpf")),
    "paciente.carteirinha": (("beneficiario", "numeroCarteira"), ("paciente", "carteirinha")),
    "procedimento.codigoTUSS": (("procedimento", "codigo"), ("procedimentos", "codigo")),
    "procedimento.cid": (("diagnostico", "cid"), ("procedimento", "cid")),
    "procedimento.valor": (("procedimento", "valor"), ("valorTotal",)),
    "procedimento.data": (("procedimento", "data"), ("dataAtendimento",)),
    "medico.nome": (("profissional", "nome"), ("medico", "nome")),
    "medico.crm": (("profissional", "crm"), ("medico", "crm")),
    "operadora.codigo": (("operadora", "codigo"),),
    "operadora.nome": (("operadora", "nome"),),
}


@dataclass(frozen=True)
class Paciente:
    nome: str = ""
    cpf: str = ""
    carteirinha: str = ""

@dataclass(frozen=True)
class Procedimento:
    codigo_tuss: str = ""
    cid: str = ""
    valor: int = 0        # centavos
    data: str = ""        # YYYY-MM-DD ou DD/MM/YYYY

@dataclass(frozen=True)
class Medico:
    nome: str = ""
    crm: str = ""

@dataclass(frozen=True)
class Operadora:
    codigo: str = ""
    nome: str = ""

@dataclass(frozen=True)
class GuiaTISS:
    paciente: Paciente = field(default_factory=Paciente)
    procedimento: Procedimento = field(default_factory=Procedimento)
    medico: Medico = field(default_factory=Medico)
    operadora: Operadora = field(default_factory=Operadora)


def _step(node: Any, key: str) -> Any:
    if isinstance(node, list):
        node = node[0] if node else None
    if isinstance(node, dict):
        return node.get(key)
    return None

def _lookup(root: Any, path: Sequence[str]) -> str:
    node = root
    for key in path:
        node = _step(node, key)
        if node is None:
            return ""
    if isinstance(node, list):
        node = node[0] if node else ""
    return node if isinstance(node, str) else ""

def first_present(root: Any, campo: str) -> str:
    for path in FIELD_PATHS[campo]:
        value = _lookup(root, path)
        if value:
            return value
    return ""

# magnitude máxima aceita (ordem de grandeza); acima disso => 0
MAX_VALOR_DIGITOS = 18

def _to_cents(txt: str) -> int:
    """'15000' -> 15000; fração arredonda para cima (0.5 -> 1); vazio/inválido => 0 (nunca lança)."""
    if not txt:
        return 0
    try:
        d = Decimal(txt.strip().replace(",", "."))
    except InvalidOperation:
        return 0
    if not d.is_finite() or d.adjusted() > MAX_VALOR_DIGITOS:
        return 0
    return int(d.to_integral_value(rounding=ROUND_CEILING))

def select_root(tree: Optional[Dict[str, Any]]) -> Any:
    if not tree:
        return {}
    for tag in ROOT_TAGS:
        if tag in tree:
            return tree[tag]
    return tree

def extract_guide(tree: Optional[Dict[str, Any]]) -> GuiaTISS:
    """Mapeia a árvore genérica na GuiaTISS normalizada (best-effort)."""
    root = select_root(tree)
    get = lambda campo: first_present(root, campo)
    return GuiaTISS(
        paciente=Paciente(
            nome=get("paciente.nome"),
            cpf=get("paciente.cpf"),
            carteirinha=get("paciente.carteirinha"),
        ),
        procedimento=Procedimento(
            codigo_tuss=get("procedimento.codigoTUSS"),
            cid=get("procedimento.cid"),
            valor=_to_cents(get("procedimento.valor")),
            data=get("procedimento.data"),
        ),
        medico=Medico(nome=get("medico.nome"), crm=get("medico.crm")),
        operadora=Operadora(codigo=get("operadora.codigo"), nome=get("operadora.nome")),
    )
