from __future__ import annotations
from dataclasses import dataclass, asdict

APROVADO = "APROVADO"
ALERTA = "ALERTA"
ERRO = "ERRO"

ESTRUTURA = "estrutura"
CAMPO_OBRIGATORIO = "campo_obrigatorio"
FORMATO = "formato"
REGRA_NEGOCIO = "regra_negocio"

SEVERIDADE = {APROVADO: 0, ALERTA: 1, ERRO: 2}

@dataclass(frozen=True)
class FindingTISS:
    campo: str                 # paciente.cpf / procedimento.cid / etc
    status: str                # APROVADO / ALERTA / ERRO
    mensagem: str              # descrição curta
    detalhes: str = ""         # complemento (quando houver)
    critico: bool = False      # bloqueia o envio mesmo se isolado
    tipo_validacao: str = ""   # estrutura / campo_obrigatorio / formato / regra_negocio

    def as_dict(self) -> dict:
        return asdict(self)

def aprovado(campo: str, mensagem: str, tipo_validacao: str) -> FindingTISS:
    return FindingTISS(campo=campo, status=APROVADO, mensagem=mensagem, tipo_validacao=tipo_validacao)
