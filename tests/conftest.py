from datetime import date

import pytest

# CPF com dígitos verificadores corretos
CPF_VALIDO = "12345678909"
HOJE = date(2026, 10, 19)


def guia_xml(
    nome="João da Silva",
    cpf=CPF_VALIDO,
    carteira="123456789",
    tuss="40101010",
    valor="15000",
    data="2024-01-15",
    cid=None,
    crm=None,
    root="ans",
):
    parts = ['<?xml version="1.0" encoding="UTF-8"?>', f"<{root}>", "  <beneficiario>"]
    if nome is not None:
        parts.append(f"    <nomeBeneficiario>{nome}</nomeBeneficiario>")
    if cpf is not None:
        parts.append(f"    <cpf>{cpf}</cpf>")
    if carteira is not None:
        parts.append(f"    <numeroCarteira>{carteira}</numeroCarteira>")
    parts.append("  </beneficiario>")
    parts.append("  <procedimento>")
    if tuss is not None:
        parts.append(f"    <codigo>{tuss}</codigo>")
    if valor is not None:
        parts.append(f"    <valor>{valor}</valor>")
    if data is not None:
        parts.append(f"    <data>{data}</data>")
    parts.append("  </procedimento>")
    if cid is not None:
        parts.append(f"  <diagnostico><cid>{cid}</cid></diagnostico>")
    if crm is not None:
        parts.append(f"  <profissional><nome>Dr. Maria Santos</nome><crm>{crm}</crm></profissional>")
    parts.append(f"</{root}>")
    return "\n".join(parts)


@pytest.fixture
def hoje():
    return HOJE
