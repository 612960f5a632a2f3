import io
import logging
import os
import zipfile

import streamlit as st

from tiss_validator.config import MAX_XML_SIZE_BYTES, load_policy
from tiss_validator.finding import ERRO, ALERTA
from tiss_validator.guide_validator import validate_guide, batch_frames, findings_to_frame
from tiss_validator.scoring import summarize, risk_level, lot_status
from tiss_validator.text_utils import looks_like_xml

st.set_page_config(page_title="Validador de Guias TISS", page_icon="🩺", layout="wide")

def _safe_secret(key: str, default: str) -> str:
    """
    Lê segredo do Streamlit (se existir).
    Sem secrets.toml (execução local), cai para variável de ambiente ou default.
    """
    try:
        # st.secrets.get pode disparar FileNotFoundError se não existir secrets.toml
        return st.secrets.get(key, os.environ.get(key, default))
    except FileNotFoundError:
        return os.environ.get(key, default)

logging.basicConfig(level=_safe_secret("LOG_LEVEL", "INFO").upper())
policy = load_policy()

st.title("🩺 Validador de Guias TISS — prevenção de glosas")
st.write(
    "Faça upload de **XML(s) de guia TISS** (ou um **.zip** com vários XMLs). "
    "O sistema valida estrutura, campos obrigatórios, formatos (CPF, TUSS, CID, CRM, datas) "
    "e regras de negócio, e calcula o **score de risco de glosa**."
)

uploaded = st.file_uploader("Envie XML(s) ou ZIP", type=["xml", "zip"], accept_multiple_files=True)

def _accept(name: str, data: bytes) -> bool:
    if len(data) > MAX_XML_SIZE_BYTES:
        st.warning(f"{name}: arquivo XML muito grande (máx. {MAX_XML_SIZE_BYTES // (1024 * 1024)} MB).")
        return False
    if not looks_like_xml(data):
        st.warning(f"{name}: arquivo inválido. Apenas arquivos XML são aceitos.")
        return False
    return True

def _read_files(uploaded_files):
    xml_payloads = []
    for uf in uploaded_files or []:
        name = uf.name
        data = uf.read()
        if name.lower().endswith(".zip"):
            try:
                zf = zipfile.ZipFile(io.BytesIO(data))
            except zipfile.BadZipFile as e:
                st.warning(f"Falha ao ler ZIP {name}: {e}")
                continue
            for zi in zf.infolist():
                if not zi.filename.lower().endswith(".xml"):
                    continue
                if zi.file_size > MAX_XML_SIZE_BYTES:
                    st.warning(f"{zi.filename}: arquivo XML muito grande.")
                    continue
                payload = zf.read(zi)
                if _accept(zi.filename, payload):
                    xml_payloads.append((zi.filename, payload))
        elif name.lower().endswith(".xml") and _accept(name, data):
            xml_payloads.append((name, data))
    return xml_payloads

xml_files = _read_files(uploaded)

if not xml_files:
    st.info("Envie ao menos 1 XML ou 1 ZIP contendo XMLs para começar.")
    st.stop()

with st.spinner("Validando guia(s)..."):
    results = [validate_guide(payload, policy) for _, payload in xml_files]
    df_resumo, df_achados = batch_frames(
        [(fname, result) for (fname, _), result in zip(xml_files, results)], policy
    )

tabs = st.tabs(["Resumo do lote", "Checklist por guia"])

with tabs[0]:
    st.subheader("Resumo")
    c1, c2, c3 = st.columns(3)
    with c1:
        st.metric("Guias", int(len(df_resumo)))
    with c2:
        st.metric("Válidas", int(df_resumo["valido"].sum()))
    with c3:
        st.metric("Score médio", f"{df_resumo['score_risco'].mean():.0f}%")
    st.dataframe(df_resumo, use_container_width=True, height=320, hide_index=True)

with tabs[1]:
    # por posição: ZIPs podem trazer arquivos com o mesmo nome
    idx = st.selectbox(
        "Guia",
        list(range(len(xml_files))),
        format_func=lambda i: f"{i + 1}. {xml_files[i][0]}",
    )
    fname = xml_files[idx][0]
    result = results[idx]
    s = summarize(result.validacoes, policy)

    c1, c2, c3, c4 = st.columns(4)
    with c1:
        st.metric("Erros", s.erros)
    with c2:
        st.metric("Críticos", s.erros_criticos)
    with c3:
        st.metric("Alertas", s.alertas)
    with c4:
        st.metric("Score de risco", f"{s.score}%", help=f"Nível: {risk_level(s.score, policy)}")

    status = lot_status(s.score, policy)
    if not result.valid:
        st.error(f"Guia bloqueada para envio (status: {status}). Corrija os itens críticos abaixo.")
    elif s.alertas:
        st.warning(f"Guia pode ser enviada com ressalvas (status: {status}).")
    else:
        st.success(f"Guia pronta para envio (status: {status}).")

    df_find = findings_to_frame(result.validacoes)
    icon = {ERRO: "❌", ALERTA: "⚠️"}
    df_find.insert(0, " ", df_find["status"].map(lambda x: icon.get(x, "✅")))
    st.dataframe(df_find, use_container_width=True, height=360, hide_index=True)

    if result.data is not None:
        with st.expander("Dados extraídos da guia"):
            st.json({
                "paciente": vars(result.data.paciente),
                "procedimento": vars(result.data.procedimento),
                "medico": vars(result.data.medico),
                "operadora": vars(result.data.operadora),
            })

    sel = df_achados[df_achados["indice"] == idx]
    st.caption(f"{len(sel)} verificações registradas para {fname}.")
