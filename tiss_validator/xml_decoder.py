from __future__ import annotations
import logging
import xml.etree.ElementTree as ET
from typing import Dict, List, Union

from .text_utils import strip_ns

logger = logging.getLogger(__name__)

# str | dict[tag, node] | list[node] (tags repetidas no mesmo nível)
GenericNode = Union[str, Dict[str, "GenericNode"], List["GenericNode"]]


class TissDecodeError(Exception):
    """XML malformado: não há árvore parcial."""
    pass


def _element_to_node(el: ET.Element) -> GenericNode:
    children = list(el)
    if not children:
        return (el.text or "").strip()

    node: Dict[str, GenericNode] = {}
    for child in children:
        tag = strip_ns(child.tag)
        value = _element_to_node(child)
        if tag not in node:
            node[tag] = value
        elif isinstance(node[tag], list):
            node[tag].append(value)
        else:
            # segunda ocorrência: vira sequência, na ordem do documento
            node[tag] = [node[tag], value]
    return node


def decode_xml(content: Union[str, bytes]) -> Dict[str, GenericNode]:
    """Return {root_tag: node} for any well-formed XML.
    - Não valida schema; namespaces são removidos dos nomes das tags.
    - Atributos e texto misto de elementos com filhos são ignorados.
    """
    try:
        root = ET.fromstring(content)
    except (ET.ParseError, LookupError, ValueError) as e:
        logger.warning(f"Could not decode XML: {e}")
        raise TissDecodeError(str(e)) from e
    return {strip_ns(root.tag): _element_to_node(root)}
