from __future__ import annotations
import re

def digits_only(s: str) -> str:
    return re.sub(r"\D+", "", str(s or ""))

def strip_ns(tag: str) -> str:
    return tag.split("}", 1)[-1] if "}" in tag else tag

def looks_like_xml(data: bytes) -> bool:
    """Primeiro caractere útil é '<' (ignora BOM UTF-8 e espaços)."""
    return data[:8].decode("utf-8", errors="ignore").lstrip("\ufeff \t\r\n").startswith("<")
