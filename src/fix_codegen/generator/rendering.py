from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from jinja2 import Environment, FileSystemLoader


@lru_cache(maxsize=None)
def get_template_env() -> Environment:
    template_dir = Path(__file__).parent.parent / "templates"
    return Environment(
        loader=FileSystemLoader(str(template_dir)),
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
    )


def rust_str_literal(text: str) -> str:
    """Escape ``text`` for use between the quotes of a Rust string literal."""
    return (
        text.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("\n", "\\n")
        .replace("\r", "\\r")
        .replace("\t", "\\t")
    )


def rust_byte_str_literal(text: str) -> str:
    """Escape ``text`` for use between the quotes of a Rust byte string (b"...")."""
    out = []
    for byte in text.encode("utf-8"):
        ch = chr(byte)
        if ch in ('"', "\\"):
            out.append("\\" + ch)
        elif 0x20 <= byte < 0x7F:
            out.append(ch)
        else:
            out.append(f"\\x{byte:02x}")
    return "".join(out)


def single_line(text: str) -> str:
    """Collapse whitespace so ``text`` fits on one line of a /// comment."""
    return " ".join(text.split())
