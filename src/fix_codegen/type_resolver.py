from __future__ import annotations

from enum import Enum
from typing import Dict, Optional

from fix_codegen.models import DataType, Field
from fix_codegen.naming import type_identifier

# The CheckSum <10> field always maps to the runtime's checksum type.
CHECKSUM_TAG = 10

DECIMAL_TYPE = "rust_decimal::Decimal"
OPTION_WRAPPER = "::std::option::Option<{}>"

# Canonical category -> Rust type table. Placeholders are filled per mode:
#   {bytes}  borrowed byte slice
#   {array}  prefix for fixed-size byte arrays
#   {path}   path of the runtime crate
TYPE_TABLE: Dict[DataType, str] = {
    DataType.STRING: "{bytes}",
    DataType.DATA: "{bytes}",
    DataType.CHAR: "u8",
    DataType.BOOLEAN: "bool",
    DataType.COUNTRY: "{array}[u8; 2]",
    DataType.LANGUAGE: "{array}[u8; 2]",
    DataType.CURRENCY: "{array}[u8; 3]",
    DataType.EXCHANGE: "{array}[u8; 4]",
    DataType.LENGTH: "usize",
    DataType.NUM_IN_GROUP: "usize",
    DataType.DAY_OF_MONTH: "u32",
    DataType.INT: "i64",
    DataType.SEQ_NUM: "u64",
    DataType.UTC_DATE_ONLY: "{path}::dtf::Date",
    DataType.UTC_TIME_ONLY: "{path}::dtf::Time",
    DataType.UTC_TIMESTAMP: "{path}::dtf::Timestamp",
}

FALLBACK_TYPE = "{bytes}"


class TypeMode(Enum):
    """How a resolved type is spelled.

    OWNED is used by standalone constant declarations, which have no
    lifetime parameter in scope. BORROWED is used by zero-copy struct
    members, which borrow from the message buffer for ``'a``.
    """

    OWNED = "owned"
    BORROWED = "borrowed"


_MODE_SPELLINGS: Dict[TypeMode, Dict[str, str]] = {
    TypeMode.OWNED: {"bytes": "&[u8]", "array": "&"},
    TypeMode.BORROWED: {"bytes": "&'a [u8]", "array": ""},
}


def resolve_type(
    tag: int,
    data_type: DataType,
    enum_type_name: Optional[str],
    mode: TypeMode,
    crate_path: str,
) -> str:
    """Map a field to the Rust type its values decode into.

    Unknown categories fall back to a byte slice rather than failing.
    """
    if tag == CHECKSUM_TAG:
        return f"{crate_path}::dtf::CheckSum"
    if enum_type_name is not None:
        return enum_type_name
    if data_type.base_type is DataType.FLOAT:
        return DECIMAL_TYPE
    template = TYPE_TABLE.get(data_type, FALLBACK_TYPE)
    return template.format(path=crate_path, **_MODE_SPELLINGS[mode])


def enum_type_name(field: Field) -> Optional[str]:
    """Name of the enum generated for ``field``, if it has one."""
    if field.has_enums:
        return type_identifier(field.name)
    return None


def resolve_field_type(field: Field, mode: TypeMode, crate_path: str) -> str:
    return resolve_type(field.tag, field.data_type, enum_type_name(field), mode, crate_path)


def make_optional(typ: str, required: bool) -> str:
    if required:
        return typ
    return OPTION_WRAPPER.format(typ)
