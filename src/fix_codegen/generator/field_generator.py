from __future__ import annotations

import logging
from typing import Dict, List

from fix_codegen.config import GeneratorConfig
from fix_codegen.generator.docs import onixs_field_url
from fix_codegen.generator.rendering import (
    get_template_env,
    rust_str_literal,
    single_line,
)
from fix_codegen.models import Field
from fix_codegen.naming import constant_identifier, variant_identifier
from fix_codegen.type_resolver import TypeMode, enum_type_name, resolve_type

logger = logging.getLogger(__name__)

# TagU16 is a non-zero u16.
MIN_TAG = 1
MAX_TAG = 0xFFFF

GROUP_LEADER_SUFFIX = "Len"


class InvalidTagError(ValueError):
    """Raised when a field tag cannot be represented as a TagU16."""


def check_tag(field: Field) -> None:
    if (
        isinstance(field.tag, bool)
        or not isinstance(field.tag, int)
        or not MIN_TAG <= field.tag <= MAX_TAG
    ):
        raise InvalidTagError(
            f"Field '{field.name}' has tag {field.tag!r}; "
            f"tags must be integers in {MIN_TAG}..={MAX_TAG}"
        )


def is_group_leader(field: Field) -> bool:
    return field.name.endswith(GROUP_LEADER_SUFFIX)


def _build_variants(field: Field) -> List[Dict[str, str]]:
    variants = []
    for variant in field.enums or ():
        variants.append({
            "identifier": variant_identifier(variant.description),
            "doc": single_line(variant.value),
            "literal": rust_str_literal(variant.value),
        })
    return variants


def generate_field_def(field: Field, config: GeneratorConfig, version: str) -> str:
    """Generate the FieldDef constant for ``field`` and, if it has a closed
    value set, the enum type listing its variants."""
    check_tag(field)
    env = get_template_env()
    template = env.get_template("field_def.rs.j2")

    enum_type = enum_type_name(field)
    type_param = resolve_type(
        field.tag,
        field.data_type,
        enum_type,
        TypeMode.OWNED,
        config.crate_path,
    )
    logger.debug("Field %s <%d> -> %s", field.name, field.tag, type_param)

    return template.render(
        name=single_line(field.name),
        name_literal=rust_str_literal(field.name),
        tag=field.tag,
        doc_url=onixs_field_url(version, field.tag),
        identifier=constant_identifier(field.name),
        type_param=type_param,
        is_group_leader="true" if is_group_leader(field) else "false",
        data_type=field.data_type.value,
        enum_type=enum_type,
        variants=_build_variants(field),
        attribute=config.derive_attribute,
    )
