from __future__ import annotations

import logging
from typing import Dict, Iterable, Iterator, List, Set, Tuple

from fix_codegen.config import GeneratorConfig
from fix_codegen.generator.docs import onixs_field_url
from fix_codegen.generator.rendering import (
    get_template_env,
    rust_byte_str_literal,
    single_line,
)
from fix_codegen.models import Dictionary, Field, LayoutItem, LayoutItemKind, Message
from fix_codegen.naming import member_identifier, type_identifier
from fix_codegen.type_resolver import TypeMode, make_optional, resolve_field_type

logger = logging.getLogger(__name__)

# Member that keeps the 'a parameter in use when no other member borrows.
LIFETIME_MEMBER = "lifetime"


def _iter_layout_fields(
    items: Iterable[LayoutItem],
    required: bool,
    expand_components: bool,
    message_name: str,
) -> Iterator[Tuple[Field, bool]]:
    """Yield (field, required) for every layout item that becomes a member.

    Groups are never flattened. Components are inlined only when
    ``expand_components`` is set; a field inside an optional component is
    itself optional.
    """
    for item in items:
        if item.kind is LayoutItemKind.FIELD and item.field is not None:
            yield item.field, required and item.required
        elif item.kind is LayoutItemKind.COMPONENT and expand_components and item.component:
            yield from _iter_layout_fields(
                item.component.layout,
                required and item.required,
                expand_components,
                message_name,
            )
        else:
            logger.debug(
                "Skipping %s item in message %s",
                item.kind.name.lower(),
                message_name,
            )


def _build_members(dictionary: Dictionary, message: Message, config: GeneratorConfig) -> List[Dict]:
    members = []
    seen: Set[str] = set()
    for field, required in _iter_layout_fields(
        message.layout, True, config.expand_components, message.name
    ):
        identifier = member_identifier(field.name)
        if identifier == LIFETIME_MEMBER:
            identifier = f"{LIFETIME_MEMBER}_"
        if identifier in seen:
            logger.debug("Dropping duplicate member %s in message %s", identifier, message.name)
            continue
        seen.add(identifier)
        rust_type = resolve_field_type(field, TypeMode.BORROWED, config.crate_path)
        members.append({
            "identifier": identifier,
            "rust_type": make_optional(rust_type, required),
            "field_name": single_line(field.name),
            "tag": field.tag,
            "doc_url": onixs_field_url(dictionary.version, field.tag),
        })
    return members


def generate_message(dictionary: Dictionary, message: Message, config: GeneratorConfig) -> str:
    """Generate the zero-copy struct for one message."""
    env = get_template_env()
    template = env.get_template("message.rs.j2")

    return template.render(
        identifier=type_identifier(message.name),
        custom_derive_line=config.custom_derive_line.strip(),
        members=_build_members(dictionary, message, config),
        msg_type=rust_byte_str_literal(message.msg_type),
    )
