from __future__ import annotations

import logging
from datetime import datetime
from typing import List, Optional, Sequence

from fix_codegen.config import GeneratorConfig
from fix_codegen.generator.field_generator import generate_field_def
from fix_codegen.generator.message_generator import generate_message
from fix_codegen.generator.notice import generated_code_notice
from fix_codegen.generator.rendering import get_template_env, single_line
from fix_codegen.models import Dictionary

logger = logging.getLogger(__name__)


def assemble(
    dictionary: Dictionary,
    fragments: Sequence[str],
    config: GeneratorConfig,
    now: Optional[datetime] = None,
) -> str:
    """Wrap generated fragments into a complete Rust module.

    The import style only changes the ``use`` paths; generated type names
    are the same either way.
    """
    env = get_template_env()
    template = env.get_template("file.rs.j2")
    body = "\n\n".join(f.strip("\n") for f in fragments if f.strip())
    return template.render(
        version=single_line(dictionary.version),
        notice=generated_code_notice(now).rstrip("\n"),
        crate_path=config.crate_path,
        body=body,
    )


def generate_fields(
    dictionary: Dictionary,
    config: Optional[GeneratorConfig] = None,
    now: Optional[datetime] = None,
) -> str:
    """Generate the Rust module for every field (and optionally message) in ``dictionary``."""
    if config is None:
        config = GeneratorConfig()

    fragments: List[str] = [
        generate_field_def(f, config, dictionary.version) for f in dictionary.iter_fields()
    ]
    field_count = len(fragments)
    if config.include_messages:
        fragments.extend(
            generate_message(dictionary, m, config) for m in dictionary.iter_messages()
        )
    logger.info(
        "Generated %d field(s) and %d message(s) for %s",
        field_count,
        len(fragments) - field_count,
        dictionary.version,
    )
    return assemble(dictionary, fragments, config, now)
