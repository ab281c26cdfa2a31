from __future__ import annotations

from datetime import datetime, timezone
from email.utils import format_datetime
from typing import Optional

from fix_codegen import __version__
from fix_codegen.generator.rendering import get_template_env

GENERATOR_NAME = "fix-codegen"


def generated_code_notice(now: Optional[datetime] = None) -> str:
    """Render the "do not edit" banner placed at the top of every generated file.

    The banner carries the generator version and an RFC 2822 UTC timestamp,
    so two runs over the same dictionary differ only on its first line.
    """
    if now is None:
        now = datetime.now(timezone.utc)
    else:
        now = now.astimezone(timezone.utc)
    template = get_template_env().get_template("notice.rs.j2")
    return template.render(
        generator=GENERATOR_NAME,
        version=__version__,
        timestamp=format_datetime(now),
    )
