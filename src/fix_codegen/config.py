from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

DEFAULT_RUNTIME_CRATE = "fefix"
# Helper attribute consumed by the runtime's FieldType derive macro.
DEFAULT_DERIVE_ATTRIBUTE = "fefix"


class ImportStyle(Enum):
    """Where the generated file will live.

    INTERNAL: compiled inside the runtime crate itself, so paths start at ``crate``.
    EXTERNAL: compiled in a downstream crate that depends on the runtime.
    """

    INTERNAL = "internal"
    EXTERNAL = "external"


@dataclass
class GeneratorConfig:
    """Options for one generation pass."""

    import_style: ImportStyle = ImportStyle.EXTERNAL
    runtime_crate: str = DEFAULT_RUNTIME_CRATE
    derive_attribute: str = DEFAULT_DERIVE_ATTRIBUTE
    # Extra attribute line placed under #[derive(Debug)] on message structs.
    custom_derive_line: str = ""
    include_messages: bool = False
    expand_components: bool = False

    @property
    def crate_path(self) -> str:
        if self.import_style is ImportStyle.INTERNAL:
            return "crate"
        return self.runtime_crate
