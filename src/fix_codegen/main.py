from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from fix_codegen.config import (
    DEFAULT_DERIVE_ATTRIBUTE,
    DEFAULT_RUNTIME_CRATE,
    GeneratorConfig,
    ImportStyle,
)
from fix_codegen.generator import InvalidTagError, generate_fields
from fix_codegen.loader import DictionaryError, load_dictionary


def run(dictionary_path: str, output_path: str, config: GeneratorConfig) -> str:
    """Main pipeline: load, generate, write. Returns the written file path."""
    dictionary = load_dictionary(dictionary_path)
    print(
        f"Loaded {dictionary.version}: {len(dictionary.fields)} field(s), "
        f"{len(dictionary.messages)} message(s)"
    )

    code = generate_fields(dictionary, config)

    out = Path(output_path)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(code, encoding="utf-8")
    return str(out)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate Rust field and message definitions from a FIX dictionary",
    )
    parser.add_argument(
        "--dictionary",
        required=True,
        help="Path to the dictionary document (.json, .yaml or .yml)",
    )
    parser.add_argument(
        "--out",
        required=True,
        help="Path of the generated .rs file",
    )
    parser.add_argument(
        "--internal",
        action="store_true",
        help="Emit crate:: import paths for code compiled inside the runtime crate",
    )
    parser.add_argument(
        "--runtime-crate",
        default=DEFAULT_RUNTIME_CRATE,
        help=f"Name of the runtime crate (default: {DEFAULT_RUNTIME_CRATE})",
    )
    parser.add_argument(
        "--derive-attribute",
        default=DEFAULT_DERIVE_ATTRIBUTE,
        help=f"Helper attribute name on enum variants (default: {DEFAULT_DERIVE_ATTRIBUTE})",
    )
    parser.add_argument(
        "--messages",
        action="store_true",
        help="Also generate one struct per message",
    )
    parser.add_argument(
        "--derive",
        default="",
        help="Extra attribute line added to every message struct, e.g. '#[derive(Clone)]'",
    )
    parser.add_argument(
        "--expand-components",
        action="store_true",
        help="Inline component fields into message structs",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    args = _build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    config = GeneratorConfig(
        import_style=ImportStyle.INTERNAL if args.internal else ImportStyle.EXTERNAL,
        runtime_crate=args.runtime_crate,
        derive_attribute=args.derive_attribute,
        custom_derive_line=args.derive,
        include_messages=args.messages,
        expand_components=args.expand_components,
    )

    try:
        out_path = run(args.dictionary, args.out, config)
    except (DictionaryError, InvalidTagError, OSError) as e:
        print(f"FATAL: {e}", file=sys.stderr)
        sys.exit(1)

    print(f"Generated: {out_path}")


if __name__ == "__main__":
    main()
