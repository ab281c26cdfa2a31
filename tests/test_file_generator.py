import re
from datetime import datetime, timezone
from pathlib import Path

import pytest

from fix_codegen import __version__
from fix_codegen.config import GeneratorConfig, ImportStyle
from fix_codegen.generator import assemble, generate_fields, generated_code_notice
from fix_codegen.loader import load_dictionary
from fix_codegen.models import DataType, Dictionary, Field

from rust_syntax import check_rust_structure

FIXTURES = Path(__file__).parent / "fixtures"
DICTIONARY_FILES = ["fix40_subset.json", "fix44_subset.yaml"]

FIXED_NOW = datetime(2024, 3, 5, 14, 30, 0, tzinfo=timezone.utc)


def _strip_notice_timestamp(code: str) -> str:
    return re.sub(r"^// Generated automatically by .*$", "", code, count=1, flags=re.MULTILINE)


class TestNotice:
    def test_contents(self):
        notice = generated_code_notice(FIXED_NOW)

        assert notice.startswith(
            f"// Generated automatically by fix-codegen {__version__} on Tue, 05 Mar 2024 14:30:00 +0000."
        )
        assert "// DO NOT MODIFY MANUALLY." in notice
        assert "// DO NOT COMMIT TO VERSION CONTROL." in notice
        assert "// ALL CHANGES WILL BE OVERWRITTEN." in notice

    def test_non_utc_time_is_converted(self):
        from datetime import timedelta

        local = FIXED_NOW.astimezone(timezone(timedelta(hours=2)))
        assert "Tue, 05 Mar 2024 14:30:00 +0000" in generated_code_notice(local)

    def test_defaults_to_current_time(self):
        notice = generated_code_notice()
        assert re.search(r"on \w{3}, \d{2} \w{3} \d{4} \d{2}:\d{2}:\d{2} \+0000\.", notice)


class TestAssemble:
    def setup_method(self):
        self.dictionary = Dictionary(version="FIX.4.4")

    def test_header_and_imports_external(self):
        result = assemble(self.dictionary, ["// body"], GeneratorConfig(), FIXED_NOW)

        assert result.startswith("//! Field and message definitions for FIX.4.4.\n\n#![allow(dead_code)]\n")
        assert "use fefix::{FieldDef, FieldLocation, TagU16};" in result
        assert "use fefix::{DataType, Buffer};" in result
        assert "use fefix::DataField;" in result
        assert "use std::marker::PhantomData;" in result
        assert "use crate::" not in result

    def test_imports_internal(self):
        config = GeneratorConfig(import_style=ImportStyle.INTERNAL)
        result = assemble(self.dictionary, ["// body"], config, FIXED_NOW)

        assert "use crate::{FieldDef, FieldLocation, TagU16};" in result
        assert "use crate::{DataType, Buffer};" in result
        assert "use crate::DataField;" in result
        assert "use fefix::" not in result

    def test_notice_precedes_imports(self):
        result = assemble(self.dictionary, [], GeneratorConfig(), FIXED_NOW)

        assert result.index("DO NOT MODIFY MANUALLY") < result.index("use ")

    def test_fragments_separated_by_blank_line(self):
        result = assemble(self.dictionary, ["// a\n", "// b\n"], GeneratorConfig(), FIXED_NOW)

        assert result.endswith("// a\n\n// b\n")


class TestGenerateFields:
    def _load(self, name: str) -> Dictionary:
        return load_dictionary(str(FIXTURES / name))

    def test_one_constant_per_field(self):
        dictionary = self._load("fix44_subset.yaml")
        result = generate_fields(dictionary, GeneratorConfig(), FIXED_NOW)

        constants = re.findall(r"^pub const (\w+):", result, re.MULTILINE)
        assert len(constants) == len(dictionary.fields)
        assert "ORDER_QTY" in constants
        assert "NO_PARTY_IDS" in constants

    def test_one_enum_per_enumerated_field(self):
        dictionary = self._load("fix44_subset.yaml")
        result = generate_fields(dictionary, GeneratorConfig(), FIXED_NOW)

        enums = re.findall(r"^pub enum (\w+) \{", result, re.MULTILINE)
        assert enums == [f.name for f in dictionary.fields if f.has_enums]

    def test_messages_excluded_by_default(self):
        result = generate_fields(self._load("fix44_subset.yaml"), GeneratorConfig(), FIXED_NOW)

        assert "pub struct" not in result

    def test_messages_included_on_request(self):
        config = GeneratorConfig(include_messages=True)
        result = generate_fields(self._load("fix44_subset.yaml"), config, FIXED_NOW)

        assert "pub struct Heartbeat<'a> {" in result
        assert "pub struct NewOrderSingle<'a> {" in result
        assert "    pub check_sum: fefix::dtf::CheckSum," in result
        assert "    pub side: Side," in result
        assert "    pub settl_type: ::std::option::Option<SettlType>," in result

    def test_default_config(self):
        dictionary = Dictionary(version="FIX.4.2", fields=(Field(38, "OrderQty", DataType.QTY),))
        result = generate_fields(dictionary)

        assert "use fefix::DataField;" in result
        assert "pub const ORDER_QTY: &FieldDef<'static, rust_decimal::Decimal>" in result

    def test_fix40_order_qty_is_integer(self):
        config = GeneratorConfig(include_messages=True)
        result = generate_fields(self._load("fix40_subset.json"), config, FIXED_NOW)

        assert "pub const ORDER_QTY: &FieldDef<'static, i64>" in result
        assert "    pub order_qty: i64," in result

    def test_idempotent_apart_from_timestamp(self):
        dictionary = self._load("fix44_subset.yaml")
        config = GeneratorConfig(include_messages=True)
        first = generate_fields(dictionary, config, FIXED_NOW)
        second = generate_fields(dictionary, config, datetime(2030, 1, 1, tzinfo=timezone.utc))

        assert first != second
        assert _strip_notice_timestamp(first) == _strip_notice_timestamp(second)

    def test_import_style_changes_only_paths(self):
        dictionary = self._load("fix44_subset.yaml")
        external = generate_fields(dictionary, GeneratorConfig(include_messages=True), FIXED_NOW)
        internal = generate_fields(
            dictionary,
            GeneratorConfig(import_style=ImportStyle.INTERNAL, include_messages=True),
            FIXED_NOW,
        )

        assert internal.replace("crate::", "fefix::") == external

    @pytest.mark.parametrize("file_name", DICTIONARY_FILES)
    @pytest.mark.parametrize("import_style", list(ImportStyle))
    @pytest.mark.parametrize("expand", [False, True])
    def test_output_is_structurally_valid(self, file_name, import_style, expand):
        config = GeneratorConfig(
            import_style=import_style,
            include_messages=True,
            expand_components=expand,
            custom_derive_line="#[derive(Clone)]",
        )
        result = generate_fields(self._load(file_name), config, FIXED_NOW)

        assert check_rust_structure(result) == []
