"""Build a Dictionary from a JSON or YAML description.

Document shape::

    version: FIX.4.4
    fields:
      - {tag: 54, name: Side, type: CHAR, values: [{value: "1", description: BUY}]}
    components:
      - name: Instrument
        layout: [{field: Symbol, required: true}]
    messages:
      - name: NewOrderSingle
        msg_type: D
        layout:
          - {field: Side, required: true}
          - {component: Instrument, required: true}
          - {group: NoPartyIDs, required: false, layout: [...]}

Components may reference components declared earlier in the list.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping, Tuple

import yaml

from fix_codegen.models import (
    Component,
    DataType,
    Dictionary,
    EnumVariant,
    Field,
    Group,
    LayoutItem,
    Message,
)

logger = logging.getLogger(__name__)


class DictionaryError(Exception):
    """Raised when a dictionary document is malformed or inconsistent."""


def load_dictionary(path: str) -> Dictionary:
    """Load a dictionary document from ``path`` (.json, .yaml or .yml)."""
    file_path = Path(path)
    text = file_path.read_text(encoding="utf-8")

    if file_path.suffix in (".yaml", ".yml"):
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise DictionaryError(f"Invalid YAML in {path}: {e}") from e
    elif file_path.suffix == ".json":
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise DictionaryError(f"Invalid JSON in {path}: {e}") from e
    else:
        raise DictionaryError(
            f"Unsupported dictionary file '{path}': expected .json, .yaml or .yml"
        )

    if not isinstance(data, Mapping):
        raise DictionaryError(f"Dictionary document {path} must be a mapping")
    return build_dictionary(data)


def build_dictionary(data: Mapping[str, Any]) -> Dictionary:
    version = _require(data, "version", "dictionary")
    fields = [_build_field(raw) for raw in _as_list(data, "fields", "dictionary")]
    fields_by_name = {f.name: f for f in fields}

    components_by_name: Dict[str, Component] = {}
    for raw in _as_list(data, "components", "dictionary"):
        name = str(_require(raw, "name", "component"))
        layout = _build_layout(
            _as_list(raw, "layout", f"component '{name}'"), fields_by_name, components_by_name, name
        )
        components_by_name[name] = Component(name=name, layout=layout)

    messages: List[Message] = []
    for raw in _as_list(data, "messages", "dictionary"):
        name = str(_require(raw, "name", "message"))
        msg_type = str(_require(raw, "msg_type", f"message '{name}'"))
        layout = _build_layout(
            _as_list(raw, "layout", f"message '{name}'"), fields_by_name, components_by_name, name
        )
        messages.append(Message(name=name, msg_type=msg_type, layout=layout))

    return Dictionary(
        version=str(version),
        fields=tuple(fields),
        messages=tuple(messages),
        components=tuple(components_by_name.values()),
    )


def _check_mapping(raw: Any, where: str) -> Mapping[str, Any]:
    if not isinstance(raw, Mapping):
        raise DictionaryError(f"Expected a mapping for {where}, got {raw!r}")
    return raw


def _require(raw: Any, key: str, where: str) -> Any:
    _check_mapping(raw, where)
    if raw.get(key) is None:
        raise DictionaryError(f"Missing '{key}' in {where}: {raw!r}")
    return raw[key]


def _as_list(raw: Mapping[str, Any], key: str, where: str) -> List[Any]:
    value = raw.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise DictionaryError(f"'{key}' in {where} must be a list, got {value!r}")
    return value


def _parse_tag(tag: Any, name: str) -> int:
    if isinstance(tag, bool):
        raise DictionaryError(f"Field '{name}' has a non-integer tag: {tag!r}")
    if isinstance(tag, float):
        if not tag.is_integer():
            raise DictionaryError(f"Field '{name}' has a non-integer tag: {tag!r}")
        return int(tag)
    try:
        return int(tag)
    except (TypeError, ValueError) as e:
        raise DictionaryError(f"Field '{name}' has a non-integer tag: {tag!r}") from e


def _build_field(raw: Any) -> Field:
    name = str(_require(raw, "name", "field"))
    tag = _parse_tag(_require(raw, "tag", f"field '{name}'"), name)

    type_name = str(_require(raw, "type", f"field '{name}'"))
    data_type = DataType.from_fix_name(type_name)
    if data_type is None:
        logger.warning("Unknown data type %r for field %s, treating as STRING", type_name, name)
        data_type = DataType.STRING

    enums = []
    for v in _as_list(raw, "values", f"field '{name}'"):
        value = str(_require(v, "value", f"variant of field '{name}'"))
        enums.append(EnumVariant(value=value, description=str(v.get("description") or value)))
    return Field(tag=tag, name=name, data_type=data_type, enums=tuple(enums) or None)


def _build_layout(
    raw_items: List[Any],
    fields_by_name: Dict[str, Field],
    components_by_name: Dict[str, Component],
    owner: str,
) -> Tuple[LayoutItem, ...]:
    items: List[LayoutItem] = []
    for raw in raw_items:
        _check_mapping(raw, f"layout item in '{owner}'")
        required = bool(raw.get("required", False))
        if "field" in raw:
            items.append(LayoutItem.for_field(_lookup_field(raw["field"], fields_by_name, owner), required))
        elif "component" in raw:
            component = components_by_name.get(str(raw["component"]))
            if component is None:
                raise DictionaryError(
                    f"Unknown component '{raw['component']}' referenced in '{owner}'"
                )
            items.append(LayoutItem.for_component(component, required))
        elif "group" in raw:
            leader = _lookup_field(raw["group"], fields_by_name, owner)
            layout = _build_layout(
                _as_list(raw, "layout", f"group '{raw['group']}'"),
                fields_by_name,
                components_by_name,
                owner,
            )
            items.append(LayoutItem.for_group(Group(leader=leader, layout=layout), required))
        else:
            raise DictionaryError(
                f"Layout item in '{owner}' must have one of field, component or group: {raw!r}"
            )
    return tuple(items)


def _lookup_field(name: Any, fields_by_name: Dict[str, Field], owner: str) -> Field:
    field = fields_by_name.get(str(name))
    if field is None:
        raise DictionaryError(f"Unknown field '{name}' referenced in '{owner}'")
    return field
