from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Dict, Iterator, Optional, Tuple


def normalize(name: str) -> str:
    """Remove underscores and convert to uppercase for comparison."""
    return re.sub(r"[_\s]", "", name).upper()


class DataType(Enum):
    """FIX data-type categories, valued by their Rust variant spelling."""

    INT = "Int"
    LENGTH = "Length"
    TAG_NUM = "TagNum"
    DAY_OF_MONTH = "DayOfMonth"
    SEQ_NUM = "SeqNum"
    NUM_IN_GROUP = "NumInGroup"
    FLOAT = "Float"
    QTY = "Qty"
    PRICE = "Price"
    PRICE_OFFSET = "PriceOffset"
    AMT = "Amt"
    PERCENTAGE = "Percentage"
    CHAR = "Char"
    BOOLEAN = "Boolean"
    STRING = "String"
    MULTIPLE_CHAR_VALUE = "MultipleCharValue"
    MULTIPLE_STRING_VALUE = "MultipleStringValue"
    COUNTRY = "Country"
    CURRENCY = "Currency"
    EXCHANGE = "Exchange"
    MONTH_YEAR = "MonthYear"
    UTC_TIMESTAMP = "UtcTimestamp"
    UTC_TIME_ONLY = "UtcTimeOnly"
    UTC_DATE_ONLY = "UtcDateOnly"
    LOCAL_MKT_DATE = "LocalMktDate"
    TZ_TIME_ONLY = "TzTimeOnly"
    TZ_TIMESTAMP = "TzTimestamp"
    DATA = "Data"
    XML_DATA = "XmlData"
    LANGUAGE = "Language"

    @property
    def base_type(self) -> DataType:
        return _BASE_TYPES.get(self, self)

    @classmethod
    def from_fix_name(cls, name: str) -> Optional[DataType]:
        """Look up a category by its FIX dictionary name (``UTCTIMESTAMP``, ``Qty``, ...)."""
        return _BY_FIX_NAME.get(normalize(name))


_BASE_TYPES: Dict[DataType, DataType] = {
    DataType.QTY: DataType.FLOAT,
    DataType.PRICE: DataType.FLOAT,
    DataType.PRICE_OFFSET: DataType.FLOAT,
    DataType.AMT: DataType.FLOAT,
    DataType.PERCENTAGE: DataType.FLOAT,
    DataType.LENGTH: DataType.INT,
    DataType.TAG_NUM: DataType.INT,
    DataType.DAY_OF_MONTH: DataType.INT,
    DataType.SEQ_NUM: DataType.INT,
    DataType.NUM_IN_GROUP: DataType.INT,
    DataType.BOOLEAN: DataType.CHAR,
    DataType.MULTIPLE_CHAR_VALUE: DataType.STRING,
    DataType.MULTIPLE_STRING_VALUE: DataType.STRING,
    DataType.COUNTRY: DataType.STRING,
    DataType.CURRENCY: DataType.STRING,
    DataType.EXCHANGE: DataType.STRING,
    DataType.MONTH_YEAR: DataType.STRING,
    DataType.UTC_TIMESTAMP: DataType.STRING,
    DataType.UTC_TIME_ONLY: DataType.STRING,
    DataType.UTC_DATE_ONLY: DataType.STRING,
    DataType.LOCAL_MKT_DATE: DataType.STRING,
    DataType.TZ_TIME_ONLY: DataType.STRING,
    DataType.TZ_TIMESTAMP: DataType.STRING,
    DataType.LANGUAGE: DataType.STRING,
    DataType.XML_DATA: DataType.DATA,
}

_BY_FIX_NAME: Dict[str, DataType] = {normalize(dt.value): dt for dt in DataType}
# Older dictionaries spell some categories differently.
_BY_FIX_NAME.update({
    "MULTIPLEVALUESTRING": DataType.MULTIPLE_STRING_VALUE,
    "UTCDATE": DataType.UTC_DATE_ONLY,
    "DATE": DataType.UTC_DATE_ONLY,
    "TIME": DataType.UTC_TIMESTAMP,
})


@dataclass(frozen=True)
class EnumVariant:
    value: str
    description: str


@dataclass(frozen=True)
class Field:
    tag: int
    name: str
    data_type: DataType
    enums: Optional[Tuple[EnumVariant, ...]] = None

    @property
    def has_enums(self) -> bool:
        return bool(self.enums)


class LayoutItemKind(Enum):
    FIELD = auto()
    GROUP = auto()
    COMPONENT = auto()


@dataclass(frozen=True)
class Component:
    name: str
    layout: Tuple[LayoutItem, ...] = ()


@dataclass(frozen=True)
class Group:
    leader: Field
    layout: Tuple[LayoutItem, ...] = ()


@dataclass(frozen=True)
class LayoutItem:
    kind: LayoutItemKind
    required: bool
    field: Optional[Field] = None
    group: Optional[Group] = None
    component: Optional[Component] = None

    @classmethod
    def for_field(cls, f: Field, required: bool) -> LayoutItem:
        return cls(LayoutItemKind.FIELD, required, field=f)

    @classmethod
    def for_group(cls, group: Group, required: bool) -> LayoutItem:
        return cls(LayoutItemKind.GROUP, required, group=group)

    @classmethod
    def for_component(cls, component: Component, required: bool) -> LayoutItem:
        return cls(LayoutItemKind.COMPONENT, required, component=component)


@dataclass(frozen=True)
class Message:
    name: str
    msg_type: str
    layout: Tuple[LayoutItem, ...] = ()


@dataclass(frozen=True)
class Dictionary:
    """Read-only view over one FIX protocol version."""

    version: str
    fields: Tuple[Field, ...] = ()
    messages: Tuple[Message, ...] = ()
    components: Tuple[Component, ...] = ()
    _fields_by_tag: Dict[int, Field] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_fields_by_tag", {f.tag: f for f in self.fields})

    def iter_fields(self) -> Iterator[Field]:
        return iter(self.fields)

    def iter_messages(self) -> Iterator[Message]:
        return iter(self.messages)

    def iter_components(self) -> Iterator[Component]:
        return iter(self.components)

    def field_by_tag(self, tag: int) -> Optional[Field]:
        return self._fields_by_tag.get(tag)

    def field_by_name(self, name: str) -> Optional[Field]:
        for f in self.fields:
            if f.name == name:
                return f
        return None

    def message_by_msg_type(self, msg_type: str) -> Optional[Message]:
        for m in self.messages:
            if m.msg_type == msg_type:
                return m
        return None

    def component_by_name(self, name: str) -> Optional[Component]:
        for c in self.components:
            if c.name == name:
                return c
        return None
