"""
Canonical parameter serialization for request signing
Deterministic, order preserving, one segment per parameter
"""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum, Flag
from typing import Any, Optional, Sequence, Tuple

from .errors import InvalidArgumentError

logger = logging.getLogger(__name__)

PARAM_SEPARATOR = "\n"
MAPPING_ENTRY_SEPARATOR = "="
FLAG_NAME_SEPARATOR = ", "
ENCODING = "utf-8"
INSTANT_FORMAT = "{:04d}-{:02d}-{:02d}T{:02d}:{:02d}:{:02d}Z"

MappingEntries = Tuple[Tuple[str, Optional[str]], ...]


class ParamKind(Enum):
    TEXT = "text"
    INTEGER = "integer"
    BOOLEAN = "boolean"
    SYMBOL = "symbol"
    INSTANT = "instant"
    MAPPING = "mapping"
    EMPTY = "empty"


@dataclass(frozen=True)
class Param:
    """
    One element of a parameter list.

    Build with the constructors below, or pass plain Python values to
    canonicalize() and let to_param() classify them. Direct construction is
    checked the same way: the value must suit the kind.
    """

    kind: ParamKind
    value: Any = None

    def __post_init__(self):
        if not isinstance(self.kind, ParamKind):
            raise InvalidArgumentError(f"Param kind must be a ParamKind, got {self.kind!r}")

        # Mappings are held as hashable entry tuples
        if self.kind is ParamKind.MAPPING and isinstance(self.value, Mapping):
            object.__setattr__(self, "value", tuple(self.value.items()))

        if not _value_fits(self.kind, self.value):
            raise InvalidArgumentError(
                f"{self.kind.value.capitalize()} param cannot hold a {type(self.value).__name__}"
            )

    @staticmethod
    def text(value: str) -> "Param":
        return Param(ParamKind.TEXT, value)

    @staticmethod
    def integer(value: int) -> "Param":
        return Param(ParamKind.INTEGER, value)

    @staticmethod
    def boolean(value: bool) -> "Param":
        return Param(ParamKind.BOOLEAN, value)

    @staticmethod
    def symbol(value) -> "Param":
        """Enum member, or the member name itself."""
        if isinstance(value, Enum):
            name = symbol_name(value)
            if name is None:
                raise InvalidArgumentError(f"{type(value).__name__} member has no symbolic name")
            return Param(ParamKind.SYMBOL, name)
        return Param(ParamKind.SYMBOL, value)

    @staticmethod
    def instant(value: datetime) -> "Param":
        return Param(ParamKind.INSTANT, value)

    @staticmethod
    def mapping(entries: Mapping) -> "Param":
        if not isinstance(entries, Mapping):
            raise InvalidArgumentError(f"Mapping param cannot hold a {type(entries).__name__}")
        return Param(ParamKind.MAPPING, entries)

    @staticmethod
    def empty() -> "Param":
        return Param(ParamKind.EMPTY)


def _is_entry(entry: Any) -> bool:
    return (
        isinstance(entry, tuple)
        and len(entry) == 2
        and isinstance(entry[0], str)
        and (entry[1] is None or isinstance(entry[1], str))
    )


def _value_fits(kind: ParamKind, value: Any) -> bool:
    if kind is ParamKind.TEXT or kind is ParamKind.SYMBOL:
        return isinstance(value, str)
    if kind is ParamKind.INTEGER:
        return isinstance(value, int) and not isinstance(value, bool)
    if kind is ParamKind.BOOLEAN:
        return isinstance(value, bool)
    if kind is ParamKind.INSTANT:
        return isinstance(value, datetime)
    if kind is ParamKind.MAPPING:
        return isinstance(value, tuple) and all(_is_entry(e) for e in value)
    return value is None


def _is_str_mapping(entries: Mapping) -> bool:
    # None values are allowed and render as "key="
    return all(isinstance(k, str) and (v is None or isinstance(v, str)) for k, v in entries.items())


def symbol_name(member: Enum) -> Optional[str]:
    """
    Name of an enum member.

    Flag values with no single name are spelled out as their set bits in
    ascending order, "Read, Write", or as the plain number when no named bits
    cover the value (Flag(0) is "0"). Returns None if there is no usable name.
    """
    name = member.name
    if name is not None and "|" not in name:
        return name
    if not isinstance(member, Flag) or not isinstance(member.value, int):
        return name

    value = member.value
    bits = {}
    for m in type(member).__members__.values():
        v = m.value
        if isinstance(v, int) and v > 0 and v & (v - 1) == 0 and v & value == v:
            bits.setdefault(v, m.name)

    covered = 0
    for v in bits:
        covered |= v
    if not bits or covered != value:
        return str(value)
    return FLAG_NAME_SEPARATOR.join(bits[v] for v in sorted(bits))


def to_param(value: Any) -> Param:
    """
    Classify a plain Python value as a Param.

    Values with no canonical form become EMPTY params. Such a value signs the
    same as None, so it is logged; the rendering is kept as-is because
    counterpart signers produce the same empty segment.
    """
    if isinstance(value, Param):
        return value
    if value is None:
        return Param.empty()
    # Enum first: IntEnum and StrEnum members are symbols, not numbers or text
    if isinstance(value, Enum):
        name = symbol_name(value)
        if name is not None:
            return Param(ParamKind.SYMBOL, name)
    elif isinstance(value, bool):
        return Param(ParamKind.BOOLEAN, value)
    elif isinstance(value, int):
        return Param(ParamKind.INTEGER, value)
    elif isinstance(value, str):
        return Param(ParamKind.TEXT, value)
    elif isinstance(value, datetime):
        return Param(ParamKind.INSTANT, value)
    elif isinstance(value, Mapping) and _is_str_mapping(value):
        return Param(ParamKind.MAPPING, tuple(value.items()))

    logger.warning(
        "Parameter of type %s has no canonical form and signs as an empty string",
        type(value).__name__,
    )
    return Param.empty()


def to_utc(value: datetime) -> datetime:
    """
    Convert to UTC. Naive datetimes are local time.

    Results past either end of the datetime range are clamped to
    datetime.min / datetime.max rather than raising.
    """
    try:
        return value.astimezone(timezone.utc)
    except (OverflowError, ValueError, OSError):
        offset = value.utcoffset()
        if offset is not None:
            too_late = offset < timedelta(0)
        else:
            too_late = value.year > datetime.max.year // 2
        logger.debug("Instant out of range after UTC conversion, clamped")
        return datetime.max if too_late else datetime.min


def format_instant(value: datetime) -> str:
    """Format as UTC with seconds precision."""
    utc = to_utc(value)
    return INSTANT_FORMAT.format(utc.year, utc.month, utc.day, utc.hour, utc.minute, utc.second)


def format_mapping(entries: MappingEntries) -> str:
    """Render key=value lines ordered by key (code point order)."""
    ordered = sorted(entries, key=lambda kv: kv[0])
    return PARAM_SEPARATOR.join(
        k + MAPPING_ENTRY_SEPARATOR + ("" if v is None else v) for k, v in ordered
    )


def format_param(param: Param) -> str:
    """Render a single parameter as its canonical segment."""
    kind = param.kind

    if kind is ParamKind.TEXT or kind is ParamKind.SYMBOL:
        return param.value

    if kind is ParamKind.INTEGER:
        return str(param.value)

    if kind is ParamKind.BOOLEAN:
        return "True" if param.value else "False"

    if kind is ParamKind.INSTANT:
        return format_instant(param.value)

    if kind is ParamKind.MAPPING:
        return format_mapping(param.value)

    if kind is ParamKind.EMPTY:
        return ""

    raise InvalidArgumentError(f"Unknown param kind: {kind!r}")


def canonicalize(params: Sequence[Any]) -> str:
    """
    Canonicalize an ordered list of parameters to a single string.

    Rules:
    - Strings are included as-is, even if they contain newlines
    - Integers in base 10, no leading zeros
    - Booleans as True / False, enum members by name
    - Datetimes converted to UTC as YYYY-MM-DDTHH:MM:SSZ
    - str-to-str mappings sorted by key as key=value lines
    - None and anything else as an empty string
    - Every parameter separated by a newline

    Raises InvalidArgumentError if params is None or not a list of parameters.
    """
    if params is None:
        raise InvalidArgumentError("params must not be None")
    if isinstance(params, (str, bytes, bytearray, Mapping)) or not isinstance(params, Iterable):
        raise InvalidArgumentError(f"params must be a sequence of parameters, got {type(params).__name__}")

    return PARAM_SEPARATOR.join(format_param(to_param(p)) for p in params)


def canonicalize_bytes(params: Sequence[Any]) -> bytes:
    """Canonicalize to UTF-8 bytes."""
    return canonicalize(params).encode(ENCODING)
