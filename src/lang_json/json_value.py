from __future__ import annotations
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, TypeAlias

# Values are immutable snapshots. Containers exclusively own their elements.

@dataclass(frozen=True)
class Null:
    pass

@dataclass(frozen=True)
class Bool:
    value: bool

@dataclass(frozen=True)
class Int:
    value: int

@dataclass(frozen=True)
class Float:
    value: float

@dataclass(frozen=True)
class String:
    value: str

@dataclass(frozen=True)
class Array:
    items: tuple[Value, ...]

    def __post_init__(self):
        object.__setattr__(self, 'items', tuple(self.items))

@dataclass(frozen=True)
class Object:
    """
    First occurrence wins for duplicate keys. Key order follows insertion,
    but callers should only rely on membership.
    """
    entries: Mapping[str, Value]

    def __post_init__(self):
        object.__setattr__(self, 'entries', MappingProxyType(dict(self.entries)))

    def __hash__(self):
        return hash(frozenset(self.entries.items()))

Value: TypeAlias = Null | Bool | Int | Float | String | Array | Object

def toPython(v: Value) -> None | bool | int | float | str | list | dict:
    """
    Converts a value tree into plain Python data.
    """
    match v:
        case Null():
            return None
        case Bool(b) | Int(b) | Float(b) | String(b):
            return b
        case Array(items):
            return [toPython(x) for x in items]
        case Object(entries):
            return {k: toPython(x) for k, x in entries.items()}
