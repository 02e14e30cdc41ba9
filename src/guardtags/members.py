"""Member identities and flags shared across discovery layers."""

from __future__ import annotations

import enum
from dataclasses import dataclass

from .tags import GuardTag


class MemberKind(str, enum.Enum):
    FUNCTION = "function"
    METHOD = "method"
    STATICMETHOD = "staticmethod"
    CLASSMETHOD = "classmethod"
    PROPERTY = "property"
    OVERLOAD = "overload"


class Visibility(str, enum.Enum):
    PUBLIC = "public"
    NONPUBLIC = "nonpublic"


class MemberFlags(enum.Flag):
    NONE = 0
    STATIC = enum.auto()
    VIRTUAL = enum.auto()
    SPECIAL = enum.auto()
    INHERITED = enum.auto()
    EXCLUDED = enum.auto()
    DEPRECATED = enum.auto()


@dataclass(frozen=True, slots=True, order=True)
class MemberRef:
    """Identity of one callable member: declaring owner plus signature."""

    owner: str
    name: str
    signature: str
    kind: MemberKind = MemberKind.FUNCTION

    @property
    def qualified_name(self) -> str:
        return f"{self.owner}.{self.name}"

    def __str__(self) -> str:
        return f"{self.qualified_name}{self.signature}"


@dataclass(frozen=True, slots=True)
class TaggedMember:
    member: MemberRef
    tag: GuardTag
