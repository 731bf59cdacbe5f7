"""Immutable markup fragments whose serialized form is fixed when they are made.

Each fragment writes its markup verbatim, without escaping. ``size()``
gives the length of that markup in UTF-8 bytes.
"""

from __future__ import annotations

from dataclasses import dataclass

from .node import Attribute


class _Fragment:
    """Shared behaviour of fixed fragments."""

    def serialize(self) -> str:
        raise NotImplementedError

    def size(self) -> int:
        """Length of the serialized markup in UTF-8 bytes."""
        return len(self.serialize().encode("utf-8"))

    def __str__(self) -> str:
        return self.serialize()


@dataclass(frozen=True)
class StaticAttribute(_Fragment):
    """An attribute written as `` name="value"``."""

    name: str
    value: str

    def size(self) -> int:
        return super().size()

    def serialize(self) -> str:
        return f' {self.name}="{self.value}"'

    def to_attribute(self) -> Attribute:
        """Build a mutable attribute for use on a node."""
        return Attribute(self.name, self.value)


@dataclass(frozen=True)
class StaticText(_Fragment):
    """Character data written exactly as given."""

    text: str

    def size(self) -> int:
        return super().size()

    def serialize(self) -> str:
        return self.text


@dataclass(frozen=True)
class StaticComment(_Fragment):
    """A comment written as ``<!--text-->``."""

    text: str

    def size(self) -> int:
        return super().size()

    def serialize(self) -> str:
        return f"<!--{self.text}-->"


@dataclass(frozen=True)
class StaticCData(_Fragment):
    """A CDATA section written as ``<![CDATA[text]]>``."""

    text: str

    def size(self) -> int:
        return super().size()

    def serialize(self) -> str:
        return f"<![CDATA[{self.text}]]>"


@dataclass(frozen=True)
class StaticDoctype(_Fragment):
    """A document type declaration written as ``<!DOCTYPE text>``."""

    text: str

    def size(self) -> int:
        return super().size()

    def serialize(self) -> str:
        return f"<!DOCTYPE {self.text}>"


@dataclass(frozen=True)
class StaticProcessingInstruction(_Fragment):
    """A processing instruction written as ``<?target instruction?>``."""

    target: str
    instruction: str

    def size(self) -> int:
        return super().size()

    def serialize(self) -> str:
        return f"<?{self.target} {self.instruction}?>"


@dataclass(frozen=True)
class StaticXmlDeclaration(_Fragment):
    """An XML declaration with version, encoding and standalone pseudo-attributes."""

    version: str
    encoding: str
    standalone: str

    def size(self) -> int:
        return super().size()

    def serialize(self) -> str:
        return (
            f'<?xml version="{self.version}" encoding="{self.encoding}" '
            f'standalone="{self.standalone}"?>'
        )