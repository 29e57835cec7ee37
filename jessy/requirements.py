"""Security requirements of a letter."""

from __future__ import annotations

from enum import IntEnum
from typing import Iterable, Iterator, Optional


class Attribute(IntEnum):
    """A security property."""

    CONFIDENTIALITY = 0
    INTEGRITY = 1
    RECIPIENT_AUTHENTICATION = 2
    SENDER_AUTHENTICATION = 3


_NAMES = {
    Attribute.CONFIDENTIALITY: "Confidentiality",
    Attribute.INTEGRITY: "Integrity",
    Attribute.RECIPIENT_AUTHENTICATION: "RecipientAuthentication",
    Attribute.SENDER_AUTHENTICATION: "SenderAuthentication",
}

_LETTERS = {
    Attribute.CONFIDENTIALITY: "C",
    Attribute.INTEGRITY: "I",
    Attribute.RECIPIENT_AUTHENTICATION: "R",
    Attribute.SENDER_AUTHENTICATION: "S",
}
_BY_LETTER = {letter: attr for attr, letter in _LETTERS.items()}


class MissingRequirementsError(ValueError):
    """Raised when required security properties are missing."""

    def __init__(self, missing: Requirements) -> None:
        super().__init__(f"missing security requirements: {missing}")
        self.missing = missing


class Requirements:
    """An ordered set of security properties."""

    def __init__(self, attributes: Optional[Iterable[Attribute]] = None) -> None:
        self._all: list[Attribute] = []
        for attribute in attributes or ():
            self.add(attribute)

    def __iter__(self) -> Iterator[Attribute]:
        return iter(self._all)

    def __contains__(self, attribute: object) -> bool:
        return attribute in self._all

    def __repr__(self) -> str:
        return f"Requirements({self.short_string()!r})"

    def empty(self) -> bool:
        """Return whether no properties are set."""
        return not self._all

    def has(self, attribute: Attribute) -> bool:
        """Return whether the property is set."""
        return attribute in self._all

    def add(self, attribute: Attribute) -> Requirements:
        """Add a property and return self."""
        if not self.has(attribute):
            self._all.append(Attribute(attribute))
        return self

    def remove(self, attribute: Attribute) -> Requirements:
        """Remove a property and return self."""
        if attribute in self._all:
            self._all.remove(attribute)
        return self

    def check_compliance_to(self, requirement: Requirements) -> None:
        """Raise MissingRequirementsError if any required property is absent."""
        missing = Requirements(attr for attr in requirement if not self.has(attr))
        if not missing.empty():
            raise MissingRequirementsError(missing)

    def __str__(self) -> str:
        return ", ".join(_NAMES[attr] for attr in self._all)

    def short_string(self) -> str:
        """Return the set properties as letters in canonical order."""
        return "".join(_LETTERS[attr] for attr in Attribute if self.has(attr))

    def serialize_to_no_spec(self) -> str:
        """Return the missing properties as letters in canonical order."""
        return "".join(_LETTERS[attr] for attr in Attribute if not self.has(attr))


def new_requirements() -> Requirements:
    """Return requirements holding all properties."""
    return Requirements(Attribute)


def parse_requirements_from_no_spec(no: str) -> Requirements:
    """Parse requirements from the letters of the properties to leave out."""
    requirements = new_requirements()
    for letter in no:
        try:
            requirements.remove(_BY_LETTER[letter])
        except KeyError:
            raise ValueError(f"unknown attribute identifier: {letter}") from None
    return requirements