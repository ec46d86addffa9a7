"""Field diffs recorded while updating an issue.

A ``FieldDiffs`` is the change set of one update pass: one ``Diff`` per
changed field, keyed by the field's canonical name.  The text form is the
one stored alongside issue changelogs::

    severity=INFO|BLOCKER,assignee=emmerik

An absent old value is omitted together with its ``|``; an absent new value
is written as an empty string. Values must not contain ``,`` or ``|``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
import math
from typing import Any

_FIELD_SEPARATOR = ","
_KEY_SEPARATOR = "="
_VALUE_SEPARATOR = "|"


def values_equal(a: Any, b: Any) -> bool:
    """Value equality where two NaNs are equal."""
    if isinstance(a, float) and isinstance(b, float) and math.isnan(a) and math.isnan(b):
        return True
    return a == b


@dataclass
class Diff:
    """Old and new value of one field."""

    old_value: Any = None
    new_value: Any = None

    def to_string(self) -> str:
        new = _format_value(self.new_value)
        if self.old_value is None:
            # An absent old value is written as a bare new value.
            return new
        return f"{_format_value(self.old_value)}{_VALUE_SEPARATOR}{new}"


@dataclass
class FieldDiffs:
    """Ordered change set of one update pass."""

    user_login: str | None = None
    creation_date: datetime | None = None
    diffs: dict[str, Diff] = field(default_factory=dict)

    def get(self, field_name: str) -> Diff | None:
        return self.diffs.get(field_name)

    def set_diff(self, field_name: str, old_value: Any, new_value: Any) -> FieldDiffs:
        """Record a change of *field_name*.

        A field changed twice in the same pass keeps its first old value and
        takes the latest new value; a field changed back to its first value
        is dropped.
        """
        diff = self.diffs.get(field_name)
        if diff is None:
            self.diffs[field_name] = Diff(old_value, new_value)
        elif values_equal(diff.old_value, new_value):
            del self.diffs[field_name]
        else:
            diff.new_value = new_value
        return self

    def __contains__(self, field_name: object) -> bool:
        return field_name in self.diffs

    def __len__(self) -> int:
        return len(self.diffs)

    def to_string(self) -> str:
        return _FIELD_SEPARATOR.join(
            f"{name}{_KEY_SEPARATOR}{diff.to_string()}" for name, diff in self.diffs.items()
        )

    @classmethod
    def parse(cls, text: str | None) -> FieldDiffs:
        """Parse the text form produced by :meth:`to_string`.

        Values come back as strings; empty values come back as None.
        """
        diffs = cls()
        if not text:
            return diffs
        for segment in text.split(_FIELD_SEPARATOR):
            if not segment:
                continue
            name, sep, values = segment.partition(_KEY_SEPARATOR)
            if not sep:
                raise ValueError(f"Malformed field diff: {segment!r}")
            if _VALUE_SEPARATOR in values:
                old, _, new = values.partition(_VALUE_SEPARATOR)
            else:
                old, new = "", values
            diffs.set_diff(name, old or None, new or None)
        return diffs


def _format_value(value: Any) -> str:
    if value is None:
        return ""
    return str(value)
