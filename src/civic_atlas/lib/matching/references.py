"""District reference normalization.

Roster records name their district either with a nested ``district:
{layer, number}`` mapping or with the legacy flat fields. Normalization
produces one of three outcomes:

- ``DistrictReference``: a usable ``(layer, number)`` pair.
- ``InvalidReference``: the record tried to name a district but the
  reference is malformed. Such records are excluded from matching.
- ``None``: the record has no reference at all and applies
  jurisdiction-wide.

The nested form always wins when present, even if legacy fields disagree.
"""

import math
from collections.abc import Collection
from dataclasses import dataclass
from typing import Any

from civic_atlas.lib.matching.roster import UNSET, RosterEntry


@dataclass(frozen=True)
class DistrictReference:
    """A (layer, number) pair identifying one district within a layer."""

    layer: str
    number: int | float

    def as_dict(self) -> dict[str, Any]:
        return {"layer": self.layer, "number": self.number}


@dataclass(frozen=True)
class InvalidReference:
    """A district reference that is present but malformed."""

    reason: str


NormalizedReference = DistrictReference | InvalidReference | None


def coerce_district_number(value: Any) -> int | float | None:
    """Coerce a configured district number to a finite value.

    Integers and integral floats/strings return ``int``; other finite
    numbers return ``float``. Booleans, None, blank strings, and anything
    non-numeric or non-finite return None.
    """
    if value is None or value is UNSET or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        number = value
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    else:
        return None

    if not math.isfinite(number):
        return None
    return int(number) if number.is_integer() else number


def _validate(layer: Any, number: Any, known_layers: Collection[str] | None, form: str) -> NormalizedReference:
    if not isinstance(layer, str) or not layer.strip():
        return InvalidReference(f"{form} reference has an empty or non-string layer")

    layer = layer.strip()
    if known_layers is not None and layer not in known_layers:
        return InvalidReference(f"{form} reference names unknown layer {layer!r}")

    coerced = coerce_district_number(number)
    if coerced is None:
        return InvalidReference(f"{form} reference for layer {layer!r} has a non-numeric number {number!r}")

    return DistrictReference(layer=layer, number=coerced)


def normalize_reference(
    entry: RosterEntry | DistrictReference,
    known_layers: Collection[str] | None = None,
) -> NormalizedReference:
    """Normalize a roster record's district reference.

    Args:
        entry: Roster record, or an already-canonical reference.
        known_layers: Configured layer ids. When given, a reference to any
            other layer is invalid.

    Returns:
        DistrictReference, InvalidReference, or None (jurisdiction-wide).
    """
    if isinstance(entry, DistrictReference):
        return _validate(entry.layer, entry.number, known_layers, "canonical")

    if entry.has_modern_reference:
        district = entry.district
        if isinstance(district, DistrictReference):
            return _validate(district.layer, district.number, known_layers, "district")
        if not isinstance(district, dict):
            return InvalidReference(f"district reference must be a mapping, got {district!r}")
        return _validate(district.get("layer"), district.get("number"), known_layers, "district")

    if entry.has_legacy_reference:
        layer = entry.district_layer
        if layer is UNSET or not layer:
            layer = entry.district_type
        if layer is UNSET:
            layer = None
        return _validate(layer, entry.district_number, known_layers, "legacy")

    return None
