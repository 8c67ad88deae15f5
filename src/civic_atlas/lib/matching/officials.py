"""Slot-based matching of elected officials to resolved districts.

Every configured office slot yields exactly one row, in slot order. Rows for
offices with no official on file are placeholders carrying a note that
explains why the name is missing.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from loguru import logger

from civic_atlas.lib.districts.resolver import ResolvedDistricts
from civic_atlas.lib.districts.shapes import STATEWIDE_SHAPE_KEY
from civic_atlas.lib.jurisdiction import OfficeSlot
from civic_atlas.lib.matching.references import (
    DistrictReference,
    InvalidReference,
    NormalizedReference,
    normalize_reference,
)
from civic_atlas.lib.matching.roster import OfficialConfig

NOTE_NOT_CONFIGURED = "No official is configured for this office yet."
NOTE_DISTRICT_UNRESOLVED = "Could not determine the district for this address."
NOTE_CONFIG_ERROR = "This office is misconfigured (it must be statewide or bound to one district layer)."


class MatchStatus(StrEnum):
    """Outcome of matching one office slot."""

    MATCHED = "matched"
    NOT_CONFIGURED = "not_configured"
    DISTRICT_UNRESOLVED = "district_unresolved"
    CONFIG_ERROR = "config_error"


@dataclass(frozen=True)
class MatchedOfficial:
    """One output row per office slot."""

    office_id: str
    office_label: str
    status: MatchStatus
    name: str | None = None
    party: str | None = None
    url: str | None = None
    phone: str | None = None
    district: DistrictReference | None = None
    shape_key: str | None = None
    note: str | None = None

    def as_dict(self) -> dict[str, Any]:
        return {
            "office_id": self.office_id,
            "office_label": self.office_label,
            "name": self.name,
            "party": self.party,
            "url": self.url,
            "phone": self.phone,
            "district": self.district.as_dict() if self.district else None,
            "shape_key": self.shape_key,
            "note": self.note,
            "status": self.status.value,
        }


def _find_official(
    slot: OfficeSlot,
    roster: Sequence[tuple[OfficialConfig, NormalizedReference]],
    reference: DistrictReference | None,
) -> OfficialConfig | None:
    """Return the first official for the slot whose reference equals ``reference``."""
    for official, official_reference in roster:
        if official.office_id != slot.office_id:
            continue
        if official_reference == reference:
            return official
    return None


def _from_official(
    slot: OfficeSlot,
    official: OfficialConfig,
    reference: DistrictReference | None,
    shape_key: str,
) -> MatchedOfficial:
    return MatchedOfficial(
        office_id=slot.office_id,
        office_label=slot.office_label,
        status=MatchStatus.MATCHED,
        name=official.name,
        party=official.party,
        url=official.url,
        phone=official.phone,
        district=reference,
        shape_key=shape_key,
    )


def _placeholder(
    slot: OfficeSlot,
    status: MatchStatus,
    note: str,
    reference: DistrictReference | None = None,
    shape_key: str | None = None,
) -> MatchedOfficial:
    return MatchedOfficial(
        office_id=slot.office_id,
        office_label=slot.office_label,
        status=status,
        district=reference,
        shape_key=shape_key,
        note=note,
    )


def match_official_slot(
    districts: ResolvedDistricts,
    roster: Sequence[tuple[OfficialConfig, NormalizedReference]],
    slot: OfficeSlot,
) -> MatchedOfficial:
    """Match a single office slot.

    Args:
        districts: Resolved district numbers keyed by layer id.
        roster: Officials paired with their normalized references.
        slot: The office slot to fill.

    Returns:
        The populated row, or a placeholder row.
    """
    if slot.is_statewide:
        official = _find_official(slot, roster, None)
        if official is None:
            return _placeholder(slot, MatchStatus.NOT_CONFIGURED, NOTE_NOT_CONFIGURED, shape_key=STATEWIDE_SHAPE_KEY)
        return _from_official(slot, official, None, STATEWIDE_SHAPE_KEY)

    if not slot.is_layer_bound or slot.layer not in districts:
        logger.warning(f"Office slot {slot.office_id!r} is misconfigured (layer={slot.layer!r})")
        return _placeholder(slot, MatchStatus.CONFIG_ERROR, NOTE_CONFIG_ERROR)

    layer = slot.layer
    number = districts[layer]
    if number is None:
        return _placeholder(slot, MatchStatus.DISTRICT_UNRESOLVED, NOTE_DISTRICT_UNRESOLVED)

    reference = DistrictReference(layer=layer, number=number)
    official = _find_official(slot, roster, reference)
    if official is None:
        return _placeholder(slot, MatchStatus.NOT_CONFIGURED, NOTE_NOT_CONFIGURED, reference, shape_key=layer)
    return _from_official(slot, official, reference, layer)


def match_officials(
    districts: ResolvedDistricts,
    officials: Iterable[OfficialConfig],
    slots: Iterable[OfficeSlot],
) -> list[MatchedOfficial]:
    """Build one official row per configured office slot.

    Officials with an invalid district reference are excluded before
    matching. When several officials match the same slot, the first in
    stored order wins.

    Args:
        districts: Resolved district numbers keyed by layer id.
        officials: Configured officials in stored order.
        slots: Configured office slots in display order.

    Returns:
        Exactly one MatchedOfficial per slot, in slot order.
    """
    roster: list[tuple[OfficialConfig, NormalizedReference]] = []
    for official in officials:
        reference = normalize_reference(official)
        if isinstance(reference, InvalidReference):
            logger.warning(f"Excluding official {official.name!r} ({official.office_id}): {reference.reason}")
            continue
        roster.append((official, reference))

    return [match_official_slot(districts, roster, slot) for slot in slots]
