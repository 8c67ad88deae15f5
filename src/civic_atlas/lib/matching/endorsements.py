"""Endorsement matching against resolved districts."""

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from loguru import logger

from civic_atlas.lib.districts.resolver import ResolvedDistricts
from civic_atlas.lib.matching.references import DistrictReference, InvalidReference, normalize_reference
from civic_atlas.lib.matching.roster import EndorsementConfig


@dataclass(frozen=True)
class MatchedEndorsement:
    """An endorsement that applies to the looked-up location.

    For district races the layer id is repeated as ``district_layer`` and
    ``district_type`` so consumers of either field name keep working.
    """

    race: str
    candidate: str
    party: str | None = None
    district: DistrictReference | None = None

    @property
    def district_layer(self) -> str | None:
        return self.district.layer if self.district else None

    @property
    def district_type(self) -> str | None:
        return self.district_layer

    def as_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"race": self.race, "candidate": self.candidate, "party": self.party}
        if self.district is not None:
            data["district"] = self.district.as_dict()
            data["district_layer"] = self.district_layer
            data["district_type"] = self.district_type
        return data


def match_endorsements(
    districts: ResolvedDistricts,
    endorsements: Iterable[EndorsementConfig],
) -> list[MatchedEndorsement]:
    """Select the endorsements that apply to a set of resolved districts.

    Jurisdiction-wide endorsements are always included, invalid references
    are always excluded, and district endorsements are included only when
    the resolved number for their layer equals the configured number.

    Args:
        districts: Resolved district numbers keyed by layer id.
        endorsements: Configured endorsements in display order.

    Returns:
        Matching endorsements, in input order.
    """
    matched: list[MatchedEndorsement] = []

    for endorsement in endorsements:
        reference = normalize_reference(endorsement)

        if reference is None:
            matched.append(
                MatchedEndorsement(race=endorsement.race, candidate=endorsement.candidate, party=endorsement.party)
            )
            continue

        if isinstance(reference, InvalidReference):
            logger.warning(f"Excluding endorsement {endorsement.race!r}: {reference.reason}")
            continue

        resolved = districts.get(reference.layer)
        if resolved is not None and resolved == reference.number:
            matched.append(
                MatchedEndorsement(
                    race=endorsement.race,
                    candidate=endorsement.candidate,
                    party=endorsement.party,
                    district=reference,
                )
            )

    return matched
