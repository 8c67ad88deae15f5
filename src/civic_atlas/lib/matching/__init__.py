"""Matching library: roster records, district reference normalization, and matchers.

Public API:
    - OfficialConfig / EndorsementConfig: Roster records
    - load_officials / load_endorsements: YAML roster loaders
    - DistrictReference / InvalidReference: Normalized reference outcomes
    - normalize_reference: Modern/legacy reference reconciliation
    - match_endorsements: Endorsements applicable to resolved districts
    - match_officials: One row per office slot
    - MatchedEndorsement / MatchedOfficial / MatchStatus: Match results
"""

from civic_atlas.lib.matching.endorsements import MatchedEndorsement, match_endorsements
from civic_atlas.lib.matching.officials import MatchedOfficial, MatchStatus, match_official_slot, match_officials
from civic_atlas.lib.matching.references import (
    DistrictReference,
    InvalidReference,
    NormalizedReference,
    coerce_district_number,
    normalize_reference,
)
from civic_atlas.lib.matching.roster import (
    UNSET,
    EndorsementConfig,
    OfficialConfig,
    RosterEntry,
    load_endorsements,
    load_officials,
)

__all__ = [
    "UNSET",
    "DistrictReference",
    "EndorsementConfig",
    "InvalidReference",
    "MatchStatus",
    "MatchedEndorsement",
    "MatchedOfficial",
    "NormalizedReference",
    "OfficialConfig",
    "RosterEntry",
    "coerce_district_number",
    "load_endorsements",
    "load_officials",
    "match_endorsements",
    "match_official_slot",
    "match_officials",
    "normalize_reference",
]
