"""Roster records: configured officials and endorsements, loaded from YAML."""

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Final

import yaml
from loguru import logger


class _Unset(Enum):
    UNSET = "UNSET"

    def __repr__(self) -> str:
        return "UNSET"


UNSET: Final = _Unset.UNSET
"""Marks a reference field that was absent from the source record (distinct from null)."""

_REFERENCE_FIELDS = ("district", "district_layer", "district_type", "district_number")


def _reference_fields(data: Mapping[str, Any]) -> dict[str, Any]:
    return {name: data[name] for name in _REFERENCE_FIELDS if name in data}


def _optional_str(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


@dataclass(frozen=True, kw_only=True)
class RosterEntry:
    """District reference fields shared by every roster record.

    ``district`` is the nested ``{layer, number}`` reference. The flat
    ``district_layer`` / ``district_type`` / ``district_number`` fields are
    the legacy spelling. Any field left as ``UNSET`` was not in the record.
    """

    district: Any = UNSET
    district_layer: Any = UNSET
    district_type: Any = UNSET
    district_number: Any = UNSET

    @property
    def has_modern_reference(self) -> bool:
        return self.district is not UNSET

    @property
    def has_legacy_reference(self) -> bool:
        return any(
            value is not UNSET for value in (self.district_layer, self.district_type, self.district_number)
        )


@dataclass(frozen=True, kw_only=True)
class OfficialConfig(RosterEntry):
    """An elected official on file for one office."""

    office_id: str
    name: str
    party: str | None = None
    url: str | None = None
    phone: str | None = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "OfficialConfig":
        """Build an OfficialConfig from a parsed YAML record.

        Raises:
            ValueError: If ``office_id`` or ``name`` is missing.
        """
        office_id = _optional_str(data.get("office_id"))
        name = _optional_str(data.get("name"))
        if office_id is None or name is None:
            msg = f"Official record requires 'office_id' and 'name': {dict(data)!r}"
            raise ValueError(msg)
        return cls(
            office_id=office_id,
            name=name,
            party=_optional_str(data.get("party")),
            url=_optional_str(data.get("url")),
            phone=_optional_str(data.get("phone")),
            **_reference_fields(data),
        )


@dataclass(frozen=True, kw_only=True)
class EndorsementConfig(RosterEntry):
    """An endorsed candidate in one race."""

    race: str
    candidate: str
    party: str | None = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "EndorsementConfig":
        """Build an EndorsementConfig from a parsed YAML record.

        Raises:
            ValueError: If ``race`` or ``candidate`` is missing.
        """
        race = _optional_str(data.get("race"))
        candidate = _optional_str(data.get("candidate"))
        if race is None or candidate is None:
            msg = f"Endorsement record requires 'race' and 'candidate': {dict(data)!r}"
            raise ValueError(msg)
        return cls(
            race=race,
            candidate=candidate,
            party=_optional_str(data.get("party")),
            **_reference_fields(data),
        )


def _read_records(file_path: Path, key: str) -> list[Mapping[str, Any]]:
    if not file_path.exists():
        logger.warning(f"Roster file not found: {file_path}")
        return []

    with file_path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if data is None:
        return []
    if not isinstance(data, dict):
        msg = f"Roster file must be a mapping with a {key!r} list: {file_path}"
        raise ValueError(msg)

    records = data.get(key) or []
    if not isinstance(records, list):
        msg = f"Roster key {key!r} must be a list: {file_path}"
        raise ValueError(msg)

    rows: list[Mapping[str, Any]] = []
    for i, record in enumerate(records):
        if not isinstance(record, dict):
            logger.warning(f"{file_path}: skipping {key} entry {i}, expected a mapping")
            continue
        rows.append(record)
    return rows


def load_officials(file_path: Path) -> list[OfficialConfig]:
    """Load officials from a YAML file with a top-level ``officials`` list.

    Records missing required fields are logged and skipped.

    Args:
        file_path: Path to the officials YAML file.

    Returns:
        Officials in stored order; empty if the file does not exist.

    Raises:
        ValueError: If the file's top-level structure is malformed.
    """
    officials: list[OfficialConfig] = []
    for record in _read_records(file_path, "officials"):
        try:
            officials.append(OfficialConfig.from_mapping(record))
        except ValueError as e:
            logger.warning(f"Skipping official record: {e}")
    logger.info(f"Loaded {len(officials)} officials")
    return officials


def load_endorsements(file_path: Path) -> list[EndorsementConfig]:
    """Load endorsements from a YAML file with a top-level ``endorsements`` list.

    Args:
        file_path: Path to the endorsements YAML file.

    Returns:
        Endorsements in stored order; empty if the file does not exist.

    Raises:
        ValueError: If the file's top-level structure is malformed.
    """
    endorsements: list[EndorsementConfig] = []
    for record in _read_records(file_path, "endorsements"):
        try:
            endorsements.append(EndorsementConfig.from_mapping(record))
        except ValueError as e:
            logger.warning(f"Skipping endorsement record: {e}")
    logger.info(f"Loaded {len(endorsements)} endorsements")
    return endorsements
