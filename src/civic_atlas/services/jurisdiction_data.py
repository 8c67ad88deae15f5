"""Process-wide jurisdiction data: boundary layers, outline, and rosters.

Everything here is static for the life of the process: it is read from the
data directory on first use and then shared read-only by every lookup.
"""

from dataclasses import dataclass, field
from pathlib import Path

from loguru import logger
from shapely.geometry.base import BaseGeometry

from civic_atlas.core.config import Settings
from civic_atlas.core.lazy import LazyValue
from civic_atlas.lib.districts import BoundaryLayer, load_jurisdiction_boundary, load_layers
from civic_atlas.lib.jurisdiction import DEFAULT_JURISDICTION, JurisdictionConfig, load_jurisdiction
from civic_atlas.lib.matching import EndorsementConfig, OfficialConfig, load_endorsements, load_officials


@dataclass
class JurisdictionData:
    """Loaded, read-only data for one jurisdiction."""

    jurisdiction: JurisdictionConfig
    layers: dict[str, BoundaryLayer]
    boundary: BaseGeometry | None = None
    officials: list[OfficialConfig] = field(default_factory=list)
    endorsements: list[EndorsementConfig] = field(default_factory=list)


def resolve_jurisdiction(settings: Settings) -> JurisdictionConfig:
    """Return the configured jurisdiction, falling back to the built-in sample pack.

    Raises:
        ValueError: If an override file is configured but malformed.
    """
    if settings.jurisdiction_config_path:
        return load_jurisdiction(Path(settings.jurisdiction_config_path))
    return DEFAULT_JURISDICTION


def load_jurisdiction_data(settings: Settings, jurisdiction: JurisdictionConfig | None = None) -> JurisdictionData:
    """Read layers, outline, and rosters from ``settings.data_dir``.

    Args:
        settings: Application settings.
        jurisdiction: Jurisdiction to load; resolved from settings when omitted.

    Returns:
        The populated JurisdictionData.
    """
    jurisdiction = jurisdiction or resolve_jurisdiction(settings)
    data_dir = Path(settings.data_dir)

    layers = load_layers(data_dir, jurisdiction.layers)
    boundary = load_jurisdiction_boundary(data_dir, jurisdiction) if settings.show_district_shapes else None
    officials = load_officials(data_dir / settings.officials_file)
    endorsements = load_endorsements(data_dir / settings.endorsements_file)

    logger.info(
        f"Jurisdiction data loaded for {jurisdiction.name}: {len(layers)} layers, "
        f"{len(officials)} officials, {len(endorsements)} endorsements"
    )
    return JurisdictionData(
        jurisdiction=jurisdiction,
        layers=layers,
        boundary=boundary,
        officials=officials,
        endorsements=endorsements,
    )


def lazy_jurisdiction_data(settings: Settings) -> LazyValue[JurisdictionData]:
    """Wrap :func:`load_jurisdiction_data` so it runs once, on first access."""
    return LazyValue(lambda: load_jurisdiction_data(settings))
