"""
Phytoplankton functional group registry for Lake Kinneret.

Five fixed groups with their temperature, nutrient, light, mixing and
seasonal parameters. Profiles are immutable and built once at import.
"""

from typing import Union

from kinneret.config import BIOMASS_RANGES, GroupId
from kinneret.errors import ConfigurationError
from kinneret.models.species import SpeciesProfile

PHYTOPLANKTON_GROUPS: dict[str, SpeciesProfile] = {
    GroupId.DIATOMS.value: SpeciesProfile(
        id="diatoms",
        name="Diatoms",
        description="Silicate-dependent phytoplankton, thrive in mixing conditions",
        optimal_temp=18.0,
        temp_range=(5.0, 25.0),
        ks_p=0.1,
        ks_n=0.5,
        ks_si=2.0,
        q10=2.0,
        mixing_sensitivity=0.8,
        light_sensitivity=0.7,
        seasonal_pattern=(0.3, 0.4, 0.8, 1.0, 0.9, 0.6, 0.4, 0.3, 0.4, 0.6, 0.8, 0.5),
    ),
    GroupId.DINOFLAGELLATES.value: SpeciesProfile(
        id="dinoflagellates",
        name="Dinoflagellates",
        description="Flagellated phytoplankton, prefer stratified conditions",
        optimal_temp=22.0,
        temp_range=(10.0, 30.0),
        ks_p=0.05,
        ks_n=0.3,
        ks_si=0.0,
        q10=1.8,
        mixing_sensitivity=-0.5,
        light_sensitivity=0.9,
        seasonal_pattern=(0.2, 0.3, 0.5, 0.7, 0.8, 0.9, 1.0, 0.9, 0.7, 0.5, 0.4, 0.3),
    ),
    GroupId.SMALL_PHYTO.value: SpeciesProfile(
        id="small_phyto",
        name="Small Phytoplankton",
        description="Picoplankton and small nanoplankton, fast growing",
        optimal_temp=24.0,
        temp_range=(8.0, 32.0),
        ks_p=0.02,
        ks_n=0.1,
        ks_si=0.0,
        q10=2.2,
        mixing_sensitivity=0.3,
        light_sensitivity=0.8,
        seasonal_pattern=(0.4, 0.5, 0.7, 0.8, 0.9, 1.0, 1.0, 0.9, 0.8, 0.7, 0.6, 0.5),
    ),
    GroupId.N_FIXERS.value: SpeciesProfile(
        id="n_fixers",
        name="N-fixing Cyanobacteria",
        description="Nitrogen-fixing cyanobacteria, high temperature optima",
        optimal_temp=26.0,
        temp_range=(15.0, 35.0),
        ks_p=0.08,
        ks_n=0.0,
        ks_si=0.0,
        fixes_nitrogen=True,
        q10=2.5,
        mixing_sensitivity=-0.7,
        light_sensitivity=0.6,
        seasonal_pattern=(0.1, 0.2, 0.3, 0.5, 0.7, 0.9, 1.0, 1.0, 0.8, 0.5, 0.3, 0.2),
    ),
    GroupId.MICROCYSTIS.value: SpeciesProfile(
        id="microcystis",
        name="Microcystis",
        description="Toxic cyanobacteria, forms blooms in warm, stratified water",
        optimal_temp=28.0,
        temp_range=(18.0, 35.0),
        ks_p=0.06,
        ks_n=0.2,
        ks_si=0.0,
        q10=2.8,
        mixing_sensitivity=-0.9,
        light_sensitivity=0.5,
        seasonal_pattern=(0.05, 0.1, 0.2, 0.4, 0.6, 0.8, 1.0, 1.0, 0.7, 0.4, 0.2, 0.1),
    ),
}


def get_profile(group_id: str) -> SpeciesProfile:
    """Look up a species profile by group key. Unknown keys are an error."""
    key = group_id.value if isinstance(group_id, GroupId) else group_id
    try:
        return PHYTOPLANKTON_GROUPS[key]
    except KeyError:
        raise ConfigurationError(
            f"Unknown phytoplankton group: {group_id!r}. "
            f"Expected one of: {', '.join(PHYTOPLANKTON_GROUPS)}"
        ) from None


def resolve_profile(group: Union[SpeciesProfile, str]) -> SpeciesProfile:
    """Accept either a profile or its group key."""
    if isinstance(group, SpeciesProfile):
        return group
    return get_profile(group)


def get_biomass_range(group_id: str) -> tuple[float, float]:
    """Typical display range (mmol P/m³) for a group's biomass. Unknown keys are an error."""
    key = group_id.value if isinstance(group_id, GroupId) else group_id
    try:
        return BIOMASS_RANGES[key]
    except KeyError:
        raise ConfigurationError(
            f"Unknown phytoplankton group: {group_id!r}. "
            f"Expected one of: {', '.join(BIOMASS_RANGES)}"
        ) from None
