"""
Biomass response model for phytoplankton functional groups.

Growth potential is the product of independent limitation terms (a
multiplicative reading of Liebig's law):

    R = f_T × f_P × f_N × f_Si × f_light × f_mix × f_season

    f_T      Q10 kinetics inside a triangular temperature window
    f_P/N/Si Michaelis-Menten  C / (C + Ks)
    f_light  light × s_L + (1 - s_L)
    f_mix    1 + s_M × min(1, wind² / depth / 10)
    f_season seasonal_pattern[month - 1]

Only the final product is clamped to ≥ 0; individual terms are not.
"""

from typing import Union

from kinneret.engine.numerics import mixing_index, q10_response, saturating_response
from kinneret.engine.species import resolve_profile
from kinneret.models.environment import EnvironmentalConditions
from kinneret.models.species import SpeciesProfile


def response_terms(
    group: Union[SpeciesProfile, str],
    env: EnvironmentalConditions,
) -> dict[str, float]:
    """Return each limitation term of the response model, keyed by name."""
    profile = resolve_profile(group)

    temperature = q10_response(
        env.temperature, profile.optimal_temp, profile.q10, profile.temp_range
    )

    phosphorus = saturating_response(env.phosphorus, profile.ks_p)
    if profile.fixes_nitrogen:
        nitrogen = 1.0
    else:
        nitrogen = saturating_response(env.nitrogen, profile.ks_n)
    if profile.ks_si > 0:
        silicon = saturating_response(env.silicon, profile.ks_si)
    else:
        silicon = 1.0

    light = env.light * profile.light_sensitivity + (1.0 - profile.light_sensitivity)

    # Negative sensitivity reduces growth; no clamp here, only on the product
    mixing = 1.0 + profile.mixing_sensitivity * mixing_index(env.wind_speed, env.depth)

    if 1 <= env.month <= len(profile.seasonal_pattern):
        seasonal = profile.seasonal_pattern[env.month - 1]
    else:
        seasonal = 1.0

    return {
        "temperature": temperature,
        "phosphorus": phosphorus,
        "nitrogen": nitrogen,
        "silicon": silicon,
        "light": light,
        "mixing": mixing,
        "seasonal": seasonal,
    }


def compute_response(
    group: Union[SpeciesProfile, str],
    env: EnvironmentalConditions,
) -> float:
    """
    Biomass response of a phytoplankton group to environmental conditions.

    Args:
        group: SpeciesProfile, or a group key such as "diatoms".
        env: Environmental conditions at the point.

    Returns:
        Non-negative response in mmol P/m³-equivalent units.

    Raises:
        ConfigurationError: if a group key is unknown.
    """
    response = 1.0
    for term in response_terms(group, env).values():
        response *= term
    return max(0.0, response)
