"""
Tests for the phytoplankton group registry and profile validation.
"""

import pytest
from pydantic import ValidationError

from kinneret.config import GroupId
from kinneret.engine.species import (
    PHYTOPLANKTON_GROUPS,
    get_biomass_range,
    get_profile,
    resolve_profile,
)
from kinneret.errors import ConfigurationError
from kinneret.models.species import SpeciesProfile


def _profile_kwargs(**overrides):
    """Valid SpeciesProfile fields with optional overrides."""
    defaults = dict(
        id="test",
        name="Test group",
        optimal_temp=20.0,
        temp_range=(10.0, 30.0),
        ks_p=0.1,
        ks_n=0.2,
        ks_si=0.0,
        q10=2.0,
        mixing_sensitivity=0.0,
        light_sensitivity=0.5,
        seasonal_pattern=(1.0,) * 12,
    )
    defaults.update(overrides)
    return defaults


class TestRegistry:

    def test_five_groups(self):
        assert set(PHYTOPLANKTON_GROUPS) == {g.value for g in GroupId}

    def test_ids_match_keys(self):
        for key, profile in PHYTOPLANKTON_GROUPS.items():
            assert profile.id == key

    def test_temperature_windows_contain_optimum(self):
        for profile in PHYTOPLANKTON_GROUPS.values():
            t_min, t_max = profile.temp_range
            assert t_min <= profile.optimal_temp <= t_max

    def test_twelve_month_patterns(self):
        for profile in PHYTOPLANKTON_GROUPS.values():
            assert len(profile.seasonal_pattern) == 12

    def test_only_n_fixers_fix_nitrogen(self):
        fixers = [p.id for p in PHYTOPLANKTON_GROUPS.values() if p.fixes_nitrogen]
        assert fixers == ["n_fixers"]

    def test_only_diatoms_need_silicon(self):
        si_limited = [p.id for p in PHYTOPLANKTON_GROUPS.values() if p.ks_si > 0]
        assert si_limited == ["diatoms"]

    def test_diatom_parameters(self):
        d = get_profile("diatoms")
        assert d.optimal_temp == 18.0
        assert d.temp_range == (5.0, 25.0)
        assert d.ks_p == 0.1
        assert d.q10 == 2.0
        assert d.seasonal_pattern[3] == 1.0

    def test_profiles_are_frozen(self):
        with pytest.raises(ValidationError):
            get_profile("microcystis").q10 = 3.0


class TestLookup:

    def test_lookup_by_enum(self):
        assert get_profile(GroupId.N_FIXERS).id == "n_fixers"

    def test_unknown_key_raises(self):
        with pytest.raises(ConfigurationError, match="Unknown phytoplankton group"):
            get_profile("diatom")

    def test_resolve_passes_profiles_through(self):
        profile = get_profile("small_phyto")
        assert resolve_profile(profile) is profile

    def test_resolve_unknown_key_raises(self):
        with pytest.raises(ConfigurationError):
            resolve_profile("cyanobacteria")

    def test_biomass_range(self):
        assert get_biomass_range("diatoms") == (0.0, 0.08)
        assert get_biomass_range(GroupId.SMALL_PHYTO) == (0.0, 0.03)

    def test_biomass_range_unknown_key_raises(self):
        with pytest.raises(ConfigurationError, match="Unknown phytoplankton group"):
            get_biomass_range("unlisted")


class TestProfileValidation:

    def test_valid_profile(self):
        profile = SpeciesProfile(**_profile_kwargs())
        assert profile.optimal_temp == 20.0

    def test_optimum_outside_window_rejected(self):
        with pytest.raises(ValidationError, match="optimal_temp"):
            SpeciesProfile(**_profile_kwargs(optimal_temp=35.0))

    def test_negative_half_saturation_rejected(self):
        with pytest.raises(ValidationError):
            SpeciesProfile(**_profile_kwargs(ks_p=-0.1))

    def test_mixing_sensitivity_bounds(self):
        with pytest.raises(ValidationError):
            SpeciesProfile(**_profile_kwargs(mixing_sensitivity=-1.5))

    def test_light_sensitivity_bounds(self):
        with pytest.raises(ValidationError):
            SpeciesProfile(**_profile_kwargs(light_sensitivity=1.2))

    def test_pattern_length_enforced(self):
        with pytest.raises(ValidationError):
            SpeciesProfile(**_profile_kwargs(seasonal_pattern=(1.0,) * 11))

    @pytest.mark.parametrize("q10", [0.0, -1.5])
    def test_non_positive_q10_rejected(self, q10):
        with pytest.raises(ValidationError):
            SpeciesProfile(**_profile_kwargs(q10=q10))
