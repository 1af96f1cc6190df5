"""Tests for the terrain registry."""

import pytest

from hexplore.exceptions import UnknownTerrainError
from hexplore.terrain_types import (
    TYPES_BY_CATEGORY,
    Category,
    PaletteGroup,
    TerrainType,
)


class TestRegistry:
    """Test catalogue shape."""

    def test_eighteen_types(self):
        """Registry holds 18 types."""
        assert len(TerrainType) == 18

    def test_nine_per_category(self):
        """Nine types per category."""
        assert len(TYPES_BY_CATEGORY[Category.BIOME]) == 9
        assert len(TYPES_BY_CATEGORY[Category.DESERT]) == 9

    def test_values_are_identifiers(self):
        """Enum values are the identifiers."""
        assert TerrainType.FORET.value == "foret"
        assert TerrainType.MER_D_OMBRE.value == "mer_d_ombre"

    def test_labels(self):
        """Labels keep their accents."""
        assert TerrainType.FORET.label == "Forêt"
        assert TerrainType.CITE_FANTOME.label == "Cité Fantôme"
        assert TerrainType.MER_D_OMBRE.label == "Mer d'ombre"

    def test_from_id(self):
        """Lookup by identifier."""
        assert TerrainType.from_id("canyon_plat") is TerrainType.CANYON_PLAT

    def test_from_id_unknown(self):
        """Unknown identifiers raise UnknownTerrainError."""
        with pytest.raises(UnknownTerrainError):
            TerrainType.from_id("volcan")


class TestPairing:
    """Test Biome/Desert pairing by palette group."""

    def test_pairs_are_symmetric(self):
        """Pairing is symmetric."""
        for terrain in TerrainType:
            assert terrain.paired().paired() is terrain

    def test_pairs_cross_categories(self):
        """Each pair joins a biome and a desert."""
        for terrain in TerrainType:
            assert terrain.paired().category is not terrain.category

    def test_pairs_share_palette_group(self):
        """Pairs share a palette group."""
        for terrain in TerrainType:
            assert terrain.paired().palette_group is terrain.palette_group

    def test_each_group_has_one_pair(self):
        """Every palette group holds exactly one pair."""
        for group in PaletteGroup:
            members = [t for t in TerrainType if t.palette_group is group]
            assert len(members) == 2

    @pytest.mark.parametrize(
        "biome,desert",
        [
            (TerrainType.FORET, TerrainType.FORET_PETRIFIEE),
            (TerrainType.MONT, TerrainType.MONT_NOIR),
            (TerrainType.RIVIERE, TerrainType.CANYON_PLAT),
            (TerrainType.LAC, TerrainType.MER_D_OMBRE),
            (TerrainType.OASIS, TerrainType.NUAGE_TOXIQUE),
        ],
    )
    def test_known_pairs(self, biome: TerrainType, desert: TerrainType):
        """Documented pairs match."""
        assert biome.paired() is desert


class TestProperties:
    """Test derived terrain flags."""

    def test_river_passable(self):
        """Only water and flat canyon carry rivers."""
        passable = {t for t in TerrainType if t.river_passable}
        assert passable == {
            TerrainType.RIVIERE,
            TerrainType.LAC,
            TerrainType.CANYON_PLAT,
            TerrainType.MER_D_OMBRE,
        }

    def test_mountains(self):
        """Mont and mont noir are mountains."""
        mountains = {t for t in TerrainType if t.is_mountain}
        assert mountains == {TerrainType.MONT, TerrainType.MONT_NOIR}

    def test_is_biome(self):
        """is_biome follows the category."""
        assert TerrainType.OASIS.is_biome
        assert not TerrainType.SALINIERE.is_biome
