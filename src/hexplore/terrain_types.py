"""Terrain registry: the 18 terrain types and their properties."""

from enum import Enum, IntEnum

from .exceptions import UnknownTerrainError


class Category(str, Enum):
    """The two terrain categories."""

    BIOME = "Biome"
    DESERT = "Désert"


class PaletteGroup(IntEnum):
    """Shared palette group of a Biome/Desert pair, in legend order."""

    VERT = 1
    JAUNE = 2
    ORANGE = 3
    VIOLET = 4
    NOIR = 5
    ROUGE = 6
    CYAN = 7
    BLEU = 8
    ROSE = 9


class TerrainType(str, Enum):
    """Terrain types with category and palette group properties."""

    # Biomes
    FORET = "foret"
    JUNGLE = "jungle"
    PLAINE = "plaine"
    MARAIS = "marais"
    MONT = "mont"
    SABLE = "sable"
    RIVIERE = "riviere"
    LAC = "lac"
    OASIS = "oasis"
    # Deserts
    FORET_PETRIFIEE = "foret_petrifiee"
    TERRES_FONGALES = "terres_fongales"
    CITE_FANTOME = "cite_fantome"
    TOURBIERE_ASSECHEE = "tourbiere_assechee"
    MONT_NOIR = "mont_noir"
    SALINIERE = "saliniere"
    CANYON_PLAT = "canyon_plat"
    MER_D_OMBRE = "mer_d_ombre"
    NUAGE_TOXIQUE = "nuage_toxique"

    @property
    def label(self) -> str:
        """Display name."""
        return _PROPERTIES[self][0]

    @property
    def category(self) -> Category:
        """Biome or Desert."""
        return _PROPERTIES[self][1]

    @property
    def palette_group(self) -> PaletteGroup:
        """Palette group shared with the paired type."""
        return _PROPERTIES[self][2]

    @property
    def is_biome(self) -> bool:
        return self.category is Category.BIOME

    @property
    def river_passable(self) -> bool:
        """Whether a river may flow through this terrain."""
        return self in _RIVER_PASSABLE_TYPES

    @property
    def is_mountain(self) -> bool:
        """Whether this terrain is tall enough to be seen from afar."""
        return self in _MOUNTAIN_TYPES

    def paired(self) -> "TerrainType":
        """The type of the other category sharing this palette group."""
        return _PAIRS[self]

    @classmethod
    def from_id(cls, identifier: str) -> "TerrainType":
        """Look up a terrain type by identifier.

        Raises:
            UnknownTerrainError: If identifier is not registered.
        """
        try:
            return cls(identifier)
        except ValueError:
            raise UnknownTerrainError(f"Unknown terrain type: {identifier!r}") from None


# Type -> (label, category, palette group)
_PROPERTIES: dict[TerrainType, tuple[str, Category, PaletteGroup]] = {
    TerrainType.FORET: ("Forêt", Category.BIOME, PaletteGroup.VERT),
    TerrainType.JUNGLE: ("Jungle", Category.BIOME, PaletteGroup.JAUNE),
    TerrainType.PLAINE: ("Plaine", Category.BIOME, PaletteGroup.ORANGE),
    TerrainType.MARAIS: ("Marais", Category.BIOME, PaletteGroup.VIOLET),
    TerrainType.MONT: ("Mont", Category.BIOME, PaletteGroup.NOIR),
    TerrainType.SABLE: ("Sable", Category.BIOME, PaletteGroup.ROUGE),
    TerrainType.RIVIERE: ("Rivière", Category.BIOME, PaletteGroup.CYAN),
    TerrainType.LAC: ("Lac", Category.BIOME, PaletteGroup.BLEU),
    TerrainType.OASIS: ("Oasis", Category.BIOME, PaletteGroup.ROSE),
    TerrainType.FORET_PETRIFIEE: ("Forêt Pétrifiée", Category.DESERT, PaletteGroup.VERT),
    TerrainType.TERRES_FONGALES: ("Terres Fongales", Category.DESERT, PaletteGroup.JAUNE),
    TerrainType.CITE_FANTOME: ("Cité Fantôme", Category.DESERT, PaletteGroup.ORANGE),
    TerrainType.TOURBIERE_ASSECHEE: ("Tourbière Asséchée", Category.DESERT, PaletteGroup.VIOLET),
    TerrainType.MONT_NOIR: ("Mont Noir", Category.DESERT, PaletteGroup.NOIR),
    TerrainType.SALINIERE: ("Salinière", Category.DESERT, PaletteGroup.ROUGE),
    TerrainType.CANYON_PLAT: ("Canyon Plat", Category.DESERT, PaletteGroup.CYAN),
    TerrainType.MER_D_OMBRE: ("Mer d'ombre", Category.DESERT, PaletteGroup.BLEU),
    TerrainType.NUAGE_TOXIQUE: ("Nuage Toxique", Category.DESERT, PaletteGroup.ROSE),
}

# Registry order within each category
TYPES_BY_CATEGORY: dict[Category, tuple[TerrainType, ...]] = {
    category: tuple(t for t in TerrainType if _PROPERTIES[t][1] is category)
    for category in Category
}

_PAIRS: dict[TerrainType, TerrainType] = {}
for _biome, _desert in zip(
    TYPES_BY_CATEGORY[Category.BIOME], TYPES_BY_CATEGORY[Category.DESERT]
):
    _PAIRS[_biome] = _desert
    _PAIRS[_desert] = _biome

# Rivers flow through these; MER_D_OMBRE is also where they end
_RIVER_PASSABLE_TYPES = frozenset({
    TerrainType.RIVIERE,
    TerrainType.LAC,
    TerrainType.CANYON_PLAT,
    TerrainType.MER_D_OMBRE,
})

RIVER_TERMINAL_TYPE = TerrainType.MER_D_OMBRE

_MOUNTAIN_TYPES = frozenset({
    TerrainType.MONT,
    TerrainType.MONT_NOIR,
})
