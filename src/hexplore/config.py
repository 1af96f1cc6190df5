"""Explorer configuration: difficulty profiles and TOML loading."""

import tomllib
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError, field_validator

from .exceptions import InvalidConfigurationError
from .terrain_types import TerrainType

VISION_RADII = (1, 2, 3)


class DifficultyProfile(BaseModel, frozen=True):
    """Constraint parameters for terrain generation.

    A limit of None disables the corresponding rule.
    """

    name: str
    max_desert_gap: int | None = Field(
        default=None, ge=0, description="Max distance to a biome before one is forced"
    )
    max_biome_blob: int | None = Field(
        default=None, ge=0, description="Biome neighbours at which a biome is rejected"
    )
    max_desert_blob: int | None = Field(
        default=None, ge=0, description="Desert neighbours at which a desert is rejected"
    )
    isolate_oasis: bool = Field(
        default=False, description="Keep oases away from other biome tiles"
    )


BUILTIN_PROFILES: dict[str, DifficultyProfile] = {
    "easy": DifficultyProfile(
        name="easy",
        max_desert_gap=2,
        max_desert_blob=4,
    ),
    "normal": DifficultyProfile(
        name="normal",
        max_desert_gap=3,
        max_biome_blob=4,
        max_desert_blob=5,
    ),
    "hard": DifficultyProfile(
        name="hard",
        max_desert_gap=4,
        max_biome_blob=3,
        isolate_oasis=True,
    ),
}


class RiverConfig(BaseModel):
    """River growth parameters."""

    attempt_probability: float = Field(
        default=0.5, ge=0.0, le=1.0, description="Chance a move does anything to rivers"
    )
    extend_probability: float = Field(
        default=0.6, ge=0.0, le=1.0, description="Chance to extend rather than start"
    )
    source_search_radius: int = Field(
        default=4, ge=0, description="Rings scanned around the explorer for sources"
    )
    mountain_source_threshold: float = Field(
        default=0.4, description="Draws below this pick a mountain source"
    )
    black_mountain_source_threshold: float = Field(
        default=0.8, description="Draws below this pick a black mountain source"
    )


class ExplorerConfig(BaseModel):
    """Complete configuration for an explorer session."""

    seed: str = Field(default="caerwynn-001", description="Base generation seed")
    difficulty: str = Field(default="normal", description="Active profile name")
    fog_enabled: bool = True
    vision_radius: int = Field(default=2, description="Fog-of-war radius (1-3)")
    generation_radius: int = Field(
        default=2, ge=0, description="Radius materialised around each position"
    )
    origin_type: TerrainType = Field(
        default=TerrainType.FORET, description="Biome placed at the origin on reset"
    )
    profiles: dict[str, DifficultyProfile] = Field(default_factory=dict)
    rivers: RiverConfig = Field(default_factory=RiverConfig)

    @field_validator("vision_radius")
    @classmethod
    def _check_vision_radius(cls, value: int) -> int:
        if value not in VISION_RADII:
            raise ValueError(f"vision_radius must be one of {VISION_RADII}")
        return value

    @field_validator("origin_type")
    @classmethod
    def _check_origin_type(cls, value: TerrainType) -> TerrainType:
        if not value.is_biome:
            raise ValueError(f"origin_type must be a biome, got {value.value}")
        return value

    def all_profiles(self) -> dict[str, DifficultyProfile]:
        """Built-in profiles overlaid with configured ones."""
        return {**BUILTIN_PROFILES, **self.profiles}

    def get_profile(self, name: str) -> DifficultyProfile:
        """Get a profile by name.

        Raises:
            InvalidConfigurationError: If no profile has that name.
        """
        profiles = self.all_profiles()
        if name not in profiles:
            raise InvalidConfigurationError(
                f"Unknown difficulty profile {name!r}. "
                f"Available profiles: {sorted(profiles)}"
            )
        return profiles[name]


def parse_config(data: dict) -> ExplorerConfig:
    """Validate raw configuration data.

    Raises:
        InvalidConfigurationError: If validation fails or the difficulty
            names no known profile.
    """
    try:
        config = ExplorerConfig.model_validate(data)
    except ValidationError as e:
        raise InvalidConfigurationError(str(e)) from e
    config.get_profile(config.difficulty)
    return config


def load_config(config_path: Path) -> ExplorerConfig:
    """Load configuration from a TOML file.

    Args:
        config_path: Path to the TOML config file.

    Returns:
        Parsed ExplorerConfig object.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        tomllib.TOMLDecodeError: If TOML is malformed.
        InvalidConfigurationError: If values fail validation.
    """
    with open(config_path, "rb") as f:
        data = tomllib.load(f)
    # Profile tables are keyed by name; fill the name in when omitted
    for name, profile in data.get("profiles", {}).items():
        if isinstance(profile, dict):
            profile.setdefault("name", name)
    return parse_config(data)


def _configs_dir() -> Path:
    return Path(__file__).parent.parent.parent / "configs"


def find_config(name: str) -> Path:
    """Find a config file by name.

    Searches in the following order:
    1. Exact path if name contains path separator or ends in .toml
    2. configs/{name}.toml
    3. configs/{name}

    Raises:
        FileNotFoundError: If config file is not found.
    """
    if "/" in name or name.endswith(".toml"):
        path = Path(name)
        if path.exists():
            return path
        raise FileNotFoundError(f"Config file not found: {name}")

    configs_dir = _configs_dir()

    config_path = configs_dir / f"{name}.toml"
    if config_path.exists():
        return config_path

    config_path = configs_dir / name
    if config_path.exists():
        return config_path

    raise FileNotFoundError(
        f"Config '{name}' not found in {configs_dir}. "
        f"Available configs: {list_configs()}"
    )


def list_configs() -> list[str]:
    """List available config names."""
    configs_dir = _configs_dir()
    if not configs_dir.exists():
        return []
    return [p.stem for p in configs_dir.glob("*.toml")]
