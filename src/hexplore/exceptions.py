"""Custom exceptions for the exploration map engine."""


class HexploreError(Exception):
    """Base exception for hexplore errors."""

    pass


class InvalidConfigurationError(HexploreError):
    """Raised when a configuration value is rejected at the boundary."""

    pass


class UnknownTerrainError(HexploreError):
    """Raised when a terrain identifier is not in the registry."""

    pass


class InvalidDirectionError(HexploreError):
    """Raised when a direction name cannot be parsed."""

    pass


class TileAlreadyExistsError(HexploreError):
    """Raised when trying to add a tile at an already generated coordinate."""

    pass


class TileNotFoundError(HexploreError):
    """Raised when a coordinate has no generated tile."""

    pass
