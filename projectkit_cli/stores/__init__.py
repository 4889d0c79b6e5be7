from projectkit_cli.stores.settings import (
    ConfigurationError,
    ProjectKitSettings,
    get_projectkit_home,
)


__all__ = [
    "ConfigurationError",
    "ProjectKitSettings",
    "get_projectkit_home",
]
