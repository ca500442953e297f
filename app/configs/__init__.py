from app.configs.settings import PersistenceConfig, settings

__all__ = [
    "PersistenceConfig",
    "settings",
]
