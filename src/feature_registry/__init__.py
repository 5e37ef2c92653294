"""
feature_registry – feature-flag registry and resolution engine.

Import path convention::

    from feature_registry.application.feature_flags import FeatureRegistry, Flag
    from feature_registry.kernel.errors import UnknownFlagError
    from feature_registry.adapters.redis import RedisPersistentStore
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
