from .config import AuthzConfig, HierarchyDescription, LogLevel, load_config_from_env
from .exceptions import (
    AuthzError,
    CapabilityError,
    ConfigurationError,
    NotImplementedFeatureError,
    error_registry,
    register_error,
)
from .hierarchy import (
    BASE,
    CAN,
    DEFAULT_NAMESPACE,
    SUPERUSER,
    Capability,
    Group,
    Hierarchy,
    HierarchyGraph,
    HierarchyRegistry,
    PluginBundle,
    default_registry,
    get_hierarchy,
    resolve,
    setup_hierarchy,
)
from .logging import (
    AuthzFormatter,
    AuthzLoggerAdapter,
    get_authz_logger,
    safe_preview,
    setup_logging,
)

__version__ = "0.1.0"

__all__ = [
    'AuthzConfig',
    'HierarchyDescription',
    'LogLevel',
    'load_config_from_env',
    'AuthzError',
    'CapabilityError',
    'ConfigurationError',
    'NotImplementedFeatureError',
    'error_registry',
    'register_error',
    'BASE',
    'CAN',
    'DEFAULT_NAMESPACE',
    'SUPERUSER',
    'Capability',
    'Group',
    'Hierarchy',
    'HierarchyGraph',
    'HierarchyRegistry',
    'PluginBundle',
    'default_registry',
    'get_hierarchy',
    'resolve',
    'setup_hierarchy',
    'AuthzFormatter',
    'AuthzLoggerAdapter',
    'get_authz_logger',
    'safe_preview',
    'setup_logging',
]
