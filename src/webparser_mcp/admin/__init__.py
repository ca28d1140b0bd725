"""Admin API functionality for health checks and configuration.

The admin module follows a router -> service pattern:
- router.py: HTTP endpoint handlers
- service.py: Runtime configuration and extraction limits
"""

from webparser_mcp.admin.router import (
    api_config_get,
    api_config_update,
    health_check,
)
from webparser_mcp.admin.service import (
    DEFAULT_CONCURRENCY,
    get_config,
    get_current_config,
    get_limits,
    reset_config,
    update_config,
)

__all__ = [
    # Router functions
    "api_config_get",
    "api_config_update",
    "health_check",
    # Service functions
    "get_config",
    "get_current_config",
    "get_limits",
    "reset_config",
    "update_config",
    "DEFAULT_CONCURRENCY",
]
