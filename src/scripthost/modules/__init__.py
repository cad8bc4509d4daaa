"""scripthost API module system.

Pluggable modules expose host functionality to scripts through a standard
interface with priority-ordered, fault-isolated lifecycle management.
"""

from scripthost.modules.base import ApiModule, BaseApiModule, ModuleState, DEFAULT_PRIORITY
from scripthost.modules.registry import ModuleRegistry

__all__ = [
    "ApiModule",
    "BaseApiModule",
    "ModuleState",
    "DEFAULT_PRIORITY",
    "ModuleRegistry",
]
