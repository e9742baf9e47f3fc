from meta_router.config.config_paths import (
    get_config_paths,
    get_project_config_path,
    get_user_config_path,
)
from meta_router.config.loader import ConfigLoader, deep_merge, parse_config
from meta_router.config.service import (
    ConfigSnapshot,
    RouterService,
    create_registry,
    get_router_service,
)
from meta_router.config.validator import (
    BUILTIN_AGENT_NAMES,
    ConfigValidator,
    analyze_regex_pattern,
    check_agent_references,
    check_circular_dependencies,
    check_regex_performance,
    format_errors,
    format_validation_failure,
    format_warnings,
    get_validation_summary,
)

__all__ = [
    "BUILTIN_AGENT_NAMES",
    "ConfigLoader",
    "ConfigSnapshot",
    "ConfigValidator",
    "RouterService",
    "analyze_regex_pattern",
    "check_agent_references",
    "check_circular_dependencies",
    "check_regex_performance",
    "create_registry",
    "deep_merge",
    "format_errors",
    "format_validation_failure",
    "format_warnings",
    "get_config_paths",
    "get_project_config_path",
    "get_router_service",
    "get_user_config_path",
    "get_validation_summary",
    "parse_config",
]
