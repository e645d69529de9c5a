from env.env import (
    Environment,
    LoggingEnvironment,
    get_env,
    reset_env_caches,
    get_logging_env,
    ConfigError,
)

from env.paths import CONFIG_DIR, PROJECT_ROOT, logs_dir

__all__ = [
    "Environment",
    "LoggingEnvironment",
    "get_env",
    "reset_env_caches",
    "get_logging_env",
    "ConfigError",
    "CONFIG_DIR",
    "PROJECT_ROOT",
    "logs_dir",
]
