"""
ブートストラップ関連の公開API。
"""

from .config_loader import (
    AppConfigModel,
    EnvConfigLoader,
    LoggingConfigModel,
    MetricsConfigModel,
    StorageConfigModel,
)
from .container import (
    BootstrapContainer,
    BootstrapContext,
    ConfigBundle,
    ConfigurationError,
    InvalidConfigurationError,
    LoggingConfigurator,
    MetricsConfigurator,
    MissingConfigurationError,
)
from .logging_setup import DictConfigLoggingConfigurator, default_logging_config
from .metrics_setup import (
    MetricsConfiguratorRegistry,
    NoopMetricsConfigurator,
    PrometheusMetricsConfigurator,
    default_metrics_configurator,
)

__all__ = [
    "BootstrapContainer",
    "BootstrapContext",
    "ConfigBundle",
    "ConfigurationError",
    "InvalidConfigurationError",
    "MissingConfigurationError",
    "LoggingConfigurator",
    "MetricsConfigurator",
    "DictConfigLoggingConfigurator",
    "default_logging_config",
    "MetricsConfiguratorRegistry",
    "NoopMetricsConfigurator",
    "PrometheusMetricsConfigurator",
    "default_metrics_configurator",
    "EnvConfigLoader",
    "AppConfigModel",
    "StorageConfigModel",
    "LoggingConfigModel",
    "MetricsConfigModel",
]
