"""Configuration management for newsdesk."""

from .loader import DEFAULT_CONFIG_PATH, Config, load_config, save_config
from .models import (
    ConfigModel,
    GenerationDefaults,
    LLMConfig,
    NewsroomConfig,
    ProspectDefaults,
    WorkflowConfig,
)

__all__ = [
    "Config",
    "ConfigModel",
    "DEFAULT_CONFIG_PATH",
    "GenerationDefaults",
    "LLMConfig",
    "NewsroomConfig",
    "ProspectDefaults",
    "WorkflowConfig",
    "load_config",
    "save_config",
]
