from .settings import DEFAULT_CONCURRENCY, InspectorConfig
from .loader import build_config, load_project_config

__all__ = ["DEFAULT_CONCURRENCY", "InspectorConfig", "build_config", "load_project_config"]
