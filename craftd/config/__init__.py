from .loaders import ConfigLoadError, load_config
from .models import CraftdConfig

__all__ = ["ConfigLoadError", "CraftdConfig", "load_config"]
