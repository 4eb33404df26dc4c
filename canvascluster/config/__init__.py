"""Configuration module for canvascluster."""

from .models import CanvasClusterConfig, load_config, save_config

__all__ = ["CanvasClusterConfig", "load_config", "save_config"]
