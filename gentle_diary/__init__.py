"""Local-first gentle mood and reflection diary."""

from .config import AppConfig
from .pipeline import DiaryPipeline

__all__ = ["AppConfig", "DiaryPipeline"]
