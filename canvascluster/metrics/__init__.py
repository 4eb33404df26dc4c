"""Quality metrics for canvas clusterings."""

from .quality import QualityCalculator

__all__ = ["QualityCalculator"]
