"""Asset generator component."""

from .generator import AssetGenerationPipeline, count_tasks, progress_logger
from .producer import AssetProducer, LiteLLMAssetProducer

__all__ = [
    "AssetGenerationPipeline",
    "AssetProducer",
    "LiteLLMAssetProducer",
    "count_tasks",
    "progress_logger",
]
