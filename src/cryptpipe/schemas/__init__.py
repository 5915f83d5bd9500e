"""
Data contracts and type definitions.
"""

__all__ = [
    "CipherConfig",
    "PipelineConfig",
]

from .config import CipherConfig, PipelineConfig
