"""Data models for Prompt Vault.

Updates:
  v0.2.0 - 2026-10-12 - Export PromptUpdate partial payload.
  v0.1.0 - 2026-10-06 - Export Prompt, Collection, and GenerationModel dataclasses.
"""

from .collection_model import Collection
from .generation_model import GenerationModel
from .prompt_model import NewPrompt, Prompt, PromptUpdate

__all__ = [
    "Collection",
    "GenerationModel",
    "NewPrompt",
    "Prompt",
    "PromptUpdate",
]
