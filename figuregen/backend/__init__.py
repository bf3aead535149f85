"""Backend package for the figure generator."""

from .config import AppSettings, load_settings
from .engine import apply_event
from .models import CharacterAttributes, EyeConfig, GenerationRequest, GenerationResult, Hat, HeldItem, ItemKind, SkinTone
from .render import render, render_batch
from .sampler import sample
from .sequencer import GenerationSequencer
from .state import AppState, build_initial_state

__all__ = [
    "AppSettings",
    "AppState",
    "apply_event",
    "build_initial_state",
    "CharacterAttributes",
    "EyeConfig",
    "GenerationRequest",
    "GenerationResult",
    "GenerationSequencer",
    "Hat",
    "HeldItem",
    "ItemKind",
    "load_settings",
    "render",
    "render_batch",
    "sample",
    "SkinTone",
]
