"""Application layer — state, debouncing and coordination."""

from inkwell.app.debounce import Debouncer
from inkwell.app.orchestrator import Orchestrator, Renderer, RenderedView

__all__ = ["Debouncer", "Orchestrator", "RenderedView", "Renderer"]
