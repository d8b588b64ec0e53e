"""Services: project editing, document generation and the assistant adapter."""

from .assistant_service import AssistantService
from .editor_service import ProjectEditorService
from .generation_service import GenerationService

__all__ = [
    "AssistantService",
    "GenerationService",
    "ProjectEditorService",
]
