"""Project editing exceptions."""

from .base import MidiForgeError


class ProjectError(MidiForgeError):
    """An editing operation on the project could not be applied."""


class EntityNotFoundError(ProjectError):
    """No entity with the requested id exists in the collection."""

    def __init__(self, kind: str, entity_id: str):
        """
        Initialize entity-not-found error.

        Args:
            kind: Collection name (e.g., "ir_mappings")
            entity_id: The id that was looked up
        """
        super().__init__(
            user_message=f"No entry '{entity_id}' in {kind}",
            recoverable=True,
            recovery_hint="Check the ids in your project file",
        )
        self.kind = kind
        self.entity_id = entity_id
