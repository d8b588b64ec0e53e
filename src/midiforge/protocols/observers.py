"""Observer protocol definitions for project edits and IR learning."""

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from midiforge.models import EntityKind

from .events import EditEvent, LearningEvent


@runtime_checkable
class EditObserver(Protocol):
    """
    Observer that receives editing events.

    This protocol decouples the editor service from whatever reacts to
    edits (document regeneration, CLI output).
    """

    def on_edit_event(
        self, event: "EditEvent", kind: "EntityKind | None", entity_id: str | None
    ) -> None:
        """
        Handle editing events.

        Args:
            event: The type of editing event
            kind: Collection that changed, or None for config/project events
            entity_id: Id of the affected entity, or None

        Error Handling:
            Exceptions raised by observers are caught and logged by the
            ObserverManager. One failing observer doesn't break others.
        """
        ...


@runtime_checkable
class LearningObserver(Protocol):
    """Observer that receives learning sequencer events."""

    def on_learning_event(self, event: "LearningEvent", mapping_id: str | None) -> None:
        """
        Handle learning events.

        Args:
            event: The type of learning event
            mapping_id: IR mapping armed or learned, None for IDLE

        Threading:
            Called from the asyncio task reading the serial port.
        """
        ...
