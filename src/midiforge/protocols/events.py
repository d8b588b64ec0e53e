"""Domain events for the observer pattern.

- Edit events: project mutations made through the editor service
- Learning events: state changes of the IR learning sequencer
"""

from enum import Enum


class EditEvent(Enum):
    """
    Events that occur when the project changes.

    Every event means both generated documents are stale.
    """

    ENTITY_ADDED = "entity_added"        # Entity appended to a collection
    ENTITY_UPDATED = "entity_updated"    # One field of an entity changed
    ENTITY_REMOVED = "entity_removed"    # Entity (and dependents) removed
    CONFIG_CHANGED = "config_changed"    # Board or display settings changed
    PROJECT_LOADED = "project_loaded"    # Whole project replaced


class LearningEvent(Enum):
    """Events from the IR learning sequencer."""

    ARMED = "armed"      # Waiting for a code for the given mapping
    LEARNED = "learned"  # Code and protocol written to the given mapping
    IDLE = "idle"        # Nothing armed (finished, cancelled or disconnected)
