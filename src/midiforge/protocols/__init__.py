"""Protocol definitions for midiforge observers.

- Events: editing and learning events
- Observers: Protocols for components that react to these events
"""

from .events import EditEvent, LearningEvent
from .observers import EditObserver, LearningObserver

__all__ = [
    # Events
    "EditEvent",
    "LearningEvent",
    # Observers
    "EditObserver",
    "LearningObserver",
]
