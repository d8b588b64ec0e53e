"""Editor service owning the controller project being edited."""

import logging
from typing import Any, Literal, TypeVar, Unpack

from pydantic import BaseModel, ValidationError

from midiforge.exceptions import ConfigValidationError, EntityNotFoundError, ProjectError, wrap_pydantic_error
from midiforge.models import (
    ButtonChanges,
    ButtonMapping,
    ControllerProject,
    DisplayBusChanges,
    DisplayChanges,
    EncoderChanges,
    EncoderMapping,
    EntityKind,
    FaderChanges,
    FaderMapping,
    GeneratorConfigChanges,
    IrMapping,
    IrMappingChanges,
    IrProtocol,
    KeypadChanges,
    KeypadMapping,
    Mapping,
    MultiplexerChanges,
    MultiplexerConfig,
    MuxChannelChanges,
    MuxChannelMapping,
    editable_fields,
)
from midiforge.protocols import EditEvent, EditObserver
from midiforge.utils import ObserverManager

logger = logging.getLogger(__name__)

_M = TypeVar("_M", bound=BaseModel)

_MODELS: dict[EntityKind, type[Mapping]] = {
    EntityKind.IR_MAPPING: IrMapping,
    EntityKind.BUTTON: ButtonMapping,
    EntityKind.FADER: FaderMapping,
    EntityKind.ENCODER: EncoderMapping,
    EntityKind.KEYPAD: KeypadMapping,
    EntityKind.MULTIPLEXER: MultiplexerConfig,
    EntityKind.MUX_CHANNEL: MuxChannelMapping,
}

_CHANGES: dict[EntityKind, type] = {
    EntityKind.IR_MAPPING: IrMappingChanges,
    EntityKind.BUTTON: ButtonChanges,
    EntityKind.FADER: FaderChanges,
    EntityKind.ENCODER: EncoderChanges,
    EntityKind.KEYPAD: KeypadChanges,
    EntityKind.MULTIPLEXER: MultiplexerChanges,
    EntityKind.MUX_CHANNEL: MuxChannelChanges,
}

# Numbered default names ("Button 3"); encoders keep a fixed default name
_NUMBERED_NAMES = {
    EntityKind.BUTTON: "Button",
    EntityKind.FADER: "Fader",
    EntityKind.KEYPAD: "Keypad",
    EntityKind.MULTIPLEXER: "Multiplexer",
}


class ProjectEditorService:
    """
    Owns a ControllerProject and applies every edit to it.

    Event-Driven Architecture:
        Every successful edit emits an EditEvent to registered observers.
        The generation service listens to these events and regenerates
        both documents, so callers never trigger regeneration themselves.

    Validation:
        Each entity kind has its own update method taking a typed change
        set (``update_button(id, pin=4)``). The changed entity is validated
        as a whole and then replaces the stored one, so a rejected value
        raises ConfigValidationError, leaves the entity as it was, and no
        event is emitted.
    """

    def __init__(self, project: ControllerProject | None = None):
        """
        Initialize the editor service.

        Args:
            project: Project to edit (a new empty project if None)
        """
        self._project = project or ControllerProject()
        self._observers = ObserverManager[EditObserver](observer_type_name="edit")
        logger.info("ProjectEditorService initialized")

    @property
    def project(self) -> ControllerProject:
        """Get the project being edited."""
        return self._project

    def load_project(self, project: ControllerProject) -> None:
        """Replace the whole project."""
        self._project = project
        logger.info(f"Loaded project {project.config.controller_name}")
        self._notify_observers(EditEvent.PROJECT_LOADED)

    # =================================================================
    # Event System
    # =================================================================

    def register_observer(self, observer: EditObserver) -> None:
        """
        Register an observer to receive edit events.

        Args:
            observer: Object implementing EditObserver protocol
        """
        self._observers.register(observer)

    def unregister_observer(self, observer: EditObserver) -> None:
        """
        Unregister an observer.

        Args:
            observer: Previously registered observer
        """
        self._observers.unregister(observer)

    def _notify_observers(
        self, event: EditEvent, kind: EntityKind | None = None, entity_id: str | None = None
    ) -> None:
        self._observers.notify("on_edit_event", event, kind, entity_id)

    # =================================================================
    # Lookup
    # =================================================================

    def entities(self, kind: EntityKind) -> list[Mapping]:
        """The live collection for ``kind``."""
        return getattr(self._project, EntityKind(kind).value)

    def _index_of(self, kind: EntityKind, entity_id: str) -> int:
        for index, entity in enumerate(self.entities(kind)):
            if entity.id == entity_id:
                return index
        raise EntityNotFoundError(EntityKind(kind).value, entity_id)

    def get(self, kind: EntityKind, entity_id: str) -> Mapping:
        """
        Get an entity by id.

        Raises:
            EntityNotFoundError: If no entity has this id
        """
        return self.entities(kind)[self._index_of(kind, entity_id)]

    def exists(self, kind: EntityKind, entity_id: str) -> bool:
        return any(entity.id == entity_id for entity in self.entities(kind))

    # =================================================================
    # Add / Update / Remove
    # =================================================================

    def _defaults(self, kind: EntityKind) -> dict[str, Any]:
        prefix = _NUMBERED_NAMES.get(kind)
        if prefix is None:
            return {}
        return {"name": f"{prefix} {len(self.entities(kind)) + 1}"}

    def add(self, kind: EntityKind, **fields: Any) -> Mapping:
        """
        Append a new entity with a fresh id.

        Args:
            kind: Collection to add to
            **fields: Values overriding the defaults

        Returns:
            The new entity

        Raises:
            ConfigValidationError: If a given value is invalid
        """
        kind = EntityKind(kind)
        if kind is EntityKind.MUX_CHANNEL:
            return self.add_mux_channel(**fields)

        values = {**self._defaults(kind), **fields}
        try:
            entity = _MODELS[kind](**values)
        except ValidationError as e:
            raise wrap_pydantic_error(e, field_prefix=kind.value) from e

        self.entities(kind).append(entity)
        logger.info(f"Added {kind.value} entry {entity.id}")
        self._notify_observers(EditEvent.ENTITY_ADDED, kind, entity.id)
        return entity

    def add_mux_channel(self, mux_id: str, **fields: Any) -> MuxChannelMapping:
        """
        Add a channel to a multiplexer, at the next free index by default.

        Raises:
            EntityNotFoundError: If the multiplexer doesn't exist
            ProjectError: If every channel of the multiplexer is taken
        """
        mux = self.get(EntityKind.MULTIPLEXER, mux_id)
        used = {ch.channel_index for ch in self._project.channels_of(mux_id)}

        index = fields.pop("channel_index", None)
        if index is None:
            index = next((i for i in range(mux.arity) if i not in used), mux.arity)
        if index >= mux.arity:
            raise ProjectError(
                f"{mux.name} has no free channel (max {mux.arity})",
                recoverable=True,
                recovery_hint="Use a 16-channel multiplexer or add another multiplexer",
            )

        values = {"number": min(20 + index, 127), **fields}
        try:
            channel = MuxChannelMapping(mux_id=mux_id, channel_index=index, **values)
        except ValidationError as e:
            raise wrap_pydantic_error(e, field_prefix=EntityKind.MUX_CHANNEL.value) from e

        self._project.mux_channels.append(channel)
        logger.info(f"Added channel {index} to multiplexer {mux.name}")
        self._notify_observers(EditEvent.ENTITY_ADDED, EntityKind.MUX_CHANNEL, channel.id)
        return channel

    def _validated(self, target: _M, changes: dict[str, Any], changes_type: type, path: str) -> _M:
        """
        Validate ``target`` with ``changes`` applied, as a new instance.

        The target itself is never touched, so a rejected edit (including
        one failing a model-level check) leaves it as it was.
        """
        unknown = sorted(set(changes) - editable_fields(changes_type))
        if unknown:
            raise ConfigValidationError(
                field=f"{path}.{unknown[0]}", value=changes[unknown[0]], error_msg="not an editable field"
            )
        try:
            return type(target).model_validate({**target.model_dump(), **changes})
        except ValidationError as e:
            raise wrap_pydantic_error(e, field_prefix=path) from e

    def _update_entity(self, kind: EntityKind, entity_id: str, changes: dict[str, Any]) -> Mapping:
        index = self._index_of(kind, entity_id)
        collection = self.entities(kind)
        if not changes:
            return collection[index]

        updated = self._validated(collection[index], changes, _CHANGES[kind], f"{kind.value}[{index}]")
        collection[index] = updated

        logger.debug(f"Updated {kind.value}[{index}]: {changes!r}")
        self._notify_observers(EditEvent.ENTITY_UPDATED, kind, entity_id)
        return updated

    def update_ir_mapping(self, mapping_id: str, **changes: Unpack[IrMappingChanges]) -> IrMapping:
        """
        Change fields of an IR mapping.

        Args:
            mapping_id: Id of the mapping
            **changes: New values; fields left out keep their value

        Returns:
            The updated mapping

        Raises:
            EntityNotFoundError: If no mapping has this id
            ConfigValidationError: If a field is not editable or a value is invalid
        """
        return self._update_entity(EntityKind.IR_MAPPING, mapping_id, dict(changes))

    def update_button(self, button_id: str, **changes: Unpack[ButtonChanges]) -> ButtonMapping:
        """Change fields of a button (see ``update_ir_mapping``)."""
        return self._update_entity(EntityKind.BUTTON, button_id, dict(changes))

    def update_fader(self, fader_id: str, **changes: Unpack[FaderChanges]) -> FaderMapping:
        """Change fields of a fader (see ``update_ir_mapping``)."""
        return self._update_entity(EntityKind.FADER, fader_id, dict(changes))

    def update_encoder(self, encoder_id: str, **changes: Unpack[EncoderChanges]) -> EncoderMapping:
        """Change fields of an encoder (see ``update_ir_mapping``)."""
        return self._update_entity(EntityKind.ENCODER, encoder_id, dict(changes))

    def update_keypad(self, keypad_id: str, **changes: Unpack[KeypadChanges]) -> KeypadMapping:
        """Change fields of a keypad (see ``update_ir_mapping``)."""
        return self._update_entity(EntityKind.KEYPAD, keypad_id, dict(changes))

    def update_multiplexer(
        self, mux_id: str, **changes: Unpack[MultiplexerChanges]
    ) -> MultiplexerConfig:
        """Change fields of a multiplexer (see ``update_ir_mapping``)."""
        return self._update_entity(EntityKind.MULTIPLEXER, mux_id, dict(changes))

    def update_mux_channel(
        self, channel_id: str, **changes: Unpack[MuxChannelChanges]
    ) -> MuxChannelMapping:
        """
        Change fields of a multiplexer channel.

        Raises:
            EntityNotFoundError: If no channel has this id
            ConfigValidationError: If a field is not editable or a value is invalid
            ProjectError: If the new channel index is beyond the multiplexer's channels
        """
        index = changes.get("channel_index")
        if index is not None:
            channel = self.get(EntityKind.MUX_CHANNEL, channel_id)
            mux = self._project.find_multiplexer(channel.mux_id)
            if mux is not None and isinstance(index, int) and index >= mux.arity:
                raise ProjectError(
                    f"{mux.name} has only {mux.arity} channels",
                    recoverable=True,
                    recovery_hint=f"Use a channel index between 0 and {mux.arity - 1}",
                )
        return self._update_entity(EntityKind.MUX_CHANNEL, channel_id, dict(changes))

    def learn_ir_code(self, mapping_id: str, protocol: IrProtocol, code: str) -> IrMapping:
        """
        Store a received code and protocol on an IR mapping as one edit.

        Raises:
            EntityNotFoundError: If the mapping doesn't exist
        """
        mapping = self.update_ir_mapping(mapping_id, ir_protocol=protocol, ir_code=code)
        logger.info(f"Learned {mapping.ir_protocol.value} {mapping.ir_code} for IR mapping {mapping_id}")
        return mapping

    def remove(self, kind: EntityKind, entity_id: str) -> Mapping:
        """
        Remove an entity. Removing a multiplexer also removes its channels.

        Raises:
            EntityNotFoundError: If no entity has this id
        """
        kind = EntityKind(kind)
        collection = self.entities(kind)
        entity = collection.pop(self._index_of(kind, entity_id))

        if kind is EntityKind.MULTIPLEXER:
            before = len(self._project.mux_channels)
            self._project.mux_channels[:] = [
                ch for ch in self._project.mux_channels if ch.mux_id != entity_id
            ]
            logger.debug(f"Removed {before - len(self._project.mux_channels)} channels of {entity_id}")

        logger.info(f"Removed {kind.value} entry {entity_id}")
        self._notify_observers(EditEvent.ENTITY_REMOVED, kind, entity_id)
        return entity

    # =================================================================
    # Board settings
    # =================================================================

    def update_config(self, **changes: Unpack[GeneratorConfigChanges]) -> None:
        """
        Change board-level settings (controller name, IR pin, LED feedback).

        Display settings go through ``update_display`` and ``update_display_bus``.

        Raises:
            ConfigValidationError: If a field is not editable or a value is invalid
        """
        config = self._project.config
        self._project.config = self._validated(config, dict(changes), GeneratorConfigChanges, "config")
        self._notify_observers(EditEvent.CONFIG_CHANGED)

    def update_display(self, **changes: Unpack[DisplayChanges]) -> None:
        """Change display settings (enabled, type, dual, inverted, split_layout)."""
        config = self._project.config
        config.display = self._validated(config.display, dict(changes), DisplayChanges, "config.display")
        self._notify_observers(EditEvent.CONFIG_CHANGED)

    def update_display_bus(
        self, bus: Literal["primary", "secondary"], **changes: Unpack[DisplayBusChanges]
    ) -> None:
        """
        Change sda, scl or address of the primary or secondary display bus.

        Raises:
            ConfigValidationError: If bus is not 'primary' or 'secondary', or a value is invalid
        """
        if bus not in ("primary", "secondary"):
            raise ConfigValidationError(
                field="config.display", value=bus, error_msg="bus must be 'primary' or 'secondary'"
            )
        display = self._project.config.display
        updated = self._validated(
            getattr(display, bus), dict(changes), DisplayBusChanges, f"config.display.{bus}"
        )
        setattr(display, bus, updated)
        self._notify_observers(EditEvent.CONFIG_CHANGED)
