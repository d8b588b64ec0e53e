"""Arduino sketch generation for RP2040 controllers.

The sketch is built on the Control Surface and IRremote libraries. Output
is assembled as a list of lines, one block per control family, in a fixed
order so that the same project always yields the same text (apart from
the timestamp in the header).
"""

import logging
import math
from collections.abc import Callable
from datetime import datetime

from midiforge.models import (
    ControllerProject,
    DisplayBus,
    DisplayFamily,
    DisplayType,
    IrMapping,
    IrProtocol,
    MidiType,
    MuxMode,
)
from midiforge.utils import IdentifierRegistry

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
RULE = " * " + "=" * 74
THIN_RULE = " * " + "-" * 74

_LIBRARY_URLS = {
    "Control Surface": "https://github.com/tttapa/Control-Surface",
    "IRremote": "https://github.com/Arduino-IRremote/Arduino-IRremote",
    "U8g2": "https://github.com/olikraus/u8g2",
    "LiquidCrystal I2C": "https://github.com/johnrickman/LiquidCrystal_I2C",
}

_OLED_CLASSES = {
    DisplayType.SH1106: "U8G2_SH1106_128X64_NONAME_F",
    DisplayType.SSD1306: "U8G2_SSD1306_128X64_NONAME_F",
}

_SEND_CALLS = {
    MidiType.NOTE_ON: "sendNoteOn",
    MidiType.NOTE_OFF: "sendNoteOff",
    MidiType.CC: "sendControlChange",
}

_CPP_KEYWORDS = frozenset(
    """
    alignas alignof and and_eq asm auto bitand bitor bool break case catch char char16_t
    char32_t char8_t class compl concept const const_cast consteval constexpr constinit
    continue co_await co_return co_yield decltype default delete do double dynamic_cast
    else enum explicit export extern false float for friend goto if inline int long
    mutable namespace new noexcept not not_eq nullptr operator or or_eq private
    protected public register reinterpret_cast requires return short signed sizeof
    static static_assert static_cast struct switch template this thread_local throw
    true try typedef typeid typename union unsigned using virtual void volatile
    wchar_t while xor xor_eq
    """.split()
)

# Globals and types the sketch itself declares or pulls in from its libraries
_SKETCH_NAMES = frozenset(
    {
        "setup",
        "loop",
        "midi",
        "dispatchIr",
        "updateDisplay",
        "renderDisplay",
        "deck1Msg",
        "deck2Msg",
        "Serial",
        "Serial1",
        "Wire",
        "Wire1",
        "IrReceiver",
        "Control_Surface",
        "USBMIDI_Interface",
        "CCPotentiometer",
        "CCRotaryEncoder",
        "CCButton",
        "NoteButton",
        "CCButtonMatrix",
        "NoteButtonMatrix",
        "PinList",
        "AddressMatrix",
        "CD74HC4051",
        "CD74HC4067",
        "U8G2",
        "LiquidCrystal_I2C",
        "HIGH",
        "LOW",
        "INPUT",
        "OUTPUT",
        "F",
        *(f"Channel_{n}" for n in range(1, 17)),
    }
)

RESERVED_IDENTIFIERS = _CPP_KEYWORDS | _SKETCH_NAMES

_KEYPAD_PARTS = ("_rowPins", "_colPins", "_addresses")

_C_ESCAPES = {"\\": "\\\\", '"': '\\"', "\n": "\\n", "\r": "\\r", "\t": "\\t"}


def encoder_speed(multiplier: float) -> int:
    """Pulses per step for CCRotaryEncoder: multiplier * 4, rounded half up."""
    return max(1, math.floor(multiplier * 4 + 0.5))


def _c_string(text: str) -> str:
    escaped = []
    for char in text:
        if char in _C_ESCAPES:
            escaped.append(_C_ESCAPES[char])
        elif ord(char) < 0x20 or ord(char) == 0x7F:
            # Octal keeps the next character from joining the escape
            escaped.append(f"\\{ord(char):03o}")
        else:
            escaped.append(char)
    return '"' + "".join(escaped) + '"'


def _comment_text(text: str) -> str:
    """User text made safe for the header block comment: one line, no ``*/``."""
    flat = "".join(" " if ord(char) < 0x20 or ord(char) == 0x7F else char for char in text)
    return flat.replace("*/", "* /")


def _button_class(midi_type: MidiType) -> str:
    return "CCButton" if midi_type is MidiType.CC else "NoteButton"


def _join(values) -> str:
    return ", ".join(str(v) for v in values)


def display_message(mapping: IrMapping) -> str:
    """Text shown on the display when an IR mapping fires."""
    return mapping.description or mapping.action or f"{mapping.midi_type.label} {mapping.data1}"


class FirmwareGenerator:
    """
    Generates the ``.ino`` sketch for a controller project.

    The generator keeps no state between calls; identifiers are assigned
    by a fresh IdentifierRegistry on every ``generate``, which never hands
    out C++ keywords or names the sketch declares itself.

    Example:
        ```python
        generator = FirmwareGenerator(clock=lambda: datetime(2024, 1, 1))
        sketch = generator.generate(project)
        ```
    """

    def __init__(self, clock: Callable[[], datetime] = datetime.now):
        """
        Initialize the generator.

        Args:
            clock: Returns the time written into the header
        """
        self._clock = clock

    def generate(self, project: ControllerProject) -> str:
        """Render the complete sketch for ``project``."""
        registry = IdentifierRegistry(reserved=RESERVED_IDENTIFIERS)
        lines: list[str] = []

        self._emit_header(lines, project)
        self._emit_preamble(lines, project)

        mux_idents = self._emit_multiplexers(lines, project, registry)
        display_idents = self._emit_displays(lines, project, registry)
        self._emit_faders(lines, project, registry, mux_idents)
        self._emit_encoders(lines, project, registry)
        self._emit_buttons(lines, project, registry)
        self._emit_keypads(lines, project, registry)

        self._emit_setup(lines, project, display_idents)
        self._emit_loop(lines)
        self._emit_dispatch(lines, project)

        logger.debug(
            f"Generated firmware for {project.config.controller_name}: {len(lines)} lines"
        )
        return "\n".join(lines) + "\n"

    # ------------------------------------------------------------------
    # Header and preamble
    # ------------------------------------------------------------------

    def _required_libraries(self, project: ControllerProject) -> list[str]:
        libraries = ["Control Surface", "IRremote"]
        display = project.config.display
        if display.enabled:
            libraries.append("U8g2" if display.family is DisplayFamily.OLED else "LiquidCrystal I2C")
        return libraries

    def _pin_table(self, project: ControllerProject) -> list[str]:
        config = project.config
        rows = [f"IR receiver: GPIO {config.ir_pin}"]

        display = config.display
        if display.enabled:
            for number, bus in enumerate(display.buses, start=1):
                rows.append(
                    f"Display {number} ({display.type.value}): "
                    f"SDA={bus.sda}, SCL={bus.scl}, ADDR={bus.address}"
                )

        for mux in project.multiplexers:
            pins = mux.address_pins[: mux.address_bits]
            rows.append(
                f"Multiplexer {mux.name} ({mux.chip}): "
                f"S0-S{mux.address_bits - 1}={_join(pins)}, SIG={mux.signal_pin}"
            )
        for fader in project.faders:
            rows.append(f"Fader {fader.name}: GPIO {fader.pin}")
        for encoder in project.encoders:
            row = f"Encoder {encoder.name}: A={encoder.pin_a}, B={encoder.pin_b}"
            if encoder.has_button:
                row += f", SW={encoder.pin_button}"
            rows.append(row)
        for button in project.buttons:
            rows.append(f"Button {button.name}: GPIO {button.pin}")
        for keypad in project.keypads:
            rows.append(
                f"Keypad {keypad.name}: rows={_join(keypad.row_pins)}, cols={_join(keypad.col_pins)}"
            )
        return rows

    def _emit_header(self, lines: list[str], project: ControllerProject) -> None:
        timestamp = self._clock().strftime(TIMESTAMP_FORMAT)

        lines.append("/*")
        lines.append(RULE)
        lines.append(f" * PROJECT: {_comment_text(project.config.controller_name)}")
        lines.append(f" * GENERATED: {timestamp}")
        lines.append(" * PLATFORM: Raspberry Pi Pico (RP2040)")
        lines.append(RULE)
        lines.append(" *")
        lines.append(" * REQUIRED LIBRARIES:")
        for library in self._required_libraries(project):
            lines.append(f" * - {library} ({_LIBRARY_URLS[library]})")
        lines.append(" *")
        lines.append(" * NOTE: Architecture warnings shown by the IDE for the RP2040 can be ignored.")
        lines.append(THIN_RULE)
        lines.append(" * PIN TABLE:")
        for row in self._pin_table(project):
            lines.append(f" * - {_comment_text(row)}")
        lines.append(RULE)
        lines.append(" */")
        lines.append("")

    def _emit_preamble(self, lines: list[str], project: ControllerProject) -> None:
        display = project.config.display

        lines.append("#include <Arduino.h>")
        lines.append("#include <Wire.h>")
        lines.append("")
        lines.append("// IR protocols")
        for protocol in IrProtocol:
            lines.append(f"#define DECODE_{protocol.value}")
        lines.append("#include <IRremote.hpp>")
        lines.append("")
        lines.append("#include <Control_Surface.h>")
        if display.enabled:
            if display.family is DisplayFamily.OLED:
                lines.append("#include <U8g2lib.h>")
            else:
                lines.append("#include <LiquidCrystal_I2C.h>")
            if display.split_layout:
                lines.append("")
                lines.append("#define DECK_SPLIT_LAYOUT")
        lines.append("")
        lines.append("USBMIDI_Interface midi;")
        lines.append("")
        lines.append("void dispatchIr(decode_type_t protocol, uint16_t command);")
        lines.append("")

    # ------------------------------------------------------------------
    # Declarations
    # ------------------------------------------------------------------

    def _emit_multiplexers(
        self, lines: list[str], project: ControllerProject, registry: IdentifierRegistry
    ) -> dict[str, str]:
        idents: dict[str, str] = {}
        if not project.multiplexers:
            return idents

        lines.append("// --- Multiplexers ---")
        for mux in project.multiplexers:
            ident = registry.claim(mux.name, f"mux_{mux.id}")
            idents[mux.id] = ident
            pins = mux.address_pins[: mux.address_bits]
            lines.append(f"{mux.chip} {ident} {{{mux.signal_pin}, {{{_join(pins)}}}}};")
        lines.append("")
        return idents

    def _emit_displays(
        self, lines: list[str], project: ControllerProject, registry: IdentifierRegistry
    ) -> list[str]:
        display = project.config.display
        if not display.enabled:
            return []

        lines.append("// --- Display ---")
        idents = []
        for number, bus in enumerate(display.buses, start=1):
            ident = registry.claim(f"display{number}", f"display{number}")
            idents.append(ident)
            lines.append(self._display_declaration(display.type, ident, bus, secondary=number == 2))
        lines.append("")

        if display.family is DisplayFamily.OLED:
            self._emit_oled_renderer(lines)
        else:
            self._emit_lcd_renderer(lines, display.type)

        lines.append("void updateDisplay(int channel, const char* msg) {")
        lines.append("#ifdef DECK_SPLIT_LAYOUT")
        lines.append("  if (channel == 1) strncpy(deck1Msg, msg, sizeof(deck1Msg) - 1);")
        lines.append("  else if (channel == 2) strncpy(deck2Msg, msg, sizeof(deck2Msg) - 1);")
        lines.append("#endif")
        for ident in idents:
            lines.append(f"  renderDisplay({ident}, msg);")
        lines.append("}")
        lines.append("")
        return idents

    def _display_declaration(
        self, display_type: DisplayType, ident: str, bus: DisplayBus, secondary: bool
    ) -> str:
        if display_type.family is DisplayFamily.OLED:
            bus_suffix = "_2ND_HW_I2C" if secondary else "_HW_I2C"
            return f"{_OLED_CLASSES[display_type]}{bus_suffix} {ident}(U8G2_R0, U8X8_PIN_NONE);"

        columns, rows = display_type.lcd_geometry
        return f"LiquidCrystal_I2C {ident}({bus.address}, {columns}, {rows});"

    def _emit_deck_buffers(self, lines: list[str]) -> None:
        lines.append("#ifdef DECK_SPLIT_LAYOUT")
        lines.append('char deck1Msg[20] = "Ready";')
        lines.append('char deck2Msg[20] = "Ready";')
        lines.append("#endif")
        lines.append("")

    def _emit_oled_renderer(self, lines: list[str]) -> None:
        self._emit_deck_buffers(lines)
        lines.append("void renderDisplay(U8G2 &oled, const char* msg) {")
        lines.append("  oled.clearBuffer();")
        lines.append("  oled.setFont(u8g2_font_ncenB08_tr);")
        lines.append("#ifdef DECK_SPLIT_LAYOUT")
        lines.append('  oled.drawStr(0, 10, "DECK 1");')
        lines.append('  oled.drawStr(66, 10, "DECK 2");')
        lines.append("  oled.drawHLine(0, 12, 128);")
        lines.append("  oled.drawVLine(63, 0, 64);")
        lines.append("  oled.setFont(u8g2_font_6x10_tf);")
        lines.append("  oled.drawStr(0, 30, deck1Msg);")
        lines.append("  oled.drawStr(66, 30, deck2Msg);")
        lines.append("#else")
        lines.append('  oled.drawStr(0, 10, "MIDI STATUS");')
        lines.append("  oled.drawHLine(0, 12, 128);")
        lines.append("  oled.setFont(u8g2_font_6x10_tf);")
        lines.append("  oled.drawStr(0, 30, msg);")
        lines.append("#endif")
        lines.append("  oled.sendBuffer();")
        lines.append("}")
        lines.append("")

    def _emit_lcd_renderer(self, lines: list[str], display_type: DisplayType) -> None:
        columns, _ = display_type.lcd_geometry
        half = columns // 2

        self._emit_deck_buffers(lines)
        lines.append("void renderDisplay(LiquidCrystal_I2C &lcd, const char* msg) {")
        lines.append(f"  char buf[{columns + 1}];")
        lines.append("#ifdef DECK_SPLIT_LAYOUT")
        lines.append("  lcd.setCursor(0, 0);")
        lines.append(f'  snprintf(buf, sizeof(buf), "%-{half}s%-{half}s", "Deck 1", "Deck 2");')
        lines.append("  lcd.print(buf);")
        lines.append("  lcd.setCursor(0, 1);")
        lines.append(
            f'  snprintf(buf, sizeof(buf), "%-{half}.{half}s%-{half}.{half}s", deck1Msg, deck2Msg);'
        )
        lines.append("  lcd.print(buf);")
        lines.append("#else")
        lines.append("  lcd.setCursor(0, 0);")
        lines.append(f'  snprintf(buf, sizeof(buf), "%-{columns}s", "MIDI STATUS");')
        lines.append("  lcd.print(buf);")
        lines.append("  lcd.setCursor(0, 1);")
        lines.append(f'  snprintf(buf, sizeof(buf), "%-{columns}.{columns}s", msg);')
        lines.append("  lcd.print(buf);")
        lines.append("#endif")
        lines.append("}")
        lines.append("")

    def _emit_faders(
        self,
        lines: list[str],
        project: ControllerProject,
        registry: IdentifierRegistry,
        mux_idents: dict[str, str],
    ) -> None:
        if not project.faders and not project.mux_channels:
            return

        lines.append("// --- Faders ---")
        for fader in project.faders:
            ident = registry.claim(fader.name, f"pot_{fader.id}")
            lines.append(
                f"CCPotentiometer {ident} {{{fader.pin}, {{{fader.cc_number}, Channel_{fader.channel}}}}};"
            )

        for channel in project.mux_channels:
            mux = project.find_multiplexer(channel.mux_id)
            if mux is None:
                logger.warning(
                    f"Skipping multiplexer channel {channel.id}: unknown multiplexer {channel.mux_id}"
                )
                continue
            if channel.channel_index >= mux.arity:
                logger.warning(
                    f"Skipping multiplexer channel {channel.id}: index {channel.channel_index} "
                    f"exceeds {mux.arity}-channel {mux.name}"
                )
                continue

            mux_ident = mux_idents[mux.id]
            ident = registry.claim(f"{mux_ident}_ch{channel.channel_index}", f"pot_{channel.id}")
            address = f"{{{channel.number}, Channel_{channel.midi_channel}}}"
            pin = f"{mux_ident}.pin({channel.channel_index})"
            if channel.mode is MuxMode.ANALOG:
                lines.append(f"CCPotentiometer {ident} {{{pin}, {address}}};")
            else:
                lines.append(f"{_button_class(channel.midi_type)} {ident} {{{pin}, {address}}};")
        lines.append("")

    def _emit_encoders(
        self, lines: list[str], project: ControllerProject, registry: IdentifierRegistry
    ) -> None:
        if not project.encoders:
            return

        lines.append("// --- Encoders ---")
        for encoder in project.encoders:
            ident = registry.claim(encoder.name, f"encoder_{encoder.id}")
            lines.append(
                f"CCRotaryEncoder {ident} {{ {{{encoder.pin_a}, {encoder.pin_b}}}, "
                f"{{{encoder.cc_number}, Channel_{encoder.channel}}}, "
                f"{encoder_speed(encoder.multiplier)} }};"
            )
            if encoder.has_button:
                button_ident = registry.claim(f"{ident}_btn", f"encoder_{encoder.id}_btn")
                lines.append(
                    f"{_button_class(encoder.button_midi_type)} {button_ident} "
                    f"{{{encoder.pin_button}, {{{encoder.button_data1}, "
                    f"Channel_{encoder.effective_button_channel}}}}};"
                )
        lines.append("")

    def _emit_buttons(
        self, lines: list[str], project: ControllerProject, registry: IdentifierRegistry
    ) -> None:
        if not project.buttons:
            return

        lines.append("// --- Buttons ---")
        for button in project.buttons:
            ident = registry.claim(button.name, f"btn_{button.id}")
            lines.append(
                f"{_button_class(button.midi_type)} {ident} "
                f"{{{button.pin}, {{{button.data1}, Channel_{button.channel}}}}};"
            )
        lines.append("")

    def _emit_keypads(
        self, lines: list[str], project: ControllerProject, registry: IdentifierRegistry
    ) -> None:
        if not project.keypads:
            return

        lines.append("// --- Keypads ---")
        for keypad in project.keypads:
            ident = registry.claim(keypad.name, f"keypad_{keypad.id}", derived=_KEYPAD_PARTS)
            matrix_class = "CCButtonMatrix" if keypad.mode is MidiType.CC else "NoteButtonMatrix"
            lines.append(f"const PinList<4> {ident}_rowPins = {{ {_join(keypad.row_pins)} }};")
            lines.append(f"const PinList<4> {ident}_colPins = {{ {_join(keypad.col_pins)} }};")
            lines.append(f"const AddressMatrix<4, 4> {ident}_addresses = {{{{")
            rows = [f"    {{ {_join(row)} }}" for row in keypad.values]
            lines.append(",\n".join(rows))
            lines.append("}};")
            lines.append(
                f"{matrix_class}<4, 4> {ident} = {{ {ident}_rowPins, {ident}_colPins, "
                f"{ident}_addresses, Channel_{keypad.channel} }};"
            )
        lines.append("")

    # ------------------------------------------------------------------
    # setup / loop / dispatch
    # ------------------------------------------------------------------

    def _emit_setup(
        self, lines: list[str], project: ControllerProject, display_idents: list[str]
    ) -> None:
        config = project.config
        display = config.display

        lines.append("void setup() {")
        lines.append("  Serial.begin(115200);")
        lines.append("")
        lines.append("  // I2C")
        for wire, bus in zip(("Wire", "Wire1"), display.buses if display.enabled else [display.primary]):
            lines.append(f"  {wire}.setSDA({bus.sda});")
            lines.append(f"  {wire}.setSCL({bus.scl});")
            lines.append(f"  {wire}.begin();")

        if display.enabled:
            lines.append("")
            lines.append("  // Display")
            for ident, bus in zip(display_idents, display.buses):
                if display.family is DisplayFamily.OLED:
                    lines.append(f"  {ident}.setI2CAddress({bus.address} * 2);")
                    lines.append(f"  {ident}.begin();")
                    if display.inverted:
                        lines.append(f'  {ident}.sendF("c", 0xA7);')
                else:
                    lines.append(f"  {ident}.init();")
                    if display.inverted:
                        lines.append(f"  {ident}.noBacklight();")
                    else:
                        lines.append(f"  {ident}.backlight();")
                lines.append(f'  renderDisplay({ident}, "Ready");')

        feedback = "ENABLE_LED_FEEDBACK" if config.use_led_feedback else "DISABLE_LED_FEEDBACK"
        lines.append("")
        lines.append("  Control_Surface.begin();")
        lines.append(f"  IrReceiver.begin({config.ir_pin}, {feedback});")
        lines.append("")
        lines.append('  Serial.println(F("MIDI Controller Ready"));')
        lines.append("}")
        lines.append("")

    def _emit_loop(self, lines: list[str]) -> None:
        lines.append("void loop() {")
        lines.append("  Control_Surface.loop();")
        lines.append("")
        lines.append("  if (IrReceiver.decode()) {")
        lines.append("    if (!(IrReceiver.decodedIRData.flags & IRDATA_FLAGS_IS_REPEAT)) {")
        lines.append("      // Read by the learning mode of the host tool")
        lines.append('      Serial.print(F("Protocol: "));')
        lines.append("      Serial.print(getProtocolString(IrReceiver.decodedIRData.protocol));")
        lines.append('      Serial.print(F(" Code: 0x"));')
        lines.append("      Serial.println(IrReceiver.decodedIRData.command, HEX);")
        lines.append(
            "      dispatchIr(IrReceiver.decodedIRData.protocol, IrReceiver.decodedIRData.command);"
        )
        lines.append("    }")
        lines.append("    IrReceiver.resume();")
        lines.append("  }")
        lines.append("}")
        lines.append("")

    def _send_call(self, mapping: IrMapping) -> str:
        address = f"{{{mapping.data1}, Channel_{mapping.channel}}}"
        if mapping.midi_type is MidiType.PROGRAM_CHANGE:
            return f"midi.sendProgramChange({address});"
        return f"midi.{_SEND_CALLS[mapping.midi_type]}({address}, {mapping.data2});"

    def _emit_dispatch(self, lines: list[str], project: ControllerProject) -> None:
        display_enabled = project.config.display.enabled

        lines.append("void dispatchIr(decode_type_t protocol, uint16_t command) {")
        for mapping in project.ir_mappings:
            code = mapping.normalized_code
            if code is None:
                continue
            lines.append(
                f"  if (protocol == decode_type_t::{mapping.ir_protocol.value} && command == {code}) {{"
            )
            lines.append(f"    {self._send_call(mapping)}")
            if display_enabled:
                lines.append(
                    f"    updateDisplay({mapping.channel}, {_c_string(display_message(mapping))});"
                )
            lines.append("    return;")
            lines.append("  }")
        lines.append("}")
