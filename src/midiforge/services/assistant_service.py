"""Advisory assistant answering questions about the generated firmware."""

import logging

import google.generativeai as genai

logger = logging.getLogger(__name__)

NO_KEY_MESSAGE = (
    "The assistant is not configured. Set GEMINI_API_KEY or run "
    "'midiforge config set assistant_api_key <key>'."
)
FAILURE_MESSAGE = "The assistant could not be reached. Please check your API key and network."
EMPTY_MESSAGE = "Sorry, the assistant did not return an answer."

PROMPT_TEMPLATE = """You are an expert in Arduino, C++ and MIDI.

The user is building a MIDI controller on an RP2040 (Raspberry Pi Pico)
that turns infrared remote signals and physical controls into USB-MIDI
messages, using the "Control Surface" and "IRremote" libraries.

This is the currently generated sketch:
```cpp
{context}
```

User question: "{question}"

Answer briefly and precisely. If code changes are needed, explain them."""


class AssistantService:
    """
    Thin adapter over the Gemini API.

    ``ask`` never raises: a missing key yields a fixed advisory string and
    any API failure is logged and turned into a short message.
    """

    def __init__(self, api_key: str | None, model_name: str = "gemini-2.5-flash"):
        self._api_key = api_key
        self._model_name = model_name

    @property
    def is_configured(self) -> bool:
        return bool(self._api_key)

    def build_prompt(self, question: str, context_source: str) -> str:
        return PROMPT_TEMPLATE.format(context=context_source, question=question)

    def ask(self, question: str, context_source: str) -> str:
        """Ask a question with the generated sketch as context."""
        if not self.is_configured:
            logger.info("Assistant called without an API key")
            return NO_KEY_MESSAGE

        try:
            genai.configure(api_key=self._api_key)
            model = genai.GenerativeModel(self._model_name)
            response = model.generate_content(self.build_prompt(question, context_source))
            text = response.text
        except Exception as e:
            logger.error(f"Assistant request failed: {e}", exc_info=True)
            return FAILURE_MESSAGE

        return text.strip() if text and text.strip() else EMPTY_MESSAGE
