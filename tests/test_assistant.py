"""Tests for the assistant adapter."""

from unittest.mock import Mock, patch

import pytest

from midiforge.services import AssistantService
from midiforge.services.assistant_service import EMPTY_MESSAGE, FAILURE_MESSAGE, NO_KEY_MESSAGE


class TestAssistantService:
    """ask() never raises."""

    @pytest.mark.unit
    def test_without_key(self):
        with patch("midiforge.services.assistant_service.genai") as genai:
            assert AssistantService(api_key=None).ask("why?", "void setup() {}") == NO_KEY_MESSAGE
            genai.configure.assert_not_called()

    @pytest.mark.unit
    def test_answer(self):
        with patch("midiforge.services.assistant_service.genai") as genai:
            genai.GenerativeModel.return_value.generate_content.return_value = Mock(text=" Use pin 16. ")
            service = AssistantService(api_key="key", model_name="test-model")

            assert service.ask("Which pin?", "SKETCH") == "Use pin 16."

            genai.configure.assert_called_once_with(api_key="key")
            genai.GenerativeModel.assert_called_once_with("test-model")
            prompt = genai.GenerativeModel.return_value.generate_content.call_args[0][0]
            assert "SKETCH" in prompt
            assert "Which pin?" in prompt

    @pytest.mark.unit
    def test_failure_becomes_message(self):
        with patch("midiforge.services.assistant_service.genai") as genai:
            genai.GenerativeModel.return_value.generate_content.side_effect = RuntimeError("403")
            assert AssistantService(api_key="bad").ask("q", "c") == FAILURE_MESSAGE

    @pytest.mark.unit
    def test_empty_answer(self):
        with patch("midiforge.services.assistant_service.genai") as genai:
            genai.GenerativeModel.return_value.generate_content.return_value = Mock(text="")
            assert AssistantService(api_key="key").ask("q", "c") == EMPTY_MESSAGE
