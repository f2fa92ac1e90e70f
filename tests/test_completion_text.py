"""
Unit tests for reply text extraction.

Run with: pytest tests/test_completion_text.py -v
"""

from pydantic import BaseModel

from support_chat.utils.completion_text import MAX_DEPTH, extract_reply_text


class TestKnownShapes:
    def test_chat_completion(self):
        completion = {"choices": [{"message": {"role": "assistant", "content": " Hello "}}]}
        assert extract_reply_text(completion) == "Hello"

    def test_streaming_delta(self):
        assert extract_reply_text({"choices": [{"delta": {"content": "chunk"}}]}) == "chunk"

    def test_legacy_text_completion(self):
        assert extract_reply_text({"choices": [{"text": "legacy"}]}) == "legacy"

    def test_top_level_message(self):
        assert extract_reply_text({"message": {"content": "direct"}}) == "direct"

    def test_sdk_model_is_dumped(self):
        class Message(BaseModel):
            content: str

        class Choice(BaseModel):
            message: Message

        class Completion(BaseModel):
            choices: list[Choice]

        completion = Completion(choices=[Choice(message=Message(content="from model"))])
        assert extract_reply_text(completion) == "from model"

    def test_earlier_path_wins(self):
        completion = {"choices": [{"message": {"content": "first"}, "text": "second"}]}
        assert extract_reply_text(completion) == "first"


class TestFallbackWalk:
    def test_strings_are_collected_and_joined(self):
        completion = {"result": {"parts": ["Your order", "  has   shipped "]}}
        assert extract_reply_text(completion) == "Your order has shipped"

    def test_binary_keys_are_skipped(self):
        completion = {"data": {"blob": "xxxx", "binary": "yyyy", "note": "kept"}}
        assert extract_reply_text(completion) == "kept"

    def test_deep_nesting_is_bounded(self):
        nested = "too deep"
        for _ in range(MAX_DEPTH + 5):
            nested = {"level": nested}
        assert extract_reply_text(nested) == ""


class TestNothingUsable:
    def test_none(self):
        assert extract_reply_text(None) == ""

    def test_empty_content(self):
        assert extract_reply_text({"choices": [{"message": {"content": "   "}}]}) == ""

    def test_numbers_only(self):
        assert extract_reply_text({"usage": {"total_tokens": 12}}) == ""
