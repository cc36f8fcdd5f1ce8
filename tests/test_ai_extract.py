import sys
from pathlib import Path
from types import SimpleNamespace

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from app.ai.extract import extract_output_text  # noqa: E402


def test_prefers_output_text_shortcut() -> None:
    response = SimpleNamespace(
        output_text='{"summary": "a"}',
        output=[SimpleNamespace(content=[SimpleNamespace(text='{"summary": "b"}')])],
    )
    assert extract_output_text(response) == '{"summary": "a"}'


def test_reads_responses_output_items() -> None:
    response = {
        "output": [
            {"type": "reasoning", "content": []},
            {"type": "message", "content": [{"type": "output_text", "text": '{"summary": '}, {"text": '"x"}'}]},
        ]
    }
    assert extract_output_text(response) == '{"summary": "x"}'


def test_reads_chat_completion_content() -> None:
    response = SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content='{"issues": []}'))])
    assert extract_output_text(response) == '{"issues": []}'


def test_falls_through_empty_strategies() -> None:
    response = SimpleNamespace(
        output_text="",
        output=None,
        choices=[SimpleNamespace(message=SimpleNamespace(content="  ", parsed={"summary": "parsed"}))],
    )
    assert extract_output_text(response) == '{"summary": "parsed"}'


def test_returns_empty_string_when_nothing_found() -> None:
    assert extract_output_text(SimpleNamespace(choices=[])) == ""
    assert extract_output_text({}) == ""
    assert extract_output_text(None) == ""
