import pytest

from stores.llm.LLMExceptions import EmptyResponseError, InvalidJSONError, InvalidResponseStructureError
from stores.llm.parsers import parse_analysis_reply, parse_prompt_reply


def test_parses_fenced_json():
    reply = '```json\n{"type": "Anime", "style": "Anime-style artwork", "personDescription": "A girl waving"}\n```'
    analysis = parse_analysis_reply(reply, "OpenAI")
    assert analysis.type == "Anime"
    assert analysis.style == "Anime-style artwork"
    assert analysis.person_description == "A girl waving"
    assert analysis.lighting == "Balanced natural lighting"


def test_parses_object_inside_prose():
    analysis = parse_analysis_reply('Sure! {"mood": "Dramatic and intense"} Hope that helps.', "OpenAI")
    assert analysis.mood == "Dramatic and intense"


def test_lists_are_joined_and_collected():
    reply = '{"colors": ["teal", "orange"], "tags": ["beach", " sunset "], "objects": "umbrella, towel"}'
    analysis = parse_analysis_reply(reply, "OpenAI")
    assert analysis.colors == "teal, orange"
    assert analysis.tags == ["beach", "sunset"]
    assert analysis.objects == ["umbrella", "towel"]


def test_empty_reply():
    with pytest.raises(EmptyResponseError):
        parse_analysis_reply("   ", "OpenAI")


def test_invalid_json():
    with pytest.raises(InvalidJSONError) as excinfo:
        parse_analysis_reply("this is not json", "OpenAI")
    assert "Invalid JSON" in str(excinfo.value)


def test_non_object_json():
    with pytest.raises(InvalidResponseStructureError):
        parse_analysis_reply("[1, 2, 3]", "OpenAI")


def test_prompt_reply_is_cleaned():
    assert parse_prompt_reply('"A cinematic portrait of [USER FACE]."', "OpenAI") == "A cinematic portrait of [USER FACE]."
    assert parse_prompt_reply("```\nA prompt\n```", "OpenAI") == "A prompt"


def test_empty_prompt_reply():
    with pytest.raises(EmptyResponseError):
        parse_prompt_reply('""', "OpenAI")
