import pytest

from models import ImageAnalysis
from services.PromptService import PromptService, ar_from_dims
from tests.conftest import SAMPLE_ANALYSIS


@pytest.fixture
def prompt_service(template_parser):
    return PromptService(template_parser=template_parser)


@pytest.mark.parametrize("width,height,expected", [
    (1080, 1920, "9:16"),
    (1000, 1000, "1:1"),
    (1920, 1080, "16:9"),
    (4000, 3000, "4:3"),
    (3000, 4000, "3:4"),
    (1200, 1500, "4:5"),
    (1250, 1000, "5:4"),
    (1010, 1000, "1:1"),
])
def test_ar_snaps_to_common_ratios(width, height, expected):
    assert ar_from_dims(width, height) == expected


@pytest.mark.parametrize("width,height", [(0, 500), (500, 0), (-10, 20), (None, 100)])
def test_ar_guard_returns_square(width, height):
    assert ar_from_dims(width, height) == "1:1"


def test_ar_falls_back_to_reduced_fraction():
    assert ar_from_dims(1000, 300) == "10:3"
    assert ar_from_dims(2100, 1000) == "21:10"


def test_render_lowercases_fields(prompt_service):
    prompt = prompt_service.render(SAMPLE_ANALYSIS)
    assert prompt.startswith("Create a photo in studio photography style, featuring [USER FACE]")
    assert "golden hour warm lighting" in prompt
    assert "Golden Hour" not in prompt
    assert "$" not in prompt


def test_render_uses_detailed_template_with_scene_details(prompt_service):
    analysis = SAMPLE_ANALYSIS.model_copy(update={
        "person_description": "A Single person facing the camera",
        "environment_description": "Urban street environment",
        "objects_description": "Visible objects: bicycle",
    })
    prompt = prompt_service.render(analysis)
    assert "Subject: a single person facing the camera." in prompt
    assert "Scene: Urban street environment. Visible objects: bicycle." in prompt
    assert "$" not in prompt


def test_finalize_appends_ar_and_face_lock(prompt_service):
    prompt = prompt_service.finalize("A moody portrait.", 1080, 1920)
    face_lock = prompt_service.face_lock
    assert prompt.endswith(face_lock)
    assert prompt.count(face_lock) == 1
    assert "--ar 9:16" in prompt
    assert prompt.index("--ar 9:16") < prompt.index(face_lock)


def test_finalize_does_not_duplicate_face_lock(prompt_service):
    face_lock = prompt_service.face_lock
    upstream = f"{face_lock}\nA moody portrait. {face_lock} --ar 1:1"
    prompt = prompt_service.finalize(upstream, 1920, 1080)
    assert prompt.count(face_lock) == 1
    assert prompt.endswith(face_lock)
    assert "--ar 1:1" not in prompt
    assert prompt.count("--ar") == 1
    assert "--ar 16:9" in prompt


def test_finalize_without_size_skips_ar(prompt_service):
    prompt = prompt_service.finalize("A moody portrait.")
    assert "--ar" not in prompt
    assert prompt.startswith("A moody portrait.")
    assert prompt.endswith(prompt_service.face_lock)


def test_render_accepts_minimal_analysis(prompt_service):
    analysis = ImageAnalysis(type="Anime", style="Anime-style artwork", lighting="Soft",
                             composition="Wide", colors="Pastel", mood="Calm", realism="Stylized")
    assert "anime-style artwork" in prompt_service.render(analysis)


def test_render_does_not_double_periods(prompt_service):
    analysis = SAMPLE_ANALYSIS.model_copy(update={
        "lighting": "Soft window light.",
        "person_description": "A woman smiling.",
        "environment_description": "A quiet cafe terrace. ",
        "objects_description": "Coffee cups and a newspaper.",
    })
    prompt = prompt_service.render(analysis)
    assert "Scene: A quiet cafe terrace. Coffee cups and a newspaper." in prompt
    assert "Subject: a woman smiling." in prompt
    assert "Lighting: soft window light." in prompt
    assert ".." not in prompt
