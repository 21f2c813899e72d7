from models.ImageAnalysis import ANALYSIS_DEFAULTS
from schemas.vision import VisionSignals
from services.StyleClassifier import StyleClassifier, name_color


def classify(**kwargs):
    return StyleClassifier().classify(VisionSignals(**kwargs))


def test_defaults_when_nothing_matches():
    analysis = classify(caption="a thing", tags=["object"])
    for key, default in ANALYSIS_DEFAULTS.items():
        assert getattr(analysis, key) == default


def test_portrait_caption():
    analysis = classify(
        caption="A happy woman posing for a portrait on a sunny day",
        tags=["person", "woman", "outdoor"],
        image_type="photo",
        dominant_colors=["Blue", "White"],
        face_count=1,
    )
    assert analysis.type == "Photo"
    assert analysis.style == "Professional portrait photography"
    assert analysis.lighting == "Bright and well-lit scene"
    assert analysis.mood == "Cheerful and positive"
    assert analysis.colors == "Color palette featuring: Blue, White"
    assert analysis.person_description == "A single person facing the camera"
    assert analysis.faces == 1


def test_first_match_wins():
    analysis = classify(caption="a bright room with a dark corner, sad and dramatic")
    assert analysis.lighting == "Bright and well-lit scene"
    assert analysis.mood == "Moody and melancholic"


def test_illustration_type_drives_style_and_realism():
    analysis = classify(caption="a cat", image_type="clip art")
    assert analysis.type == "Illustration"
    assert analysis.style == "Digital illustration with clean lines"
    assert analysis.realism == "Medium realism - digital illustration"


def test_anime_and_render_types():
    assert classify(image_type="photo anime girl").type == "Anime"
    assert classify(image_type="3d render").realism == "Photorealistic 3D rendering"


def test_only_first_five_colors():
    analysis = classify(dominant_colors=["Red", "Green", "Blue", "Black", "White", "Grey"])
    assert analysis.colors == "Color palette featuring: Red, Green, Blue, Black, White"


def test_scene_descriptions():
    analysis = classify(
        caption="people walking down a city street",
        tags=["person", "street"],
        objects=["Bicycle", "car", "bicycle"],
        face_count=3,
    )
    assert analysis.person_description == "A group of 3 people"
    assert analysis.objects_description == "Visible objects: bicycle, car"
    assert analysis.environment_description == "Urban street environment"


def test_person_without_face():
    analysis = classify(tags=["man", "back"])
    assert analysis.person_description == "A person without a clearly visible face"
    assert classify(tags=["tree"]).person_description == "No people visible"


def test_classifier_is_deterministic():
    signals = VisionSignals(caption="close-up of a calm lake at golden hour", tags=["lake", "nature"],
                            dominant_colors=["Blue"], width=800, height=600)
    classifier = StyleClassifier()
    assert classifier.classify(signals) == classifier.classify(signals)


def test_dimensions_pass_through():
    analysis = classify(width=640, height=480)
    assert (analysis.image_width, analysis.image_height) == (640, 480)


def test_name_color():
    assert name_color(250, 250, 250) == "White"
    assert name_color(5, 5, 5) == "Black"
    assert name_color(30, 80, 210) == "Blue"
    assert name_color(210, 40, 35) == "Red"
