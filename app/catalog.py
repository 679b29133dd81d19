"""
Fixed catalogs of voices, models and style presets offered by the synthesis API.
"""
from typing import List, Optional


class Voice:
    """Represents a prebuilt voice."""
    def __init__(self, name: str, gender: str):
        self.name = name
        self.gender = gender


class Model:
    """Represents a speech synthesis model."""
    def __init__(self, id: str, label: str, description: str):
        self.id = id
        self.label = label
        self.description = description


class StylePreset:
    """A short style tag. An empty tag means no directive is sent."""
    def __init__(self, label: str, tag: str):
        self.label = label
        self.tag = tag


VOICES: List[Voice] = [
    # Female voices
    Voice('Achernar', 'female'),
    Voice('Aoede', 'female'),
    Voice('Autonoe', 'female'),
    Voice('Callirrhoe', 'female'),
    Voice('Despina', 'female'),
    Voice('Erinome', 'female'),
    Voice('Gacrux', 'female'),
    Voice('Kore', 'female'),
    Voice('Laomedeia', 'female'),
    Voice('Leda', 'female'),
    Voice('Pulcherrima', 'female'),
    Voice('Sulafat', 'female'),
    Voice('Vindemiatrix', 'female'),
    Voice('Zephyr', 'female'),
    # Male voices
    Voice('Achird', 'male'),
    Voice('Algenib', 'male'),
    Voice('Algieba', 'male'),
    Voice('Alnilam', 'male'),
    Voice('Charon', 'male'),
    Voice('Enceladus', 'male'),
    Voice('Fenrir', 'male'),
    Voice('Iapetus', 'male'),
    Voice('Orus', 'male'),
    Voice('Puck', 'male'),
    Voice('Rasalgethi', 'male'),
    Voice('Sadachbia', 'male'),
    Voice('Sadaltager', 'male'),
    Voice('Schedar', 'male'),
    Voice('Umbriel', 'male'),
]

MODELS: List[Model] = [
    Model('gemini-2.5-flash-tts', 'Flash', 'Low latency, fast generation'),
    Model('gemini-2.5-flash-lite-preview-tts', 'Flash Lite', 'Lightweight preview model'),
    Model('gemini-2.5-pro-tts', 'Pro', 'High control, best for long-form'),
]

DEFAULT_MODEL = MODELS[0].id

STYLE_PRESETS: List[StylePreset] = [
    StylePreset('Neutral', ''),
    StylePreset('Whispering', '[whispering]'),
    StylePreset('Sarcastic', '[sarcasm]'),
    StylePreset('Laughing', '[laughing]'),
    StylePreset('Shouting', '[shouting]'),
    StylePreset('Robotic', '[robotic]'),
    StylePreset('Extremely Fast', '[extremely fast]'),
]

CUSTOM_STYLE_LABEL = 'Custom'

_VOICES_BY_NAME = {v.name: v for v in VOICES}
_MODELS_BY_ID = {m.id: m for m in MODELS}
_PRESETS_BY_TAG = {p.tag: p for p in STYLE_PRESETS}


def get_voice(name: str) -> Optional[Voice]:
    return _VOICES_BY_NAME.get(name)


def get_voices(gender: Optional[str] = None) -> List[Voice]:
    """Get all voices, optionally filtered by gender."""
    if gender is None:
        return list(VOICES)
    return [v for v in VOICES if v.gender == gender]


def get_model(model_id: str) -> Optional[Model]:
    return _MODELS_BY_ID.get(model_id)


def model_label(model_id: str) -> str:
    """Display label for a model id, falling back to the id itself."""
    model = get_model(model_id)
    return model.label if model else model_id


def style_label(style_tag: Optional[str], custom_style: Optional[str] = None) -> str:
    """
    Display label for the style a job was generated with.

    A custom style always wins over the tag, matching how the directive
    is resolved for synthesis.
    """
    if custom_style and custom_style.strip():
        return CUSTOM_STYLE_LABEL
    preset = _PRESETS_BY_TAG.get(style_tag or '')
    if preset:
        return preset.label
    return style_tag or ''
