"""
Wraps raw PCM audio from the synthesis API in a WAV container.
"""
import io
import wave
from typing import Optional

from app.config import PCM_SAMPLE_RATE, PCM_CHANNELS, PCM_SAMPLE_WIDTH
from app.models.job import AudioArtifact

WAV_MIME_TYPE = 'audio/wav'
WAV_HEADER_SIZE = 44

# Mime type prefixes the API uses for headerless linear PCM
_RAW_PCM_TYPES = ('audio/l16', 'audio/pcm')


def is_raw_pcm(mime_type: Optional[str]) -> bool:
    """True when the payload has no container and must be transcoded."""
    if not mime_type:
        return True
    return mime_type.strip().lower().startswith(_RAW_PCM_TYPES)


def pcm_to_wav(
    pcm: bytes,
    sample_rate: int = PCM_SAMPLE_RATE,
    channels: int = PCM_CHANNELS,
    sample_width: int = PCM_SAMPLE_WIDTH,
) -> bytes:
    """
    Build a canonical 44-byte-header WAV file around a PCM buffer.

    The payload is copied unmodified after the header, so the result is
    always exactly 44 + len(pcm) bytes.

    Raises:
        ValueError: if the buffer does not hold a whole number of frames
    """
    frame_size = channels * sample_width
    if len(pcm) % frame_size != 0:
        raise ValueError(f'Invalid PCM length: {len(pcm)} bytes is not a multiple of {frame_size}')

    out = io.BytesIO()
    with wave.open(out, 'wb') as wav:
        wav.setnchannels(channels)
        wav.setsampwidth(sample_width)
        wav.setframerate(sample_rate)
        wav.writeframes(pcm)
    return out.getvalue()


def to_artifact(payload: bytes, mime_type: Optional[str]) -> AudioArtifact:
    """
    Turn a synthesis payload into a playable artifact.

    Raw PCM is transcoded to WAV; anything already in a container
    is passed through with its reported type.
    """
    if is_raw_pcm(mime_type):
        return AudioArtifact(data=pcm_to_wav(payload), mime_type=WAV_MIME_TYPE)
    return AudioArtifact(data=bytes(payload), mime_type=mime_type.strip())


_EXTENSIONS = {
    'audio/wav': 'wav',
    'audio/x-wav': 'wav',
    'audio/mpeg': 'mp3',
    'audio/mp3': 'mp3',
    'audio/ogg': 'ogg',
    'audio/opus': 'opus',
    'audio/flac': 'flac',
}


def file_extension(mime_type: str) -> str:
    """File extension for an artifact's container type."""
    return _EXTENSIONS.get(mime_type.split(';')[0].strip().lower(), 'bin')
