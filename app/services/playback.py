"""
Keeps at most one rendered audio artifact playing at a time.
"""
import logging
from typing import Dict, List, Optional

logger = logging.getLogger(__name__)


class PlaybackCoordinator:
    """
    Tracks which rendered artifacts are playing.

    Starting playback of one artifact pauses every other playing artifact
    (last writer wins). This has no effect on generation.
    """

    def __init__(self):
        self._playing: Dict[str, bool] = {}

    def register(self, artifact_id: str):
        """Make an artifact available for playback. Registering twice is a no-op."""
        self._playing.setdefault(artifact_id, False)

    def unregister(self, artifact_id: str):
        self._playing.pop(artifact_id, None)

    def is_registered(self, artifact_id: str) -> bool:
        return artifact_id in self._playing

    def play_started(self, artifact_id: str) -> List[str]:
        """
        Record that an artifact started playing.

        Returns:
            Ids of the artifacts that were paused as a result

        Raises:
            KeyError: if the artifact is not registered
        """
        if artifact_id not in self._playing:
            raise KeyError(artifact_id)

        paused = [
            other for other, playing in self._playing.items()
            if playing and other != artifact_id
        ]
        for other in paused:
            self._playing[other] = False
        self._playing[artifact_id] = True

        if paused:
            logger.debug('Playback of %s paused %s', artifact_id, ', '.join(paused))
        return paused

    def play_stopped(self, artifact_id: str):
        if artifact_id not in self._playing:
            raise KeyError(artifact_id)
        self._playing[artifact_id] = False

    def playing(self) -> Optional[str]:
        """The artifact currently playing, if any."""
        for artifact_id, playing in self._playing.items():
            if playing:
                return artifact_id
        return None

    def registered(self) -> List[str]:
        return list(self._playing)


# Singleton instance
_playback_coordinator: Optional[PlaybackCoordinator] = None


def get_playback_coordinator() -> PlaybackCoordinator:
    """Get the playback coordinator singleton instance."""
    global _playback_coordinator
    if _playback_coordinator is None:
        _playback_coordinator = PlaybackCoordinator()
    return _playback_coordinator


def reset_playback_coordinator():
    """Reset the playback coordinator singleton (for testing)."""
    global _playback_coordinator
    _playback_coordinator = None
