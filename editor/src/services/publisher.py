"""
Artifact publisher.

Hands each new artifact to the registered consumers exactly once per
(raster serial, transform) pair. Consumers treat every delivery as replacing
the previous one.
"""

import logging

logger = logging.getLogger(__name__)


class ArtifactPublisher:
    """Delivers artifacts to listener callbacks, skipping repeats."""

    def __init__(self):
        self._listeners = []
        self._last_key = None
        self.last_artifact = None

    def add_listener(self, callback):
        """
        Register a consumer

        Args:
            callback: Function receiving the Artifact
        """
        if callback not in self._listeners:
            self._listeners.append(callback)

    def remove_listener(self, callback):
        """Remove a consumer"""
        if callback in self._listeners:
            self._listeners.remove(callback)

    def publish(self, artifact):
        """
        Deliver an artifact unless the same inputs were already published

        Returns:
            True if listeners were notified
        """
        if artifact is None:
            return False
        if artifact.key and artifact.key == self._last_key:
            logger.debug("Skipping duplicate artifact for %s", artifact.key)
            return False

        self._last_key = artifact.key
        self.last_artifact = artifact
        self._notify_listeners(artifact)
        return True

    def clear(self):
        """Forget the last published key so the next artifact is always delivered"""
        self._last_key = None
        self.last_artifact = None

    def _notify_listeners(self, artifact):
        for callback in list(self._listeners):
            try:
                callback(artifact)
            except Exception:
                logger.exception("Artifact listener %r failed", callback)
