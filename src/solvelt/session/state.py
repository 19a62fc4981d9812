"""Explicit state machine for a single-screen explain session.

The presentation layer subscribes to state snapshots instead of mutating
fields directly. All transitions run on the event loop that awaits
:meth:`ExplainSession.submit`, and listeners are called synchronously there.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, replace
from enum import Enum
from typing import Protocol

from PIL import Image

from solvelt.explain.encoding import load_image
from solvelt.explain.types import ExplanationResult

logger = logging.getLogger(__name__)


class Phase(Enum):
    """Session phase."""

    IDLE = "idle"
    IMAGE_SELECTED = "image_selected"
    REQUESTING = "requesting"
    DISPLAYED = "displayed"
    FAILED = "failed"


@dataclass(slots=True, frozen=True)
class SessionState:
    """Snapshot of everything the presentation layer renders."""

    phase: Phase = Phase.IDLE
    image: Image.Image | None = None
    result_text: str = ""

    @property
    def is_loading(self) -> bool:
        return self.phase is Phase.REQUESTING

    @property
    def can_submit(self) -> bool:
        return self.image is not None and not self.is_loading


class Explainer(Protocol):
    """Anything that can turn an image into an explanation result."""

    async def run(self, image: Image.Image) -> ExplanationResult: ...


Listener = Callable[[SessionState], None]


class ExplainSession:
    """Owns the selected image, the result text and the loading flag.

    Each pick bumps a generation counter. When ``drop_stale_responses`` is
    set, a result for an image that was replaced mid-flight is discarded
    instead of overwriting the newer selection.
    """

    def __init__(
        self,
        explainer: Explainer,
        *,
        drop_stale_responses: bool = True,
    ) -> None:
        self._explainer = explainer
        self._drop_stale = drop_stale_responses
        self._state = SessionState()
        self._generation = 0
        self._listeners: list[Listener] = []

    @property
    def state(self) -> SessionState:
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener; returns a callable that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _set_state(self, state: SessionState) -> None:
        self._state = state
        for listener in list(self._listeners):
            listener(state)

    def pick(self, image: Image.Image) -> None:
        """Select a new image, clearing any previous result."""
        self._generation += 1
        phase = Phase.REQUESTING if self._state.is_loading else Phase.IMAGE_SELECTED
        logger.info("Image selected (%dx%d)", image.width, image.height)
        self._set_state(SessionState(phase=phase, image=image, result_text=""))

    def pick_bytes(self, data: bytes) -> bool:
        """Decode raw image bytes and select them.

        Failures are logged only; the current selection is left untouched.

        Returns:
            True if the image was decoded and selected.
        """
        try:
            image = load_image(data)
        except (OSError, ValueError, Image.DecompressionBombError) as e:
            logger.warning("Error loading image: %s", e)
            return False
        self.pick(image)
        return True

    async def submit(self) -> SessionState:
        """Request an explanation for the selected image.

        No-op when nothing is selected or a request is already in flight.
        If the explainer raises or the await is cancelled, the session goes
        back to ``IMAGE_SELECTED`` before the exception propagates.

        Returns:
            The state after the request completes (or the unchanged state).
        """
        state = self._state
        if not state.can_submit:
            logger.debug("Submit ignored in phase %s", state.phase.value)
            return state
        assert state.image is not None

        generation = self._generation
        self._set_state(replace(state, phase=Phase.REQUESTING, result_text=""))

        try:
            result = await self._explainer.run(state.image)
        except BaseException:
            # Cancelled or raised: leave the selection submittable again
            logger.info("Explanation request aborted")
            self._set_state(replace(self._state, phase=Phase.IMAGE_SELECTED))
            raise

        if generation != self._generation:
            if self._drop_stale:
                logger.info("Dropping explanation for a replaced image")
                self._set_state(replace(self._state, phase=Phase.IMAGE_SELECTED))
                return self._state
            logger.info("Applying explanation for a replaced image")

        if result.is_error:
            self.failed(result.text)
        else:
            self.succeeded(result.text)
        return self._state

    def succeeded(self, text: str) -> None:
        self._set_state(replace(self._state, phase=Phase.DISPLAYED, result_text=text))

    def failed(self, message: str) -> None:
        self._set_state(replace(self._state, phase=Phase.FAILED, result_text=message))
