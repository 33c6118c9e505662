"""
Input/Output Devices
=====================
Gamepads, rumble and the hit sound, through pygame.

Every device is optional. When pygame cannot open a subsystem (no audio
device, no joystick support, headless machine) the matching feature
turns into a no-op and the game keeps running.
"""

import array
import logging
import math
import os
from typing import Dict, Iterable, Optional, Tuple

os.environ.setdefault('PYGAME_HIDE_SUPPORT_PROMPT', '1')

import pygame  # noqa: E402

from .components import PlaySound, Rumble

logger = logging.getLogger(__name__)

BEEP_FREQUENCY = 660  # Hz
BEEP_DURATION = 0.08  # Seconds
MIXER_RATE = 22050

# pygame reports stick Y growing downwards; the world's +y is up
AXIS_X = 0
AXIS_Y = 1


def _beep_samples(rate: int, channels: int) -> bytes:
    """Signed 16-bit square wave with a short linear fade-out."""
    count = int(rate * BEEP_DURATION)
    samples = array.array('h')
    for i in range(count):
        level = 6000 * (1.0 - i / count)
        value = int(level if math.sin(2 * math.pi * BEEP_FREQUENCY * i / rate) >= 0 else -level)
        samples.extend([value] * channels)
    return samples.tobytes()


class DeviceHub:
    """Owns the pygame subsystems the game uses."""

    def __init__(self):
        self.joysticks: Dict[int, 'pygame.joystick.JoystickType'] = {}
        self.sound: Optional['pygame.mixer.Sound'] = None
        self._video = False
        self._joystick = False

    def open(self) -> 'DeviceHub':
        """Start whichever subsystems this machine supports."""
        # Joystick state is refreshed by the event pump, which needs video
        os.environ.setdefault('SDL_VIDEODRIVER', 'dummy')

        try:
            pygame.display.init()
            self._video = True
            pygame.joystick.init()
            self._joystick = True
        except pygame.error as exc:
            logger.debug('gamepads unavailable: %s', exc)

        try:
            pygame.mixer.init(frequency=MIXER_RATE, size=-16, channels=1)
            rate, _, channels = pygame.mixer.get_init()
            self.sound = pygame.mixer.Sound(buffer=_beep_samples(rate, channels))
        except (pygame.error, OSError, TypeError) as exc:
            logger.debug('audio unavailable: %s', exc)
            self.sound = None

        self.refresh_gamepads()
        return self

    def close(self) -> None:
        pygame.quit()

    # -------------------------------------------------------------------------
    # Gamepads
    # -------------------------------------------------------------------------

    def refresh_gamepads(self) -> None:
        """Re-scan connected pads when the count changed."""
        if not self._joystick:
            return
        try:
            count = pygame.joystick.get_count()
            if count == len(self.joysticks):
                return
            joysticks = {}
            for index in range(count):
                js = pygame.joystick.Joystick(index)
                if not js.get_init():
                    js.init()
                joysticks[js.get_instance_id()] = js
        except pygame.error as exc:
            logger.debug('gamepad scan failed: %s', exc)
            return
        logger.info('gamepads connected: %d', len(joysticks))
        self.joysticks = joysticks

    def poll_gamepads(self) -> Dict[int, Tuple[float, float]]:
        """
        Left-stick axes of every connected pad, y flipped to point up.

        Pads without a readable stick still report (0.0, 0.0) so they
        receive rumble.
        """
        if self._video:
            try:
                pygame.event.pump()
            except pygame.error as exc:
                logger.debug('event pump failed: %s', exc)
        self.refresh_gamepads()

        axes = {}
        for gamepad, js in self.joysticks.items():
            axes[gamepad] = (0.0, 0.0)
            try:
                if js.get_numaxes() >= 2:
                    axes[gamepad] = (float(js.get_axis(AXIS_X)), -float(js.get_axis(AXIS_Y)))
            except pygame.error as exc:
                logger.debug('reading gamepad %d failed: %s', gamepad, exc)
        return axes

    # -------------------------------------------------------------------------
    # Output intents
    # -------------------------------------------------------------------------

    def play_hit_sound(self) -> None:
        if self.sound is None:
            return
        try:
            self.sound.play()
        except pygame.error as exc:
            logger.debug('hit sound failed: %s', exc)

    def rumble(self, request: Rumble) -> None:
        js = self.joysticks.get(request.gamepad)
        if js is None:
            return
        try:
            js.rumble(request.intensity, request.intensity, int(request.duration * 1000))
        except pygame.error as exc:
            logger.debug('rumble failed on gamepad %d: %s', request.gamepad, exc)

    def dispatch(self, intents: Iterable[object]) -> None:
        """Carry out the sound and rumble intents from one tick."""
        for intent in intents:
            if isinstance(intent, PlaySound):
                self.play_hit_sound()
            elif isinstance(intent, Rumble):
                self.rumble(intent)


class NullDevices:
    """Stand-in when devices are disabled: no pads, no sound."""

    def open(self) -> 'NullDevices':
        return self

    def close(self) -> None:
        pass

    def poll_gamepads(self) -> Dict[int, Tuple[float, float]]:
        return {}

    def dispatch(self, intents: Iterable[object]) -> None:
        pass
