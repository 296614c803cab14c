"""Audio card profile switching, fired when the headset (dis)connects."""

import logging
import subprocess
from abc import ABC, abstractmethod
from typing import List, Sequence

log = logging.getLogger(__name__)

DEFAULT_COMMAND = ("pactl", "set-card-profile")
DEFAULT_CARD = "alsa_card.usb-Logitech_G935_Gaming_Headset-00"
DEFAULT_PROFILE = "output:analog-stereo+input:mono-fallback"
PROFILE_OFF = "off"


class ProfileSwitcher(ABC):
    """Side-effect port called by the poller on connectivity edges."""

    @abstractmethod
    def set_profile(self, profile: str) -> None:
        ...

    @property
    @abstractmethod
    def profile(self) -> str:
        """Profile activated when the headset connects."""
        ...

    def activate(self) -> None:
        self.set_profile(self.profile)

    def deactivate(self) -> None:
        self.set_profile(PROFILE_OFF)


class PactlProfileSwitcher(ProfileSwitcher):
    """Run ``pactl set-card-profile <card> <profile>`` without waiting for it."""

    def __init__(self, card: str = DEFAULT_CARD, profile: str = DEFAULT_PROFILE,
                 command: Sequence[str] = DEFAULT_COMMAND):
        self._card = card
        self._profile = profile
        self._command = list(command)

    @property
    def profile(self) -> str:
        return self._profile

    def build_args(self, profile: str) -> List[str]:
        return self._command + [self._card, profile]

    def set_profile(self, profile: str) -> None:
        args = self.build_args(profile)
        log.info("Switching card profile: %s", " ".join(args))
        try:
            subprocess.Popen(
                args,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
            )
        except OSError as e:
            log.warning("Could not run %s: %s", args[0], e)
