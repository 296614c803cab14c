"""Status poller - reads the headset on an interval and emits status records."""

import logging
import sys
import time
from dataclasses import dataclass
from typing import Callable, Optional

from g935_battery.core.errors import AcquisitionError, DeviceNotFound
from g935_battery.core.profile import ProfileSwitcher
from g935_battery.core.provider import BatteryProvider
from g935_battery.core.status import classify_reading
from g935_battery.core.types import EMPTY_RECORD, StatusRecord

log = logging.getLogger(__name__)

DEFAULT_INTERVAL = 0.5


@dataclass
class PollState:
    """State carried between poll cycles.

    Starts out connected so that no profile switch fires at startup when
    the headset is already there.
    """
    last_connected: bool = True


def print_record(record: StatusRecord) -> None:
    """Write one record per line, flushed so status bars see it right away."""
    sys.stdout.write(record.to_json() + "\n")
    sys.stdout.flush()


class StatusReporter:
    """Runs acquisition + classification on a fixed interval.

    The profile switcher, when given, is only invoked on connectivity
    edges between two successful cycles.
    """

    def __init__(
        self,
        provider: BatteryProvider,
        emit: Callable[[StatusRecord], None] = print_record,
        switcher: Optional[ProfileSwitcher] = None,
        interval: float = DEFAULT_INTERVAL,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self._provider = provider
        self._emit = emit
        self._switcher = switcher
        self._interval = interval
        self._sleep = sleep

    def poll_once(self, state: PollState) -> StatusRecord:
        """Run a single cycle, updating ``state`` in place."""
        try:
            reading = self._provider.read()
        except DeviceNotFound as e:
            log.debug("Headset not found: %s", e)
            self._emit(EMPTY_RECORD)
            return EMPTY_RECORD
        except AcquisitionError as e:
            log.warning("Battery read failed via %s: %s", self._provider.name, e)
            self._emit(EMPTY_RECORD)
            return EMPTY_RECORD

        record = classify_reading(reading)
        self._emit(record)

        if self._switcher is not None:
            if reading.connected and not state.last_connected:
                log.info("Headset connected")
                self._switcher.activate()
            elif not reading.connected and state.last_connected:
                log.info("Headset disconnected")
                self._switcher.deactivate()
            state.last_connected = reading.connected

        return record

    def run(self, state: Optional[PollState] = None, cycles: Optional[int] = None) -> PollState:
        """Poll forever, or for ``cycles`` iterations when given."""
        if state is None:
            state = PollState()

        count = 0
        while cycles is None or count < cycles:
            self.poll_once(state)
            count += 1
            self._sleep(self._interval)

        return state
