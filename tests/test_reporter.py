import tempfile
import unittest
from pathlib import Path
from unittest import mock

from g935_battery.core.errors import DeviceNotFound, IOFailure, ReadTimeout
from g935_battery.core.profile import ProfileSwitcher
from g935_battery.core.provider import BatteryProvider
from g935_battery.core.reporter import PollState, StatusReporter
from g935_battery.core.types import BatterySample, Reading, Severity
from g935_battery.providers.sysfs import SysfsProvider

CONNECTED = Reading(connected=True, sample=BatterySample(voltage=3900, percentage=80.0, charging=False))
DISCONNECTED = Reading(connected=False)


class ScriptedProvider(BatteryProvider):
    """Replays readings (or raises exceptions) in order."""

    def __init__(self, script):
        self._script = list(script)

    @property
    def name(self) -> str:
        return "scripted"

    def locate(self):
        return None

    def read(self) -> Reading:
        item = self._script.pop(0)
        if isinstance(item, Exception):
            raise item
        return item


class RecordingSwitcher(ProfileSwitcher):
    def __init__(self):
        self.calls = []

    @property
    def profile(self) -> str:
        return "output:analog-stereo"

    def set_profile(self, profile: str) -> None:
        self.calls.append(profile)


class StatusReporterTest(unittest.TestCase):
    def _reporter(self, script, switcher=None):
        self.records = []
        self.sleeps = []
        return StatusReporter(
            ScriptedProvider(script),
            emit=self.records.append,
            switcher=switcher,
            interval=0.5,
            sleep=self.sleeps.append,
        )

    def test_switches_only_on_edges(self) -> None:
        switcher = RecordingSwitcher()
        reporter = self._reporter(
            [CONNECTED, CONNECTED, DISCONNECTED, DISCONNECTED, CONNECTED], switcher
        )

        state = reporter.run(cycles=5)

        self.assertEqual(switcher.calls, ["off", "output:analog-stereo"])
        self.assertTrue(state.last_connected)
        self.assertEqual(self.sleeps, [0.5] * 5)

    def test_no_switch_at_startup_when_connected(self) -> None:
        switcher = RecordingSwitcher()
        self._reporter([CONNECTED], switcher).run(cycles=1)
        self.assertEqual(switcher.calls, [])

    def test_startup_disconnected_turns_profile_off(self) -> None:
        switcher = RecordingSwitcher()
        self._reporter([DISCONNECTED], switcher).run(cycles=1)
        self.assertEqual(switcher.calls, ["off"])

    def test_failures_emit_empty_record_and_keep_state(self) -> None:
        switcher = RecordingSwitcher()
        reporter = self._reporter(
            [DISCONNECTED, DeviceNotFound("gone"), ReadTimeout("slow"), DISCONNECTED, CONNECTED],
            switcher,
        )
        state = PollState()

        for _ in range(3):
            reporter.poll_once(state)
        self.assertFalse(state.last_connected)
        self.assertEqual([r.to_json() for r in self.records[1:]], ['{"text":""}'] * 2)

        reporter.poll_once(state)
        reporter.poll_once(state)
        self.assertEqual(switcher.calls, ["off", "output:analog-stereo"])

    def test_emits_classified_records(self) -> None:
        reporter = self._reporter([CONNECTED, DISCONNECTED])
        reporter.run(cycles=2)

        self.assertEqual(self.records[0].severity, Severity.INFO)
        self.assertEqual(self.records[0].text, "80%")
        self.assertEqual(self.records[1].severity, Severity.IDLE)

    def test_state_untouched_without_switcher(self) -> None:
        state = self._reporter([DISCONNECTED]).run(cycles=1)
        self.assertTrue(state.last_connected)


    def test_io_failure_emits_empty_record(self) -> None:
        switcher = RecordingSwitcher()
        reporter = self._reporter([IOFailure("power_supply scan failed")], switcher)
        state = PollState()

        record = reporter.poll_once(state)

        self.assertTrue(record.is_empty)
        self.assertEqual([r.to_json() for r in self.records], ['{"text":""}'])
        self.assertTrue(state.last_connected)
        self.assertEqual(switcher.calls, [])

    def test_sysfs_scan_failure_does_not_stop_polling(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            context = mock.Mock()
            context.list_devices.return_value = []
            provider = SysfsProvider(usb_root=tmpdir, power_supply_root=tmpdir, context=context)
            records = []
            reporter = StatusReporter(provider, emit=records.append, sleep=lambda _: None)

            with mock.patch.object(Path, "iterdir", side_effect=PermissionError(13, "Permission denied")):
                reporter.run(cycles=2)

        self.assertEqual([r.to_json() for r in records], ['{"text":""}'] * 2)


if __name__ == "__main__":
    unittest.main()
