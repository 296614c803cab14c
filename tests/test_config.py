import json
import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from g935_battery import config


class ConfigTest(unittest.TestCase):
    def setUp(self) -> None:
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        patcher = mock.patch.dict(os.environ, {"XDG_CONFIG_HOME": tmp.name})
        patcher.start()
        self.addCleanup(patcher.stop)
        self.path = Path(tmp.name) / "g935-battery" / "config.json"

    def test_first_run_writes_defaults(self) -> None:
        loaded = config.load_config()

        self.assertEqual(loaded, config.DEFAULTS)
        self.assertEqual(json.loads(self.path.read_text()), config.DEFAULTS)

    def test_user_values_are_merged(self) -> None:
        self.path.parent.mkdir(parents=True)
        self.path.write_text(json.dumps({"profile": {"enabled": True}}))

        loaded = config.load_config()

        self.assertTrue(config.get(loaded, "profile.enabled"))
        self.assertEqual(config.get(loaded, "profile.card"), config.DEFAULTS["profile"]["card"])
        self.assertEqual(config.get(loaded, "polling.interval_ms"), 500)

    def test_broken_file_falls_back_to_defaults(self) -> None:
        self.path.parent.mkdir(parents=True)
        self.path.write_text("{not json")

        with self.assertLogs("g935_battery.config", level="WARNING"):
            loaded = config.load_config()
        self.assertEqual(loaded, config.DEFAULTS)

    def test_get_missing_key(self) -> None:
        self.assertEqual(config.get(config.DEFAULTS, "polling.nope", 7), 7)


    def test_loaded_config_does_not_share_defaults(self) -> None:
        loaded = config.load_config()
        loaded["profile"]["command"].append("--verbose")

        self.assertEqual(config.DEFAULTS["profile"]["command"], ["pactl", "set-card-profile"])
        self.assertEqual(config.load_config()["profile"]["command"], ["pactl", "set-card-profile"])


if __name__ == "__main__":
    unittest.main()
