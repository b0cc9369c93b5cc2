"""
Test cases for configuration loading.
"""
import tempfile
import unittest
import sys
from pathlib import Path

import yaml

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

import gesture_engine
from gesture_engine.config import load_config, default_config, DEFAULT_CONFIG_PATH


class TestLoadConfig(unittest.TestCase):
    """Test YAML configuration loading."""

    def test_default_file_matches_builtin_defaults(self):
        self.assertEqual(load_config(), default_config())

    def test_default_thresholds(self):
        cfg = load_config()
        self.assertEqual(cfg.gestures.eye_blink.ear_threshold, 0.20)
        self.assertEqual(cfg.gestures.eye_blink.hold_ms, 2000)
        self.assertEqual(cfg.gestures.two_hand.stable_ms, 1000)
        self.assertEqual(cfg.gestures.two_hand.cooldown_ms, 3000)
        self.assertEqual(cfg.gestures.pointing.offset_threshold, 0.05)
        self.assertEqual(cfg.gestures.pointing.cooldown_ms, 1000)
        self.assertEqual(cfg.gestures.debounce.global_min_interval_ms, 700)
        self.assertEqual(cfg.mediapipe.max_num_hands, 2)

    def test_default_file_ships_with_package(self):
        """The default config resolves inside the installed package, not the checkout root."""
        package_dir = Path(gesture_engine.__file__).parent
        self.assertEqual(DEFAULT_CONFIG_PATH.parent, package_dir)
        self.assertTrue(DEFAULT_CONFIG_PATH.is_file())

    def test_missing_file(self):
        with self.assertRaises(FileNotFoundError):
            load_config("/nonexistent/config.yaml")

    def test_custom_file(self):
        with open(DEFAULT_CONFIG_PATH) as f:
            data = yaml.safe_load(f)
        data['gestures']['debounce']['global_min_interval_ms'] = 250
        data['camera']['mirror'] = True
        del data['engine']
        del data['logging']

        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "custom.yaml"
            path.write_text(yaml.safe_dump(data))
            cfg = load_config(str(path))

        self.assertEqual(cfg.gestures.debounce.global_min_interval_ms, 250)
        self.assertTrue(cfg.camera.mirror)
        self.assertEqual(cfg.engine.tick_interval_ms, 0)
        self.assertEqual(cfg.logging.level, "INFO")

    def test_missing_section(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "broken.yaml"
            path.write_text(yaml.safe_dump({'camera': {'index': 0}}))
            with self.assertRaises(KeyError):
                load_config(str(path))


if __name__ == '__main__':
    unittest.main()
