"""
Configuration management for the gesture classification engine.
"""
import yaml
from pathlib import Path
from typing import Optional, Dict, Any
from dataclasses import dataclass

# Shipped inside the package so installed copies find it too
DEFAULT_CONFIG_PATH = Path(__file__).parent / "config.default.yaml"

@dataclass
class CameraConfig:
    """Camera configuration settings."""
    index: int = 0
    width: int = 640
    height: int = 480
    fps: int = 30
    mirror: bool = False


@dataclass
class MediaPipeConfig:
    """MediaPipe Face Mesh and Hands configuration settings."""
    max_num_hands: int = 2
    min_detection_confidence: float = 0.5
    min_tracking_confidence: float = 0.5
    refine_face_landmarks: bool = True
    hand_model_complexity: int = 0


@dataclass
class EyeBlinkConfig:
    """Eye-blink-hold gesture configuration."""
    ear_threshold: float = 0.20
    hold_ms: int = 2000


@dataclass
class TwoHandConfig:
    """Two-hand shape gesture configuration."""
    stable_ms: int = 1000
    cooldown_ms: int = 3000


@dataclass
class PointingConfig:
    """Single-hand pointing gesture configuration."""
    offset_threshold: float = 0.05
    cooldown_ms: int = 1000


@dataclass
class DebounceConfig:
    """Global debounce applied to every emitted gesture."""
    global_min_interval_ms: int = 700


@dataclass
class GesturesConfig:
    """Gesture recognition configuration."""
    eye_blink: EyeBlinkConfig
    two_hand: TwoHandConfig
    pointing: PointingConfig
    debounce: DebounceConfig


@dataclass
class EngineConfig:
    """Tick scheduler settings."""
    tick_interval_ms: int = 0


@dataclass
class LoggingConfig:
    level: str = "INFO"


@dataclass
class Cfg:
    """Main configuration class."""
    camera: CameraConfig
    mediapipe: MediaPipeConfig
    gestures: GesturesConfig
    engine: EngineConfig
    logging: LoggingConfig


def default_config() -> Cfg:
    """Built-in defaults, without reading any file."""
    return Cfg(
        camera=CameraConfig(),
        mediapipe=MediaPipeConfig(),
        gestures=GesturesConfig(
            eye_blink=EyeBlinkConfig(),
            two_hand=TwoHandConfig(),
            pointing=PointingConfig(),
            debounce=DebounceConfig()
        ),
        engine=EngineConfig(),
        logging=LoggingConfig()
    )


def load_config(path: Optional[str] = None) -> Cfg:
    """
    Load configuration from YAML file.

    Args:
        path: Path to config file. If None, uses config.default.yaml

    Returns:
        Configuration object with all settings
    """
    if path is None:
        path = DEFAULT_CONFIG_PATH

    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, 'r') as f:
        data = yaml.safe_load(f)

    return _dict_to_config(data)


def _dict_to_config(data: Dict[str, Any]) -> Cfg:
    """Convert dictionary to configuration object."""
    camera_data = data['camera']
    camera = CameraConfig(
        index=camera_data['index'],
        width=camera_data['width'],
        height=camera_data['height'],
        fps=camera_data['fps'],
        mirror=camera_data.get('mirror', False)
    )

    mp_data = data['mediapipe']
    mediapipe = MediaPipeConfig(
        max_num_hands=mp_data['max_num_hands'],
        min_detection_confidence=mp_data['min_detection_confidence'],
        min_tracking_confidence=mp_data['min_tracking_confidence'],
        refine_face_landmarks=mp_data.get('refine_face_landmarks', True),
        hand_model_complexity=mp_data.get('hand_model_complexity', 0)
    )

    gestures_data = data['gestures']
    eye_blink = EyeBlinkConfig(
        ear_threshold=gestures_data['eye_blink']['ear_threshold'],
        hold_ms=gestures_data['eye_blink']['hold_ms']
    )
    two_hand = TwoHandConfig(
        stable_ms=gestures_data['two_hand']['stable_ms'],
        cooldown_ms=gestures_data['two_hand']['cooldown_ms']
    )
    pointing = PointingConfig(
        offset_threshold=gestures_data['pointing']['offset_threshold'],
        cooldown_ms=gestures_data['pointing']['cooldown_ms']
    )
    debounce = DebounceConfig(
        global_min_interval_ms=gestures_data['debounce']['global_min_interval_ms']
    )
    gestures = GesturesConfig(
        eye_blink=eye_blink,
        two_hand=two_hand,
        pointing=pointing,
        debounce=debounce
    )

    engine = EngineConfig(
        tick_interval_ms=data.get('engine', {}).get('tick_interval_ms', 0)
    )
    logging_cfg = LoggingConfig(
        level=data.get('logging', {}).get('level', "INFO")
    )

    return Cfg(
        camera=camera,
        mediapipe=mediapipe,
        gestures=gestures,
        engine=engine,
        logging=logging_cfg
    )
