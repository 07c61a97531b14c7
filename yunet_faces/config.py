"""
Configuration management for the YuNet face detection layer.

Provides a layered configuration system with the following precedence
(highest to lowest):

    Environment variables > YAML config file > Defaults

Design constraints:
    - The library MUST run with zero configuration (safe defaults only).
    - Missing or invalid values fail early and loudly.
    - No detection logic, I/O, or model loading belongs here.

Non-goals:
    - No dynamic reloading.
    - No database-backed or remote configuration.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Project root resolution
# ---------------------------------------------------------------------------
# Resolved relative to this file's location: yunet_faces/config.py → repo root
_PROJECT_ROOT = Path(__file__).resolve().parent.parent


def get_project_root() -> Path:
    """Return the resolved project root directory."""
    return _PROJECT_ROOT


# ---------------------------------------------------------------------------
# Configuration dataclasses
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ModelConfig:
    """Model-related configuration.

    Attributes:
        model_path: Path to the YuNet .onnx model (relative to project root).
        backend: Compute backend, 'cpu' or 'cuda'.
    """

    model_path: str = "models/face_detection_yunet_2023mar.onnx"
    backend: str = "cpu"


@dataclass(frozen=True)
class DetectionConfig:
    """Thresholds handed to the YuNet detector.

    Attributes:
        score_threshold: Minimum score for the detector to report a face.
        nms_threshold: IoU threshold for the detector's non-maximum suppression.
        top_k: Maximum number of candidates kept before NMS.
    """

    score_threshold: float = 0.5
    nms_threshold: float = 0.3
    top_k: int = 5000


@dataclass(frozen=True)
class AppConfig:
    """Top-level configuration.

    Aggregates all sub-configurations into a single, frozen object.
    """

    model: ModelConfig = field(default_factory=ModelConfig)
    detection: DetectionConfig = field(default_factory=DetectionConfig)


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------

_VALID_BACKENDS = {"cpu", "cuda"}


def _validate(config: AppConfig) -> None:
    """Validate configuration values. Raises ValueError on invalid state."""

    if config.model.backend not in _VALID_BACKENDS:
        raise ValueError(
            f"Invalid model.backend: '{config.model.backend}'. "
            f"Must be one of {_VALID_BACKENDS}."
        )

    if not config.model.model_path:
        raise ValueError("model.model_path must not be empty.")

    if not (0.0 <= config.detection.score_threshold <= 1.0):
        raise ValueError(
            f"detection.score_threshold must be in [0.0, 1.0], "
            f"got {config.detection.score_threshold}."
        )

    if not (0.0 <= config.detection.nms_threshold <= 1.0):
        raise ValueError(
            f"detection.nms_threshold must be in [0.0, 1.0], "
            f"got {config.detection.nms_threshold}."
        )

    if config.detection.top_k <= 0:
        raise ValueError(
            f"detection.top_k must be positive, "
            f"got {config.detection.top_k}."
        )


# ---------------------------------------------------------------------------
# YAML loading
# ---------------------------------------------------------------------------

def _build_model_config(raw: dict) -> ModelConfig:
    """Build ModelConfig from a raw YAML dict."""
    kwargs = {}
    if "model_path" in raw:
        kwargs["model_path"] = str(raw["model_path"])
    if "backend" in raw:
        kwargs["backend"] = str(raw["backend"]).lower()
    return ModelConfig(**kwargs)


def _build_detection_config(raw: dict) -> DetectionConfig:
    """Build DetectionConfig from a raw YAML dict."""
    kwargs = {}
    if "score_threshold" in raw:
        kwargs["score_threshold"] = float(raw["score_threshold"])
    if "nms_threshold" in raw:
        kwargs["nms_threshold"] = float(raw["nms_threshold"])
    if "top_k" in raw:
        kwargs["top_k"] = int(raw["top_k"])
    return DetectionConfig(**kwargs)


# ---------------------------------------------------------------------------
# Environment variable overrides
# ---------------------------------------------------------------------------

_ENV_PREFIX = "YUNET_FACES_"


def _apply_env_overrides(raw: dict) -> dict:
    """Apply environment variable overrides to the raw config dict.

    Environment variables follow the pattern:
        YUNET_FACES_MODEL_BACKEND=cuda
        YUNET_FACES_DETECTION_SCORE_THRESHOLD=0.7
    """
    env_map = {
        f"{_ENV_PREFIX}MODEL_PATH": ("model", "model_path"),
        f"{_ENV_PREFIX}MODEL_BACKEND": ("model", "backend"),
        f"{_ENV_PREFIX}DETECTION_SCORE_THRESHOLD": ("detection", "score_threshold"),
        f"{_ENV_PREFIX}DETECTION_NMS_THRESHOLD": ("detection", "nms_threshold"),
        f"{_ENV_PREFIX}DETECTION_TOP_K": ("detection", "top_k"),
    }

    for env_var, (section, key) in env_map.items():
        value = os.environ.get(env_var)
        if value is not None:
            raw.setdefault(section, {})[key] = value
            logger.debug("Config override from env: %s=%s", env_var, value)

    return raw


# ---------------------------------------------------------------------------
# Public loader
# ---------------------------------------------------------------------------

def load_config(config_path: Optional[str] = None) -> AppConfig:
    """Load and validate configuration.

    Precedence (highest → lowest):
        Environment variables > YAML file > Hard-coded defaults

    Args:
        config_path: Path to a YAML configuration file. If None,
                     defaults and environment variables are used.

    Returns:
        A validated, frozen AppConfig instance.

    Raises:
        FileNotFoundError: If config_path is provided but does not exist.
        ValueError: If any configuration value is invalid.
        yaml.YAMLError: If the YAML file is malformed.
    """
    raw: dict = {}

    # --- Layer 1: YAML file ---
    if config_path is not None:
        resolved = Path(config_path)
        if not resolved.is_absolute():
            resolved = _PROJECT_ROOT / resolved

        if not resolved.is_file():
            raise FileNotFoundError(
                f"Configuration file not found: {resolved}. "
                f"Provide a valid path or omit to use defaults."
            )

        logger.info("Loading config from: %s", resolved)
        with open(resolved, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}

    # --- Layer 2: Environment variable overrides ---
    raw = _apply_env_overrides(raw)

    # --- Build typed configs ---
    config = AppConfig(
        model=_build_model_config(raw.get("model", {})),
        detection=_build_detection_config(raw.get("detection", {})),
    )

    # --- Validate ---
    _validate(config)

    logger.debug("Configuration loaded: %s", config)
    return config
