"""
Tests for the configuration module.
"""

import pytest

from yunet_faces.config import (
    AppConfig,
    DetectionConfig,
    ModelConfig,
    _validate,
    load_config,
)


def test_load_defaults():
    """Test loading configuration without any file."""
    config = load_config(None)
    assert isinstance(config, AppConfig)
    assert config.model.backend == "cpu"
    assert config.model.model_path.endswith(".onnx")
    assert config.detection.score_threshold == 0.5
    assert config.detection.top_k == 5000


def test_load_yaml(tmp_path):
    """Test loading values from a YAML file."""
    path = tmp_path / "config.yaml"
    path.write_text(
        "model:\n"
        "  backend: CUDA\n"
        "  model_path: /opt/models/yunet.onnx\n"
        "detection:\n"
        "  score_threshold: 0.8\n"
        "  top_k: 100\n",
        encoding="utf-8",
    )

    config = load_config(str(path))

    assert config.model.backend == "cuda"
    assert config.model.model_path == "/opt/models/yunet.onnx"
    assert config.detection.score_threshold == 0.8
    assert config.detection.nms_threshold == 0.3
    assert config.detection.top_k == 100


def test_empty_yaml_uses_defaults(tmp_path):
    """Test that an empty YAML file falls back to defaults."""
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")

    assert load_config(str(path)) == AppConfig()


def test_missing_config_file(tmp_path):
    """Test that a missing config file fails loudly."""
    with pytest.raises(FileNotFoundError):
        load_config(str(tmp_path / "missing.yaml"))


def test_validation_failure():
    """Test fail-fast validation."""
    bad_config = AppConfig(detection=DetectionConfig(score_threshold=1.5))
    with pytest.raises(ValueError, match="score_threshold"):
        _validate(bad_config)

    bad_config = AppConfig(detection=DetectionConfig(nms_threshold=-0.1))
    with pytest.raises(ValueError, match="nms_threshold"):
        _validate(bad_config)

    bad_config = AppConfig(detection=DetectionConfig(top_k=0))
    with pytest.raises(ValueError, match="top_k"):
        _validate(bad_config)

    bad_config = AppConfig(model=ModelConfig(backend="invalid"))
    with pytest.raises(ValueError, match="backend"):
        _validate(bad_config)

    bad_config = AppConfig(model=ModelConfig(model_path=""))
    with pytest.raises(ValueError, match="model_path"):
        _validate(bad_config)


def test_env_override(monkeypatch, tmp_path):
    """Test environment variable overrides take precedence over YAML."""
    path = tmp_path / "config.yaml"
    path.write_text("detection:\n  score_threshold: 0.6\n", encoding="utf-8")
    monkeypatch.setenv("YUNET_FACES_DETECTION_SCORE_THRESHOLD", "0.9")
    monkeypatch.setenv("YUNET_FACES_MODEL_BACKEND", "cuda")
    monkeypatch.setenv("YUNET_FACES_DETECTION_TOP_K", "50")

    config = load_config(str(path))

    assert config.detection.score_threshold == 0.9
    assert config.model.backend == "cuda"
    assert config.detection.top_k == 50
