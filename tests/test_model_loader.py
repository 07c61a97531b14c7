"""
Tests for the model loader module.
"""

from pathlib import Path

import pytest

from yunet_faces.config import DetectionConfig, ModelConfig, get_project_root
from yunet_faces.model_loader import load_model, resolve_model_path


def test_resolve_relative_path():
    """Test that relative model paths resolve against the project root."""
    config = ModelConfig(model_path="models/yunet.onnx")
    assert resolve_model_path(config) == get_project_root() / "models/yunet.onnx"


def test_resolve_absolute_path(tmp_path):
    """Test that absolute model paths are kept."""
    model = tmp_path / "yunet.onnx"
    assert resolve_model_path(ModelConfig(model_path=str(model))) == Path(model)


def test_missing_model_file(tmp_path):
    """Test fail-fast on a missing model file."""
    config = ModelConfig(model_path=str(tmp_path / "missing.onnx"))

    with pytest.raises(FileNotFoundError, match="YuNet model not found"):
        load_model(config, DetectionConfig())
