"""
Configuration loader
"""
import os
from pathlib import Path

import yaml

from mapquiz.models import QuizConfig


DEFAULT_CONFIG_PATH = "config/quiz.yaml"


def load_config(config_path: str = None) -> QuizConfig:
    """
    Load configuration from YAML file

    Args:
        config_path: Path to config file (defaults to $MAPQUIZ_CONFIG,
                     then config/quiz.yaml)

    Returns:
        QuizConfig object
    """
    config_path = config_path or os.environ.get("MAPQUIZ_CONFIG", DEFAULT_CONFIG_PATH)
    path = Path(config_path)

    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(path, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f) or {}

    return QuizConfig(**data)
