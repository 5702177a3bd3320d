from __future__ import annotations

import os
from typing import Literal, Optional

import yaml
from pydantic import BaseModel


class FileStorageConfig(BaseModel):
    """Configuration for the JSON file backend."""

    path: str = "./storage"


class StorageConfig(BaseModel):
    """Storage backend selection."""

    backend: Literal["file", "inmemory"] = "file"
    file: FileStorageConfig = FileStorageConfig()


class TaskStorageConfig(BaseModel):
    """Top-level configuration model."""

    storage: StorageConfig = StorageConfig()


def load_config(path: Optional[str] = None) -> TaskStorageConfig:
    """Load configuration from YAML file.

    Args:
        path: Optional path to config file. Falls back to
            JSON_TASK_STORAGE_CONFIG env variable or 'config.yaml' in the
            current directory.
    """

    config_path = path or os.getenv("JSON_TASK_STORAGE_CONFIG", "config.yaml")
    if os.path.exists(config_path):
        with open(config_path) as f:
            data = yaml.safe_load(f) or {}
        config = TaskStorageConfig(**data)
    else:
        config = TaskStorageConfig()

    env_path = os.getenv("JSON_TASK_STORAGE_PATH")
    if env_path:
        config.storage.file.path = env_path
    return config
