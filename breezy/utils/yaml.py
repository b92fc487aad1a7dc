"""Contains utility functions for working with YAML documents."""

from pathlib import Path
from typing import Any

from ruamel.yaml import YAML

yaml = YAML(typ="safe")


def load_yaml_text(content: str) -> Any:
    """Loads a YAML document from a string and returns the parsed data.

    An empty document is returned as None.
    """
    return yaml.load(content)


def read_text_file(path: Path) -> str:
    """Reads a UTF-8 text file from disk."""
    with open(path, encoding="utf-8") as f:
        return f.read()
