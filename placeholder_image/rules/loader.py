from pathlib import Path

import yaml
from pydantic import ValidationError

from placeholder_image.rules.models import Rules


def load_rules(path: Path, *, missing_ok: bool = True) -> Rules:
    """
    Load and validate the rules file.
    Returns built-in defaults when the file is absent and missing_ok is set,
    otherwise raises FileNotFoundError.
    Raises ValueError if the YAML or the schema is invalid.
    """
    if not path.exists():
        if missing_ok:
            return Rules()
        raise FileNotFoundError(f"Rules file not found at: {path}")

    with open(path) as f:
        content = f.read()

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML syntax in rules file: {e}") from e

    # An empty file means "all defaults"
    if data is None:
        data = {}

    try:
        return Rules.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Rules validation failed:\n{e}") from e
