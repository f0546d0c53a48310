import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from fixer_cms.rules.models import Rules

logger = logging.getLogger(__name__)


def _strip_yaml_fence(content: str) -> str:
    """Return the body of the first ```yaml fenced block, or the whole text."""
    block: list[str] = []
    in_block = False
    found_block = False

    for line in content.splitlines():
        stripped = line.strip()
        if stripped.startswith("```yaml"):
            in_block = True
            found_block = True
            continue
        if in_block and stripped.startswith("```"):
            break
        if in_block:
            block.append(line)

    return "\n".join(block) if found_block else content


def load_rules(path: Path) -> Rules:
    """
    Load and validate the rules file.
    Raises FileNotFoundError if file missing.
    Raises ValueError if the YAML or the schema is invalid.
    """
    if not path.exists():
        raise FileNotFoundError(f"Rules file not found at: {path}")

    with open(path, encoding="utf-8") as f:
        content = f.read()

    try:
        data = yaml.safe_load(_strip_yaml_fence(content))
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML syntax in rules file: {e}") from e

    try:
        rules = Rules.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Rules validation failed:\n{e}") from e

    logger.debug("Loaded rules %s v%s", rules.project.slug, rules.project.rules_version)
    return rules
