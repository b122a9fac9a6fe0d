"""Loading a day's input from JSON documents."""
import json
import logging
from pathlib import Path
from typing import Any, Dict, Union

from staffrota.models.day import DayInput
from staffrota.models.validated import ValidatedDayInput

logger = logging.getLogger("staffrota.io")


def load_day_input(source: Union[str, Path, Dict[str, Any]]) -> DayInput:
    """
    Load and validate a day input.

    Args:
        source: Path to a JSON document, or an already-parsed mapping

    Returns:
        DayInput ready for ``solve_day``

    Raises:
        ValueError: If the document is not a JSON object
        pydantic.ValidationError: If a field is malformed
    """
    if isinstance(source, dict):
        payload = source
    else:
        path = Path(source)
        try:
            payload = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise ValueError(f"{path} is not valid JSON: {e}") from e
        logger.debug(f"Loaded day input from {path}")

    if not isinstance(payload, dict):
        raise ValueError("Day input must be a JSON object")

    return ValidatedDayInput.model_validate(payload).to_dataclass()


def day_input_to_json(day: DayInput, indent: int = 2) -> str:
    """Serialize a day input back to a JSON document."""
    return json.dumps(day.to_dict(), ensure_ascii=False, indent=indent)
