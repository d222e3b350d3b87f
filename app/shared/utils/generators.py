"""ID and value generators (CUID primary keys, readable task numbers)."""

from cuid2 import cuid_wrapper

cuid_generator = cuid_wrapper()

TASK_NUMBER_PREFIX = "TASK-"
TASK_NUMBER_START = 10001


def generate_cuid() -> str:
    """Generate a collision-resistant unique identifier (CUID2).

    Returns:
        A new CUID string.
    """
    result = cuid_generator()
    if not isinstance(result, str):
        raise TypeError(
            f"Expected str from cuid_generator, got {type(result).__name__}"
        )
    return result


def format_task_number(number: int) -> str:
    """Render the human-readable task number (e.g. TASK-10001).

    Numbering starts at TASK_NUMBER_START.
    """
    if number < TASK_NUMBER_START:
        raise ValueError(f"task number must be >= {TASK_NUMBER_START}")
    return f"{TASK_NUMBER_PREFIX}{number}"
