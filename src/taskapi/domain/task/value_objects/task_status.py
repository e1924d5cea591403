"""Task status value object."""

from enum import Enum


class TaskStatus(str, Enum):
    """Lifecycle state of a task."""

    OPEN = "OPEN"
    DONE = "DONE"

    @classmethod
    def parse(cls, value: str) -> "TaskStatus":
        """Parse a status case-insensitively.

        Raises
        ------
        ValueError
            If the value is not a known status
        """
        try:
            return cls(value.strip().upper())
        except ValueError:
            allowed = ", ".join(s.value for s in cls)
            msg = f"Invalid status '{value}'. Allowed values: {allowed}"
            raise ValueError(msg) from None

    @classmethod
    def is_valid(cls, value: str) -> bool:
        return value.strip().upper() in cls._value2member_map_
