"""Hour value parsing and formatting utilities."""


class Hours:
    """Represents an amount of hours, stored in whole minutes."""

    @classmethod
    def parse(cls, hours: str) -> "Hours":
        """Parse '8', '8.5', '8,5' or '8:30' into an Hours object."""
        hours = hours.strip()
        if hours == "":
            return cls(0)
        if ":" in hours:
            parts = hours.split(":")
            if len(parts) != 2:
                msg = f"Invalid time format: {hours}"
                raise ValueError(msg)
            whole, minutes = int(parts[0]), int(parts[1])
            if minutes < 0 or minutes >= 60:
                msg = f"Minutes must be 0-59: {hours}"
                raise ValueError(msg)
            return cls(60 * whole + minutes)
        return cls.from_decimal(float(hours.replace(",", ".")))

    @classmethod
    def from_decimal(cls, hours: float) -> "Hours":
        """Build from decimal hours, rounding to the nearest minute."""
        return cls(round(hours * 60))

    def __init__(self, minutes: int = 0) -> None:
        self.minutes: int = minutes

    @property
    def decimal(self) -> float:
        """Value in decimal hours."""
        return self.minutes / 60

    def __repr__(self) -> str:
        sign = "-" if self.minutes < 0 else ""
        abs_minutes = abs(self.minutes)
        return f"{sign}{abs_minutes // 60:02}:{abs_minutes % 60:02}"

    __str__ = __repr__

    def format(self) -> str:
        """Format as '8h 30m', or '--' when zero."""
        if self.minutes == 0:
            return "--"
        sign = "-" if self.minutes < 0 else ""
        abs_minutes = abs(self.minutes)
        return f"{sign}{abs_minutes // 60}h {abs_minutes % 60:02d}m"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Hours):
            return NotImplemented
        return self.minutes == other.minutes

    def __hash__(self) -> int:
        return hash(self.minutes)

    def __add__(self, other: "Hours") -> "Hours":
        return Hours(self.minutes + other.minutes)

    def __sub__(self, other: "Hours") -> "Hours":
        return Hours(self.minutes - other.minutes)

    def __lt__(self, other: "Hours") -> bool:
        return self.minutes < other.minutes

    def __le__(self, other: "Hours") -> bool:
        return self.minutes <= other.minutes

    def __gt__(self, other: "Hours") -> bool:
        return self.minutes > other.minutes

    def __ge__(self, other: "Hours") -> bool:
        return self.minutes >= other.minutes

    def __bool__(self) -> bool:
        return self.minutes > 0


def parse_hours(value: str | float | int | None) -> float | None:
    """Parse an hour value from the backend or a form into decimal hours.

    Numbers are returned unchanged; 'HH:MM' strings go through ``Hours``.
    Empty values give None.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        msg = f"Invalid hours value: {value!r}"
        raise ValueError(msg)
    if isinstance(value, int | float):
        return float(value)
    if not isinstance(value, str):
        msg = f"Invalid hours value: {value!r}"
        raise TypeError(msg)
    value = value.strip()
    if not value:
        return None
    if ":" in value:
        return Hours.parse(value).decimal
    return float(value.replace(",", "."))


def format_hours(hours: float) -> str:
    """Format decimal hours as '8h 30m'."""
    return Hours.from_decimal(hours).format()
