from hypothesis.strategies import SearchStrategy, integers

from chronos import CalendarInstant

# The moment all time-dependent tests are pinned to (a Sunday)
FROZEN_NOW = CalendarInstant.from_utc(2024, 2, 4, 12)


class AlwaysEqual:
    def __eq__(self, _):
        return True


class NeverEqual:
    def __eq__(self, _):
        return False


class AlwaysLarger:
    def __lt__(self, _):
        return False

    def __le__(self, _):
        return False

    def __gt__(self, _):
        return True

    def __ge__(self, _):
        return True


class AlwaysSmaller:
    def __lt__(self, _):
        return True

    def __le__(self, _):
        return True

    def __gt__(self, _):
        return False

    def __ge__(self, _):
        return False


def instants(
    min_value: CalendarInstant = CalendarInstant.MIN,
    max_value: CalendarInstant = CalendarInstant.MAX,
) -> SearchStrategy[CalendarInstant]:
    """Any instant between the given bounds (inclusive)"""
    return integers(
        min_value=min_value.epoch_millis, max_value=max_value.epoch_millis
    ).map(CalendarInstant.from_timestamp_millis)


# A range that leaves plenty of room for arithmetic in both directions
def modern_instants() -> SearchStrategy[CalendarInstant]:
    return instants(
        CalendarInstant.from_utc(1900, 1, 1),
        CalendarInstant.from_utc(2100, 12, 31, 23, 59, 59, millisecond=999),
    )
