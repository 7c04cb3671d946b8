"""Read-only and computed attributes."""

import os

from softassert import ErrorKind, check, check_fails

LIMIT = int(os.environ.get("SOFTASSERT_EXAMPLE_LIMIT", "300"))


class Box:
    __slots__ = ("_value",)

    def __init__(self, value):
        self._value = value

    @property
    def value(self):
        return self._value

    @property
    def doubled(self):
        return self._value * 2


box = Box(27)
check(box.value == 27)
check(box.doubled == 54)


def assign_read_only():
    box.value = 3


def assign_unknown():
    box.dummy = 1


check_fails(ErrorKind.TYPE_ERROR, assign_read_only, "properties without a setter are read-only")
check_fails(ErrorKind.TYPE_ERROR, assign_unknown, "__slots__ forbids new attributes")
check(box.value == 27)
check(LIMIT == 300)
