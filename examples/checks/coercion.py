"""Explicit conversions; Python does not coerce str and int implicitly."""

from softassert import ErrorKind, check, check_fails

check(isinstance(3, int))
check(str(3) + "s" == "3s")
check("s" + str(3) == "s3")
check_fails(ErrorKind.TYPE_ERROR, lambda: 3 + "s", "int + str is not coerced")
check_fails(ErrorKind.TYPE_ERROR, lambda: 3 - "2")

check(int("2") == 2)
check(float("2.2344") == 2.2344)
check_fails(ErrorKind.RANGE_ERROR, lambda: int("2.5"), "int() rejects fractional strings")

check(3 * "2" == "222", "sequence repetition, not multiplication")
check(len([]) == 0)
check(len([None]) == 1)
