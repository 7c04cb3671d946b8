"""Name resolution: locals, closures and unbound names."""

from softassert import ErrorKind, check, check_fails

x = 3
check(x == 3)


def read_before_assign():
    y = y + 1  # noqa: F821
    return y


check_fails(ErrorKind.REFERENCE_ERROR, lambda: undefined_name, "unknown names are not hoisted")  # noqa: F821
check_fails(
    ErrorKind.REFERENCE_ERROR,
    read_before_assign,
    "assignment makes the name local for the whole function",
)


def outer():
    value = "enclosing"

    def inner():
        return value

    return inner


check(outer()() == "enclosing", "closures see enclosing bindings")
check(callable(outer))
