"""Guard module built from singledispatch functions registered by type."""

from functools import singledispatch

from guardtags import guard_function, non_guard


@guard_function("Number", "gneg")
@singledispatch
def negative(value):
    raise TypeError("value must be a number.")


@negative.register(int)
@guard_function("Number", "gneg", order=1)
def _(value):
    if value >= 0:
        raise ValueError("value must be negative.")
    return value


@negative.register(float)
@guard_function("Number", "gneg", order=7)
def _(value):
    if not value < 0:
        raise ValueError("value must be negative.")
    return value


@guard_function("Number", "gnz")
@singledispatch
def non_zero(value):
    raise TypeError("value must be a number.")


@non_zero.register(int)
@guard_function("Number", "gnz", order=1)
def _(value):
    if value == 0:
        raise ValueError("value cannot be zero.")
    return value


@non_zero.register(float)
def _(value):
    if value == 0.0:
        raise ValueError("value cannot be zero.")
    return value


@non_guard
@singledispatch
def render(value):
    return repr(value)


@render.register(int)
def _(value):
    return f"{value:d}"
