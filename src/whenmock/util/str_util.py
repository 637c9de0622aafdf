import difflib
from pprint import pformat


def _is_container(value):
    return isinstance(value, (dict, list, tuple, set))


def pretty_diff(expected, actual) -> str:
    """
    Diff the pretty-printed representations of two values.

    Only containers get a diff, for scalars the values themselves are
    already the whole story so an empty string is returned.
    """
    if not (_is_container(expected) and _is_container(actual)):
        return ""

    j1 = pformat(expected, width=60, sort_dicts=True).splitlines(keepends=True)
    j2 = pformat(actual, width=60, sort_dicts=True).splitlines(keepends=True)
    return "".join(difflib.ndiff(j1, j2))


def describe_value(value) -> str:
    if callable(value) and hasattr(value, "__name__") and not hasattr(value, "asymmetric_match"):
        return value.__name__
    return repr(value)


def describe_patterns(patterns, kw_patterns=None) -> str:
    parts = [describe_value(p) for p in patterns]
    parts += ["%s=%s" % (k, describe_value(v)) for k, v in (kw_patterns or {}).items()]
    return "(%s)" % ", ".join(parts)


def indent(s, prefix="  "):
    return "\n".join(prefix + line for line in str(s).strip().splitlines())
