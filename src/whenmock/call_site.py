"""Best-effort capture of where a rule was declared, for diagnostics only."""
import os
import traceback

UNKNOWN = "<unknown>"

_package_dir = os.path.dirname(os.path.abspath(__file__))


def _is_internal(filename):
    return os.path.abspath(filename).startswith(_package_dir + os.sep)


def capture_call_site(context=1):
    """
    Returns the innermost stack lines outside of this package, most recent
    call first, formatted as 'file:line in function'. Falls back to UNKNOWN
    when no usable frame is found.
    """
    lines = []
    for frame in reversed(traceback.extract_stack()):
        if _is_internal(frame.filename):
            continue
        lines.append("%s:%s in %s" % (frame.filename, frame.lineno, frame.name))
        if len(lines) >= context:
            break

    return "\n".join(lines) if lines else UNKNOWN


def no_call_site(context=1):
    return UNKNOWN
