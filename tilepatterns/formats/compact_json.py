"""
Compact JSON formatter that keeps arrays of numbers on single lines.

Pattern snapshots hold thousands of 8-element neighbor contexts; writing each
one on a single line keeps the files readable and diffable.
"""

import json


def dumps(obj, indent=2):
    """
    Serialize obj to a JSON formatted string.

    Arrays containing only numbers (int/float) are kept on a single line.
    Nested structures are indented normally.

    Args:
        obj: The object to serialize
        indent: Number of spaces for indentation (default: 2)

    Returns:
        A formatted JSON string
    """
    def is_primitive(v):
        return v is None or isinstance(v, (bool, int, float, str))

    def is_numeric_array(v):
        return isinstance(v, (list, tuple)) and all(
            isinstance(x, (int, float)) and not isinstance(x, bool) for x in v
        )

    def format_value(v, level):
        pad = " " * (indent * level)
        child_pad = " " * (indent * (level + 1))

        if is_primitive(v) or is_numeric_array(v):
            return json.dumps(list(v) if isinstance(v, tuple) else v)

        if isinstance(v, (list, tuple)):
            if not v:
                return "[]"
            items = [format_value(x, level + 1) for x in v]
            inner = ",\n".join(child_pad + item for item in items)
            return "[\n" + inner + "\n" + pad + "]"

        if isinstance(v, dict):
            if not v:
                return "{}"
            items = [
                f"{json.dumps(str(k))}: {format_value(val, level + 1)}"
                for k, val in v.items()
            ]
            inner = ",\n".join(child_pad + item for item in items)
            return "{\n" + inner + "\n" + pad + "}"

        return json.dumps(v)

    return format_value(obj, 0)


def dump(obj, fp, indent=2):
    """
    Serialize obj to a JSON formatted stream.

    Args:
        obj: The object to serialize
        fp: A file-like object with a write() method
        indent: Number of spaces for indentation (default: 2)
    """
    fp.write(dumps(obj, indent))


def load(fp):
    """Wraps json.load."""
    return json.load(fp)
