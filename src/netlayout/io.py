"""Reading and writing Layouts in their persisted YAML form.

JSON input is accepted too, being a subset of YAML.
"""

import logging
import re
import sys
from pathlib import Path
from typing import Any

import yaml

from netlayout.layout import Layout

logger = logging.getLogger(__name__)

_INT_TAG = "tag:yaml.org,2002:int"
_FLOAT_TAG = "tag:yaml.org,2002:float"
_MERGE_TAG = "tag:yaml.org,2002:merge"


class _LayoutLoader(yaml.SafeLoader):
    """SafeLoader that rejects repeated mapping keys and never reads base-60 numbers.

    YAML 1.1 turns an unquoted all-decimal MAC such as 52:54:00:12:34:56
    into a sexagesimal integer; here it stays a string.
    """

    def construct_mapping(self, node: yaml.MappingNode, deep: bool = False) -> dict[Any, Any]:
        seen: set[Any] = set()
        for key_node, _ in node.value:
            if key_node.tag == _MERGE_TAG or not isinstance(key_node, yaml.ScalarNode):
                continue
            key = self.construct_object(key_node, deep=deep)
            if key in seen:
                raise ValueError(
                    f"Duplicate key '{key}' at line {key_node.start_mark.line + 1}"
                )
            seen.add(key)
        return super().construct_mapping(node, deep=deep)


_LayoutLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag not in (_INT_TAG, _FLOAT_TAG)]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}
_LayoutLoader.add_implicit_resolver(
    _INT_TAG,
    re.compile(
        r"""^(?:[-+]?0b[0-1_]+
        |[-+]?0[0-7_]+
        |[-+]?(?:0|[1-9][0-9_]*)
        |[-+]?0x[0-9a-fA-F_]+)$""",
        re.X,
    ),
    list("-+0123456789"),
)
_LayoutLoader.add_implicit_resolver(
    _FLOAT_TAG,
    re.compile(
        r"""^(?:[-+]?(?:[0-9][0-9_]*)\.[0-9_]*(?:[eE][-+][0-9]+)?
        |\.[0-9][0-9_]*(?:[eE][-+][0-9]+)?
        |[-+]?\.(?:inf|Inf|INF)
        |\.(?:nan|NaN|NAN))$""",
        re.X,
    ),
    list("-+0123456789."),
)


def _normalize_interfaces(raw: Any) -> dict[str, Any]:
    """Turn the ``interfaces`` section into a mapping of name to interface.

    The section may be a mapping keyed by name, in which case a missing
    ``name`` is taken from the key, or a list of interfaces each carrying
    its own name.

    Raises:
        ValueError: If the section has the wrong shape or repeats a name
    """
    if raw is None:
        return {}
    if isinstance(raw, dict):
        interfaces: dict[str, Any] = {}
        for key, value in raw.items():
            if not isinstance(value, dict):
                raise ValueError(f"Interface '{key}' must be a mapping")
            interfaces[str(key)] = {"name": str(key), **value}
        return interfaces
    if isinstance(raw, list):
        interfaces = {}
        for value in raw:
            if not isinstance(value, dict) or "name" not in value:
                raise ValueError("Interfaces given as a list must each be a mapping with a name")
            name = str(value["name"])
            if name in interfaces:
                raise ValueError(f"Duplicate interface name: '{name}'")
            interfaces[name] = value
        return interfaces
    raise ValueError("'interfaces' must be a mapping or a list")


def load_layout(text: str) -> Layout:
    """Build a Layout from YAML text.

    The Layout is not checked; callers must run Layout.check() before
    relying on its derived fields.

    Raises:
        yaml.YAMLError: If the text is not valid YAML
        ValueError: If the document repeats a key or does not describe a
            Layout (this includes pydantic.ValidationError)
    """
    data = yaml.load(text, Loader=_LayoutLoader)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError("Layout document must be a mapping")
    data = dict(data)
    data["interfaces"] = _normalize_interfaces(data.get("interfaces"))
    # Derived fields are rebuilt by check(), never trusted from input.
    data.pop("roots", None)
    data.pop("child2parent", None)
    return Layout.model_validate(data)


def read_layout(src: str | None = None) -> Layout:
    """Read a Layout from a file, or from stdin if src is None or "-".

    Raises:
        FileNotFoundError: If src does not exist
    """
    if src is None or src == "-":
        logger.debug("Reading layout from stdin")
        return load_layout(sys.stdin.read())
    path = Path(src)
    if not path.exists():
        raise FileNotFoundError(f"Layout file not found: {path}")
    logger.debug("Reading layout from %s", path)
    return load_layout(path.read_text())


def dump_layout(layout: Layout) -> str:
    """Serialize a Layout, including its derived fields, to YAML."""
    data = layout.model_dump(mode="json", by_alias=True, exclude_none=True)
    return yaml.safe_dump(data, default_flow_style=False, sort_keys=False)


def write_layout(layout: Layout, dest: str | None = None) -> None:
    """Write a Layout to a file, or to stdout if dest is None or "-"."""
    text = dump_layout(layout)
    if dest is None or dest == "-":
        sys.stdout.write(text)
        return
    Path(dest).write_text(text)
    logger.debug("Wrote layout to %s", dest)
