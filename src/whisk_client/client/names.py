"""
Qualified names and REST paths for actions and triggers.

A qualified name looks like ``[/]namespace/name`` where the name may contain
a package segment (``/guest/demo/hi`` is action ``demo/hi`` in namespace
``guest``). Without a namespace segment the default namespace ``_`` is used.
"""

from typing import NamedTuple

DEFAULT_NAMESPACE = "_"
DELIMITER = "/"

ACTIONS_PATH = "/api/v1/namespaces/{namespace}/actions/{name}"
TRIGGERS_PATH = "/api/v1/namespaces/{namespace}/triggers/{name}"


class QualifiedName(NamedTuple):
    """A resource name split into its namespace and name."""

    namespace: str
    name: str


def parse_qualified_name(qualified_name: str) -> QualifiedName:
    """Split a qualified name into namespace and name.

    Args:
        qualified_name: Name such as ``Foo``, ``/Foo``, ``Bar/Foo`` or
            ``/Bar/Foo/Baz``

    Returns:
        QualifiedName, e.g. ``("Bar", "Foo/Baz")``

    Raises:
        ValueError: If nothing is left after stripping slashes
    """
    stripped = qualified_name.strip(DELIMITER)
    if not stripped:
        raise ValueError(f"Invalid qualified name: {qualified_name!r}")

    segments = stripped.split(DELIMITER)
    if len(segments) > 1:
        return QualifiedName(segments[0], DELIMITER.join(segments[1:]))

    return QualifiedName(DEFAULT_NAMESPACE, segments[0])


def _blocking_query(blocking: bool) -> str:
    return "?blocking=" + ("true" if blocking else "false")


def action_path(action: str, blocking: bool = True) -> str:
    """Build the invocation path for an action."""
    namespace, name = parse_qualified_name(action)
    return ACTIONS_PATH.format(namespace=namespace, name=name) + _blocking_query(blocking)


def trigger_path(event: str) -> str:
    """Build the fire path for a trigger.

    Triggers are always fired in blocking mode.
    """
    namespace, name = parse_qualified_name(event)
    return TRIGGERS_PATH.format(namespace=namespace, name=name) + _blocking_query(True)
