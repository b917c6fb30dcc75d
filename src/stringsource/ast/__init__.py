"""Document tree model consumed by :class:`stringsource.StringSource`."""

from .nodes import (
    Node,
    Parent,
    Text,
    InlineCode,
    Literal,
    Image,
    Paragraph,
    Emphasis,
    Link,
    Html,
    Container,
    payload_of,
    children_of,
)
