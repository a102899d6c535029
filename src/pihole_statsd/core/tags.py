"""Tag construction with StatsD-safe escaping."""

from pihole_statsd.core.errors import InvalidTagValue
from pihole_statsd.core.models import Tag, TagValue


def _escape_text(text: str) -> str:
    return text.replace(".", "-").replace(" ", "-")


def _escape_value(value: object) -> TagValue:
    # bool is an int subclass but not a tag value
    if isinstance(value, bool):
        raise InvalidTagValue("value", value)
    if isinstance(value, str):
        return _escape_text(value)
    if isinstance(value, (int, float)):
        return value
    raise InvalidTagValue("value", value)


def make_tag(name: str, value: TagValue) -> Tag:
    """Create a tag, replacing dots and spaces in string fields with dashes.

    Args:
        name: Tag name.
        value: Tag value; numbers pass through unchanged.

    Returns:
        A new Tag.

    Raises:
        InvalidTagValue: If ``name`` is not a string, or ``value`` is neither
            a string nor a number.
    """
    if not isinstance(name, str):
        raise InvalidTagValue("name", name)
    return Tag(name=_escape_text(name), value=_escape_value(value))
