"""Split raw autocomplete input into a namespace qualifier and a name pattern."""

from __future__ import annotations

from entity_autocomplete.models import ParsedInput

NAMESPACE_SEPARATOR = "/"


def parse_input(raw_input: str) -> ParsedInput:
    """Split ``raw_input`` at the first ``/``.

    ``"pl/testService"`` -> namespace ``"pl"``, pattern ``"testService"``.
    ``"pl/"`` keeps an empty pattern with the namespace filter in place, and
    ``"/x"`` keeps an empty (but present) namespace. Input without a
    separator has no namespace and the whole string is the pattern.
    """
    text = raw_input or ""
    namespace, sep, name_pattern = text.partition(NAMESPACE_SEPARATOR)
    if not sep:
        return ParsedInput(raw=text, namespace=None, name_pattern=text)
    return ParsedInput(raw=text, namespace=namespace, name_pattern=name_pattern)
