"""Classification Stage - Section key and character class per entry."""

from bookindex.models import CharClass, Classification, Entry


def section_key(topic: str) -> str:
    """Uppercase first character of a topic.

    Characters whose uppercase form is longer than one character
    (e.g. "ß") keep their original form.
    """
    first = topic[0]
    upper = first.upper()
    return upper if len(upper) == 1 else first


def char_class(key: str) -> CharClass:
    """ASCII letter test; not locale-aware."""
    if "A" <= key <= "Z":
        return CharClass.LETTER
    return CharClass.OTHER


def classify(entry: Entry) -> Classification:
    """Compute the (SectionKey, CharClass) pair for an entry."""
    key = section_key(entry.topic)
    return Classification(key=key, char_class=char_class(key))
