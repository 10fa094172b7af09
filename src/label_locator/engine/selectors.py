"""
Structural queries used by the label resolver.

Every query is an XPath 1.0 expression built from raw label text. Text is
never spliced into a query unquoted: it always goes through xpath_literal(),
so labels containing quote characters produce valid expressions.
"""

# Controls a user types into or picks from. Hidden inputs are skipped since
# nobody can interact with them.
INPUT_LIKE = (
    "*[self::input[not(translate(@type, 'HIDEN', 'hiden')='hidden')]"
    " or self::textarea or self::select]"
)


def xpath_literal(value: str) -> str:
    """
    Quote a string as an XPath 1.0 literal.

    XPath has no escape sequences, so a value holding both quote kinds is
    assembled with concat(): ``Owner's "nick"`` becomes
    ``concat('Owner', "'", 's "nick"')``.
    """
    if "'" not in value:
        return f"'{value}'"
    if '"' not in value:
        return f'"{value}"'
    pieces = value.split("'")
    quoted = [f"'{piece}'" for piece in pieces]
    return "concat(" + ", \"'\", ".join(quoted) + ")"


def label_query(label_text: str) -> str:
    """Label elements whose normalized text contains label_text."""
    return f"//label[contains(normalize-space(), {xpath_literal(label_text)})]"


def id_query(identifier: str) -> str:
    """Any element whose id equals identifier."""
    return f"//*[@id={xpath_literal(identifier)}]"


def following_input_query(label_text: str) -> str:
    """First input-like element after a matching label, in document order."""
    return f"{label_query(label_text)}/following::{INPUT_LIKE}[1]"


def nested_input_query(label_text: str) -> str:
    """Input-like descendants of a matching label."""
    return f"{label_query(label_text)}//{INPUT_LIKE}"


def attribute_input_query(label_text: str) -> str:
    """Input-like elements whose placeholder or aria-label equals label_text."""
    literal = xpath_literal(label_text)
    return f"//{INPUT_LIKE}[@placeholder={literal} or @aria-label={literal}]"
