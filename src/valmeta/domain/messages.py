"""Message ids for rule descriptors.

Message ids double as the English templates. Placeholders use the
``{{ name }}`` form and are filled after translation with
``field_name``, ``limit``, ``min`` and ``max``.
"""

from __future__ import annotations

REQUIRED = "The '{{ field_name }}' field is required."
REGEX = "The '{{ field_name }}' value is not valid"

RANGE_MIN = "The field '{{ field_name }}' value should be {{ limit }} or more."
RANGE_MAX = "The field '{{ field_name }}' value should be {{ limit }} or less."
RANGE_BOTH = "The field '{{ field_name }}' value should be in range {{ min }} to {{ max }}."

LESS_THAN_OR_EQUAL = "The field '{{ field_name }}' value should be less than {{ limit }}."
GREATER_THAN_OR_EQUAL = "The field '{{ field_name }}' value should be greater than {{ limit }}."

LENGTH_MIN = "The field '{{ field_name }}' should have {{ limit }} or more."
LENGTH_MAX = "The field '{{ field_name }}' should have {{ limit }} or less."
LENGTH_BOTH = "The field '{{ field_name }}' should have from {{ min }} to {{ max }} characters."

INTEGER = "The '{{ field_name }}' field value is not a valid integer."
NUMBER = "The '{{ field_name }}' field value is not a valid number."
DATE = "The '{{ field_name }}' field value is not a valid date."
EMAIL = "The '{{ field_name }}' field value is not a valid email address."
CREDIT_CARD = "The '{{ field_name }}' field value is not a valid credit card number."
URL = "The '{{ field_name }}' field value is not a valid url."

ALL_MESSAGES: tuple[str, ...] = (
    REQUIRED,
    REGEX,
    RANGE_MIN,
    RANGE_MAX,
    RANGE_BOTH,
    LESS_THAN_OR_EQUAL,
    GREATER_THAN_OR_EQUAL,
    LENGTH_MIN,
    LENGTH_MAX,
    LENGTH_BOTH,
    INTEGER,
    NUMBER,
    DATE,
    EMAIL,
    CREDIT_CARD,
    URL,
)
