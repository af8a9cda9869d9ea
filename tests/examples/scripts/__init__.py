"""Sample scripts with and without embedded ``__pyproject__`` metadata.

- valid_*: exactly one well-formed block
- invalid_*: malformed or ambiguous blocks
- plain_*: no block at all
"""
