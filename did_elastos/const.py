"""Constants for did:elastos identifiers."""

METHOD_NAME = "elastos"

DID_PREFIX = "did"

WHITESPACE = " \t\r\n"

SEP_PARAMS = ";"
SEP_PATH = "/"
SEP_QUERY = "?"
SEP_FRAGMENT = "#"
SEP_METHOD = ":"
SEP_VALUE = "="
SEP_QUERY_PARAM = "&"

STRING_EXTRA_CHARS = "_-."
STRING_LEADING_EXTRA_CHARS = "_"
