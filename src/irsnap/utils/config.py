"""
Configuration constants for the IR dump format
"""

# Line layout
INDENT_WIDTH = 4  # Spaces per depth level
INDENT_CHAR = " "
FIELD_SEPARATOR = " - "
LINE_TERMINATOR = "\n"

# Content escaping (keeps every node on one line and the separator unambiguous)
CARRIAGE_RETURN = "\r"
NEWLINE = "\n"
ESCAPED_NEWLINE = "\\n"
ESCAPED_SEPARATOR = "\\-"

# Node naming
NODE_NAME_SUFFIX = "IntermediateNode"
PATH_SEPARATOR = "/"

# Diagnostics
DIAGNOSTICS_MARKER = " | "
DIAGNOSTIC_HASH_ALGORITHM = "md5"
MESSAGE_ENCODING = "utf-8"

# Enum labels written into content fields
TAG_MODE_LABEL = "TagMode"
ATTRIBUTE_STYLE_LABEL = "HtmlAttributeValueStyle"
ELEMENT_CAPTURE_LABEL = "Element"

# Trust boundary used by module-based trust policies
TRUSTED_MODULE_PREFIX = "irsnap.ir"

# File encoding constants
DEFAULT_FILE_ENCODING = "utf-8"
