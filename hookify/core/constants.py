"""Shared constants for the conversion pipeline.

Diagnostic message templates live here so tests and reports can refer to
them without duplicating wording.
"""

# =============================================================================
# Diagnostic messages
# =============================================================================

MSG_COMPLEX_STATE = "Unable to refactor complex state initialization"

MSG_UNHANDLED_THIS = "Unhandled 'this'"

# Updater alias read of a property other than the one being set
MSG_ALIAS_MISMATCH = "Unsupported state access '{alias}.{name}' while updating '{field}'"

# Updater alias used other than as `<alias>.<field>`
MSG_ALIAS_ESCAPE = "Unsupported use of state alias '{alias}'"

MSG_DROPPED_MEMBER = "Unable to convert {what} '{name}'"

MSG_MISSING_RENDER = "No render method found"

MSG_NAME_COLLISION = "Binding '{name}' would be declared twice; component left unconverted"

MSG_RESERVED_NAME = "Member '{name}' is a reserved word and cannot be a local binding; component left unconverted"
