# Core type aliases for the haschema data model.
# The Value union in haschema.types.value represents both parsed forms and
# evaluated results; there is no separate runtime representation.
#
# Naming guidance:
# - SExpression: use in reader code to denote parsed forms.
# - LispValue:   use in evaluator/runtime code to denote evaluated values.
# Both resolve to the same union.

from typing import Literal

from haschema.types.value import Value

LispValue = Value
SExpression = Value

# "lenient" reproduces silent coercion, "strict" raises the error taxonomy.
EvalMode = Literal["lenient", "strict"]
