from haschema.types.value import Atom, Bool, DottedList, List, Number, String, Value

__all__ = ["Atom", "Bool", "DottedList", "List", "Number", "String", "Value"]
