"""How each property operation affects the per-cell defaulted flags."""

from enum import Enum
from typing import Dict


class Operation(Enum):
    """Mutating operations on a grid property."""
    LOAD = "load"
    ASSIGN = "assign"
    SET = "set"
    ADD = "add"
    MULTIPLY = "multiply"
    SCALE = "scale"
    COPY = "copy"
    MINVALUE = "minvalue"
    MAXVALUE = "maxvalue"
    MASKED_SET = "masked_set"


class DefaultedEffect(Enum):
    """Effect of an operation on the defaulted flags of the cells it touches."""
    KEEP = "keep"                  # arithmetic on top of the current value
    CLEAR = "clear"                # every touched cell becomes explicit
    CLEAR_SELECTED = "clear_selected"  # only cells the operation reports as assigned
    COPY_SOURCE = "copy_source"    # flags travel with the copied values


DEFAULT_POLICY: Dict[Operation, DefaultedEffect] = {
    Operation.LOAD: DefaultedEffect.CLEAR_SELECTED,      # explicit deck values only
    Operation.ASSIGN: DefaultedEffect.CLEAR,
    Operation.SET: DefaultedEffect.CLEAR,
    Operation.ADD: DefaultedEffect.KEEP,
    Operation.MULTIPLY: DefaultedEffect.KEEP,
    Operation.SCALE: DefaultedEffect.KEEP,
    Operation.COPY: DefaultedEffect.COPY_SOURCE,
    Operation.MINVALUE: DefaultedEffect.CLEAR_SELECTED,  # clamped cells
    Operation.MAXVALUE: DefaultedEffect.CLEAR_SELECTED,  # clamped cells
    Operation.MASKED_SET: DefaultedEffect.CLEAR,
}
