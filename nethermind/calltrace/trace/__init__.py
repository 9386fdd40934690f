from .lines import is_raw_calldata, match_line, resolve_depth
from .params import (
    PARAMETER_RULES,
    Inferred,
    Rejected,
    classify_parameter,
    classify_parameters,
    split_parameters,
)
