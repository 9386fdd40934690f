import logging
import re

from nethermind.calltrace.types import CallType, RecognizedFrame

root_logger = logging.getLogger("nethermind")
logger = root_logger.getChild("calltrace").getChild("trace")

# ├─ [gas] 0x<address>::functionName(params) [CALLTYPE]
# │   └─ [gas] 0x<address>::functionName(params)
FRAME_PATTERN = re.compile(
    r"^(\s*[│├└─\s]*)"  # tree drawing prefix
    r"\[([0-9]+)\]\s+"  # gas
    r"0x([0-9a-fA-F]{40})::"  # address
    r"([a-zA-Z_][a-zA-Z0-9_]*)"  # function name
    r"\(([^)]*)\)"  # raw params
    r"(?:\s+\[([A-Za-z][A-Za-z0-9]*)\])?"  # call type
)

RAW_CALLDATA_PATTERN = re.compile(r"^[0-9a-fA-F]{64,}$")
DEPTH_GLYPHS = frozenset("│├└")
_WHITESPACE = re.compile(r"\s")


def is_raw_calldata(raw_params: str) -> bool:
    """
    Returns True if the parameter text is a contiguous hex run of at least 64 characters once whitespace is
    removed.  The tracer renders undecoded calldata this way, and it must not be classified as parameters.
    """
    return bool(RAW_CALLDATA_PATTERN.match(_WHITESPACE.sub("", raw_params)))


def match_line(line: str) -> RecognizedFrame | None:
    """
    Matches a single line of tracer output against the call frame pattern.  Lines that are not call frames
    (headers, event emissions, return values, etc.) return None.

    >>> frame = match_line("├─ [2300] 0xa0b86991c6218b36c1d19d4a2e9eb0ce3606eb48::decimals() [STATICCALL]")
    >>> frame.function_name, frame.gas, frame.call_type.value
    ('decimals', 2300, 'STATICCALL')

    :param line: single line of tracer output
    :return: :class:`~nethermind.calltrace.types.RecognizedFrame` or None
    """
    match = FRAME_PATTERN.match(line)
    if match is None:
        return None

    indentation, gas, address, function_name, raw_params, call_type = match.groups()

    if is_raw_calldata(raw_params):
        logger.debug(f"Skipping raw encoded data: {function_name}({raw_params})")
        return None

    return RecognizedFrame(
        indentation_prefix=indentation,
        gas=int(gas),
        address=address,
        function_name=function_name,
        raw_params=raw_params,
        call_type=CallType.from_tag(call_type),
    )


def resolve_depth(indentation_prefix: str) -> int:
    """
    Returns the nesting depth of a frame, counting the │, ├ and └ glyphs in its indentation prefix

    >>> resolve_depth("│   │   └─ ")
    3
    """
    return sum(1 for char in indentation_prefix if char in DEPTH_GLYPHS)
