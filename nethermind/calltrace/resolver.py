import logging
from typing import Iterator

from eth_utils import to_normalized_address

from nethermind.calltrace.exceptions import InvalidInput
from nethermind.calltrace.signatures import build_signature, compute_selector
from nethermind.calltrace.trace import classify_parameters, match_line, resolve_depth
from nethermind.calltrace.types import CallRecord, RecognizedFrame, ResolutionResult

root_logger = logging.getLogger("nethermind")
logger = root_logger.getChild("calltrace").getChild("resolver")


def iter_frames(trace_text: str) -> Iterator[tuple[RecognizedFrame, list[str]]]:
    """
    Yields each recognized call frame in the trace along with its inferred parameter types.  Lines that are
    not call frames, and frames with parameters that cannot be classified, are skipped.
    """
    for line in trace_text.splitlines():
        frame = match_line(line)
        if frame is None:
            continue

        abi_types = classify_parameters(frame.raw_params)
        if abi_types is None:
            logger.debug(f"Skipping invalid parameter types: {frame.function_name}({frame.raw_params.strip()})")
            continue

        yield frame, abi_types


def frame_to_record(frame: RecognizedFrame, abi_types: list[str]) -> CallRecord:
    """Converts a recognized frame and its parameter types into a CallRecord"""
    full_signature = build_signature(frame.function_name, abi_types)

    return CallRecord(
        depth=resolve_depth(frame.indentation_prefix),
        call_type=frame.call_type,
        address=to_normalized_address(f"0x{frame.address}"),
        function_name=frame.function_name,
        full_signature=full_signature,
        selector=compute_selector(full_signature),
        gas=hex(frame.gas),
        params=frame.raw_params.strip(),
    )


def resolve_trace(trace_text: str) -> ResolutionResult:
    """
    Resolves the call trace rendered by an EVM tracer into contract calls & function selectors.

    Calls are returned in the order they appear in the trace, tagged with their nesting depth.  Traces without
    any recognizable calls return an empty result.

    :param trace_text: Complete tracer output
    :return: :class:`~nethermind.calltrace.types.ResolutionResult`
    """
    if trace_text is None:
        raise InvalidInput("Trace text is required")
    if not isinstance(trace_text, str):
        raise InvalidInput(f"Trace must be text, received {type(trace_text).__name__}")

    records = [frame_to_record(frame, abi_types) for frame, abi_types in iter_frames(trace_text)]
    logger.info(f"Parsed {len(records)} contract calls")

    return ResolutionResult.from_records(records)
