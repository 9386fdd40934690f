from .call_tree import CallNode, build_call_tree
from .exceptions import CallTraceError, InvalidInput
from .known_signatures import KNOWN_SIGNATURES, get_known_signature
from .resolver import resolve_trace
from .signatures import build_signature, compute_selector
from .types import CallRecord, CallType, FunctionSignature, RecognizedFrame, ResolutionResult
