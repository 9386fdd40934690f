import json
from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Sequence


class CallType(str, Enum):
    """
    Call type tags rendered by the tracer after each call frame, ie ``[STATICCALL]``.  Frames without a tag
    are plain calls.
    """

    CALL = "CALL"
    STATICCALL = "STATICCALL"
    DELEGATECALL = "DELEGATECALL"
    CALLCODE = "CALLCODE"
    CREATE = "CREATE"
    CREATE2 = "CREATE2"

    @classmethod
    def from_tag(cls, tag: str | None) -> "CallType | str":
        """
        Parses a call type tag.  Missing tags default to CALL, and tags that are not known call types are
        returned as their upper-cased text

        >>> CallType.from_tag("staticcall")
        <CallType.STATICCALL: 'STATICCALL'>
        >>> CallType.from_tag("Selfdestruct")
        'SELFDESTRUCT'
        """
        if not tag:
            return cls.CALL

        tag = tag.upper()
        try:
            return cls(tag)
        except ValueError:
            return tag


def call_type_str(call_type: CallType | str) -> str:
    """Returns the plain string of a call type"""
    return call_type.value if isinstance(call_type, CallType) else call_type


@dataclass(frozen=True)
class RecognizedFrame:
    """Single call frame extracted from one line of tracer output"""

    indentation_prefix: str
    gas: int
    address: str
    function_name: str
    raw_params: str
    call_type: CallType | str = CallType.CALL


@dataclass(frozen=True)
class CallRecord:
    """Resolved contract call with inferred function signature & selector"""

    depth: int
    call_type: CallType | str
    address: str
    function_name: str
    full_signature: str
    selector: str
    gas: str

    params: str
    """ Parameter text as rendered by the tracer.  Not the inferred types """

    def to_dict(self) -> dict[str, Any]:
        return {
            "depth": self.depth,
            "type": call_type_str(self.call_type),
            "address": self.address,
            "functionName": self.function_name,
            "fullSignature": self.full_signature,
            "selector": self.selector,
            "gas": self.gas,
            "params": self.params,
        }


@dataclass(frozen=True)
class FunctionSignature:
    """Unique selector found in a trace, and the first full signature that produced it"""

    selector: str
    name: str

    def to_dict(self) -> dict[str, str]:
        return asdict(self)


@dataclass(frozen=True)
class ResolutionResult:
    """
    Result of resolving a single trace.  Contract calls are stored in the order they appear in the trace,
    and function signatures are de-duplicated by selector, keeping the first signature encountered.
    """

    contract_calls: tuple[CallRecord, ...] = ()
    function_signatures: tuple[FunctionSignature, ...] = ()

    total_functions: int = 0
    """ Number of unique selectors """

    total_calls: int = 0
    """ Number of contract calls, including calls that share a selector """

    @classmethod
    def from_records(cls, records: Sequence[CallRecord]) -> "ResolutionResult":
        """
        Builds a ResolutionResult from an ordered sequence of call records

        :param records: Call records in trace order
        :return: :class:`ResolutionResult`
        """
        catalog: dict[str, FunctionSignature] = {}
        for record in records:
            if record.selector not in catalog:
                catalog[record.selector] = FunctionSignature(selector=record.selector, name=record.full_signature)

        return cls(
            contract_calls=tuple(records),
            function_signatures=tuple(catalog.values()),
            total_functions=len(catalog),
            total_calls=len(records),
        )

    def is_empty(self) -> bool:
        """Returns True if no contract calls could be resolved from the trace"""
        return self.total_calls == 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "functionSignatures": [sig.to_dict() for sig in self.function_signatures],
            "contractCalls": [call.to_dict() for call in self.contract_calls],
            "totalFunctions": self.total_functions,
            "totalCalls": self.total_calls,
        }

    def to_json(self, indent: int | None = None) -> str:
        return json.dumps(self.to_dict(), indent=indent)
