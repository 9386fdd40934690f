"""
Infers ABI types from the parameter values rendered by the tracer.

Each parameter is passed through :data:`PARAMETER_RULES` in order.  A rule either infers a type, rejects
the parameter, or returns None if the rule does not apply and the next rule should be tried.  A single
rejected parameter rejects the whole call, since a partially typed signature produces a wrong selector.
"""
import logging
import re
from dataclasses import dataclass
from typing import Callable, Sequence

root_logger = logging.getLogger("nethermind")
logger = root_logger.getChild("calltrace").getChild("params")


@dataclass(frozen=True)
class Inferred:
    """Parameter was classified as abi_type"""

    abi_type: str


@dataclass(frozen=True)
class Rejected:
    """Parameter cannot be classified, and the call it belongs to should be discarded"""

    reason: str


RuleOutcome = Inferred | Rejected | None
ParameterRule = Callable[[str], RuleOutcome]

_UNDECODED_HEX = re.compile(r"^[0-9a-fA-F]{32,}$")
_ANNOTATED_INTEGER = re.compile(r"^[0-9]+(\s+\[[0-9.e+-]+\])?$")
_TYPE_NAME = re.compile(r"^[A-Za-z][A-Za-z0-9_\[\]]*$")
_IDENTIFIER_PREFIX = re.compile(r"^[A-Za-z][A-Za-z0-9_]*")


def undecoded_hex_rule(token: str) -> RuleOutcome:
    """Long hex strings without a 0x prefix are undecoded data, not a parameter"""
    if _UNDECODED_HEX.match(token):
        return Rejected(f"undecoded hex data {token[:16]}...")
    return None


def hex_literal_rule(token: str) -> RuleOutcome:
    """
    Classifies 0x prefixed values by length.  20 byte values are addresses, 32 byte values are bytes32 and
    values up to 4 bytes are dynamic bytes.  Any other length is rejected.
    """
    if not token.startswith("0x"):
        return None

    if len(token) == 42:
        return Inferred("address")
    if len(token) == 66:
        return Inferred("bytes32")
    if 2 < len(token) <= 10:
        return Inferred("bytes")

    return Rejected(f"hex value with unsupported length {len(token)}")


def bool_rule(token: str) -> RuleOutcome:
    if token in ("true", "false"):
        return Inferred("bool")
    return None


def integer_rule(token: str) -> RuleOutcome:
    """
    Decimal integers, including those followed by the tracer's scientific notation annotation,
    ie ``1000000000000000000 [1e18]``
    """
    if _ANNOTATED_INTEGER.match(token):
        return Inferred("uint256")
    return None


def array_rule(token: str) -> RuleOutcome:
    """Element types are not inferred.  All array literals are treated as uint256[]"""
    if token.startswith("[") and token.endswith("]"):
        return Inferred("uint256[]")
    return None


def type_name_rule(token: str) -> RuleOutcome:
    if _TYPE_NAME.match(token):
        return Inferred(token)
    return None


def identifier_prefix_rule(token: str) -> RuleOutcome:
    """Last resort.  Uses the leading identifier of the value as its type, or rejects the parameter"""
    match = _IDENTIFIER_PREFIX.match(token)
    if match:
        return Inferred(match.group(0))
    return Rejected(f"unable to infer type for {token!r}")


PARAMETER_RULES: tuple[ParameterRule, ...] = (
    undecoded_hex_rule,
    hex_literal_rule,
    bool_rule,
    integer_rule,
    array_rule,
    type_name_rule,
    identifier_prefix_rule,
)


def split_parameters(raw_params: str) -> list[str]:
    """
    Splits parameter text on top level commas.  Commas inside brackets or parentheses do not split, so array
    literals are kept as a single parameter.

    >>> split_parameters("0x01, [1, 2, 3], true")
    ['0x01', '[1, 2, 3]', 'true']
    """
    params, current, nesting = [], "", 0
    for char in raw_params:
        if char in "[(":
            nesting += 1
        elif char in "])":
            nesting = max(nesting - 1, 0)
        elif char == "," and nesting == 0:
            params.append(current.strip())
            current = ""
            continue
        current += char

    params.append(current.strip())
    return params


def classify_parameter(token: str, rules: Sequence[ParameterRule] = PARAMETER_RULES) -> Inferred | Rejected:
    """
    Applies rules to a single stripped parameter, returning the outcome of the first rule that applies

    :param token: Parameter value as rendered by the tracer
    :param rules: Ordered rules to apply.  Defaults to :data:`PARAMETER_RULES`
    """
    for rule in rules:
        outcome = rule(token)
        if outcome is not None:
            return outcome

    return Rejected(f"no rule matched {token!r}")


def classify_parameters(raw_params: str) -> list[str] | None:
    """
    Infers the ABI types of a comma separated parameter list.  Returns None if any parameter is rejected.

    >>> classify_parameters("0x1111111111111111111111111111111111111111, 1000000000000000000 [1e18]")
    ['address', 'uint256']
    >>> classify_parameters("") == []
    True

    :param raw_params: Parameter text between the parentheses of a call frame
    :return: list of ABI types, or None if the call should be discarded
    """
    if not raw_params.strip():
        return []

    abi_types = []
    for token in split_parameters(raw_params):
        outcome = classify_parameter(token)
        if isinstance(outcome, Rejected):
            logger.debug(f"Rejecting parameters ({raw_params}): {outcome.reason}")
            return None
        abi_types.append(outcome.abi_type)

    if abi_types and ",".join(abi_types)[0] in "0123456789":
        logger.debug(f"Rejecting parameters ({raw_params}): inferred types begin with a digit")
        return None

    return abi_types
