from functools import lru_cache
from typing import Sequence

from eth_utils.abi import function_signature_to_4byte_selector


def build_signature(function_name: str, abi_types: Sequence[str]) -> str:
    """
    Builds the canonical function signature from a function name and its parameter types.

    >>> from nethermind.calltrace.signatures import build_signature
    >>> build_signature("transferFrom", ["address", "address", "uint256"])
    'transferFrom(address,address,uint256)'
    >>> build_signature("totalSupply", [])
    'totalSupply()'
    """
    return f"{function_name}({','.join(abi_types)})"


@lru_cache(maxsize=4096)
def compute_selector(function_signature: str) -> str:
    """
    Returns the 4 byte selector of a function signature as a 0x prefixed, lowercase hex string.  The selector
    is the first 4 bytes of the keccak256 hash of the signature.

    >>> compute_selector("transfer(address,uint256)")
    '0xa9059cbb'
    """
    return "0x" + function_signature_to_4byte_selector(function_signature).hex()


def signature_to_name(function_sig: str) -> str:
    """
    Removes types from function signature

    >>> signature_to_name("approve(address,uint256)")
    'approve'
    """
    index = function_sig.find("(")
    if index != -1:
        return function_sig[:index]
    return function_sig
