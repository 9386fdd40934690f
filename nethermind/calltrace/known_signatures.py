from types import MappingProxyType

# ERC20, Ownable & Pausable selectors.  Not consulted when resolving traces
KNOWN_SIGNATURES = MappingProxyType(
    {
        "0xa9059cbb": "transfer(address,uint256)",
        "0x23b872dd": "transferFrom(address,address,uint256)",
        "0x095ea7b3": "approve(address,uint256)",
        "0x70a08231": "balanceOf(address)",
        "0x18160ddd": "totalSupply()",
        "0xdd62ed3e": "allowance(address,address)",
        "0x06fdde03": "name()",
        "0x95d89b41": "symbol()",
        "0x313ce567": "decimals()",
        "0x40c10f19": "mint(address,uint256)",
        "0x42966c68": "burn(uint256)",
        "0x79cc6790": "burnFrom(address,uint256)",
        "0x8da5cb5b": "owner()",
        "0xf2fde38b": "transferOwnership(address)",
        "0x715018a6": "renounceOwnership()",
        "0x5c975abb": "paused()",
        "0x8456cb59": "pause()",
        "0x3f4ba83a": "unpause()",
    }
)


def normalize_selector(selector: str) -> str:
    """
    Lowercases a selector and adds the 0x prefix if missing

    >>> normalize_selector("A9059CBB")
    '0xa9059cbb'
    """
    selector = selector.strip().lower()
    return selector if selector.startswith("0x") else f"0x{selector}"


def get_known_signature(selector: str) -> str | None:
    """
    Returns the signature of a well known function selector, or None if the selector is not in the table

    :param selector: 4 byte selector as hex.  Case & 0x prefix are ignored
    """
    return KNOWN_SIGNATURES.get(normalize_selector(selector))
