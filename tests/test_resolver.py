import random

import pytest

from nethermind.calltrace import InvalidInput, resolve_trace
from nethermind.calltrace.signatures import compute_selector
from nethermind.calltrace.types import CallType, ResolutionResult
from tests.resources.traces import NO_CALLS_TRACE, SWAP_TRACE, TRANSFER_LINE


def test_transfer_scenario():
    result = resolve_trace(TRANSFER_LINE)

    assert result.total_calls == 1
    call = result.contract_calls[0]

    assert call.function_name == "transfer"
    assert call.full_signature == "transfer(address,uint256)"
    assert call.selector == "0xa9059cbb"
    assert call.params == "0x1111111111111111111111111111111111111111, 1000000000000000000 [1e18]"
    assert call.depth == 1
    assert call.call_type == CallType.CALL
    assert call.address == "0xa0b86991c6218b36c1d19d4a2e9eb0ce3606eb48"
    assert call.gas == "0x8fc"


def test_resolver_reflects_textual_arity(frame_line):
    result = resolve_trace(frame_line("paused", "false"))

    assert result.contract_calls[0].full_signature == "paused(bool)"
    assert result.contract_calls[0].selector == compute_selector("paused(bool)")
    assert result.contract_calls[0].selector != "0x5c975abb"

    no_args = resolve_trace(frame_line("paused"))
    assert no_args.contract_calls[0].full_signature == "paused()"
    assert no_args.contract_calls[0].selector == "0x5c975abb"


def test_raw_calldata_call_is_excluded(frame_line):
    trace = "\n".join([frame_line("fallback", "ab" * 40, depth=1), frame_line("owner", depth=1)])
    result = resolve_trace(trace)

    assert result.total_calls == 1
    assert result.contract_calls[0].function_name == "owner"


def test_exactly_64_hex_characters_drop_the_call(frame_line):
    result = resolve_trace(frame_line("execute", "0" * 64))

    assert result.total_calls == 0
    assert result.function_signatures == ()


def test_duplicate_selectors_are_counted_once(frame_line):
    trace = "\n".join(
        [
            frame_line("approve", "0x1111111111111111111111111111111111111111, 100 [1e2]", depth=1),
            frame_line("approve", "0x2222222222222222222222222222222222222222, 5", depth=2),
        ]
    )
    result = resolve_trace(trace)

    assert result.total_functions == 1
    assert result.total_calls == 2
    assert result.function_signatures[0].selector == "0x095ea7b3"
    assert result.function_signatures[0].name == "approve(address,uint256)"


def test_empty_trace():
    result = resolve_trace("")

    assert result == ResolutionResult()
    assert result.is_empty()
    assert result.to_dict() == {
        "functionSignatures": [],
        "contractCalls": [],
        "totalFunctions": 0,
        "totalCalls": 0,
    }


def test_trace_without_calls():
    assert resolve_trace(NO_CALLS_TRACE) == ResolutionResult()


@pytest.mark.parametrize("trace", [None, b"  [2300] 0x00::owner()", 42, ["line"]])
def test_invalid_input(trace):
    with pytest.raises(InvalidInput):
        resolve_trace(trace)


def test_swap_trace():
    result = resolve_trace(SWAP_TRACE)

    assert [call.function_name for call in result.contract_calls] == [
        "swapExactTokensForTokens",
        "balanceOf",
        "balanceOf",
        "transferFrom",
        "transferFrom",
        "balanceOf",
    ]
    assert [call.depth for call in result.contract_calls] == [0, 1, 2, 1, 2, 1]
    assert [call.call_type for call in result.contract_calls] == [
        CallType.CALL,
        CallType.STATICCALL,
        CallType.DELEGATECALL,
        CallType.CALL,
        CallType.DELEGATECALL,
        CallType.STATICCALL,
    ]

    swap = result.contract_calls[0]
    assert swap.full_signature == "swapExactTokensForTokens(uint256,uint256,uint256[],address,uint256)"
    assert swap.gas == "0xe222"

    # Checksummed addresses in the trace are lowercased
    assert result.contract_calls[1].address == "0xa0b86991c6218b36c1d19d4a2e9eb0ce3606eb48"

    assert result.total_calls == 6
    assert result.total_functions == 3
    assert [sig.name for sig in result.function_signatures] == [
        "swapExactTokensForTokens(uint256,uint256,uint256[],address,uint256)",
        "balanceOf(address)",
        "transferFrom(address,address,uint256)",
    ]


def test_skipped_lines_are_logged(debug_logs):
    resolve_trace(SWAP_TRACE)

    assert "Skipping raw encoded data: fallback(" in debug_logs.text
    assert "Skipping invalid parameter types: execute(0x" in debug_logs.text
    assert "Parsed 6 contract calls" in debug_logs.text


def test_resolution_is_deterministic():
    first, second = resolve_trace(SWAP_TRACE), resolve_trace(SWAP_TRACE)

    assert first == second
    assert first.to_json() == second.to_json()


def test_whitespace_in_params_does_not_change_selector(frame_line):
    compact = resolve_trace(frame_line("transfer", "0x1111111111111111111111111111111111111111,5"))
    spaced = resolve_trace(frame_line("transfer", "  0x1111111111111111111111111111111111111111 ,   5 [5e0]  "))

    assert compact.contract_calls[0].selector == spaced.contract_calls[0].selector == "0xa9059cbb"
    assert spaced.contract_calls[0].params == "0x1111111111111111111111111111111111111111 ,   5 [5e0]"


def test_catalog_keeps_first_signature_per_selector(frame_line, random_address):
    names = ["approve", "transfer", "mint", "burn", "deposit"]
    for _ in range(20):
        lines = [
            frame_line(
                random.choice(names),
                f"{random_address()}, {random.randint(0, 10**18)}",
                depth=random.randint(0, 4),
            )
            for _ in range(random.randint(1, 15))
        ]
        result = resolve_trace("\n".join(lines))

        assert result.total_calls == len(lines)
        assert result.total_calls >= result.total_functions
        assert (result.total_calls == result.total_functions) == (
            len({call.selector for call in result.contract_calls}) == len(result.contract_calls)
        )

        for signature in result.function_signatures:
            first_call = next(call for call in result.contract_calls if call.selector == signature.selector)
            assert signature.name == first_call.full_signature


def test_crlf_line_endings(frame_line):
    trace = frame_line("owner", depth=1) + "\r\n" + frame_line("decimals", depth=1, call_type="staticcall") + "\r\n"
    result = resolve_trace(trace)

    assert [call.full_signature for call in result.contract_calls] == ["owner()", "decimals()"]


def test_depth_may_jump(frame_line):
    result = resolve_trace("\n".join([frame_line("outer"), frame_line("inner", depth=3)]))
    assert [call.depth for call in result.contract_calls] == [0, 3]


def test_to_dict_shape():
    call = resolve_trace(TRANSFER_LINE).to_dict()["contractCalls"][0]

    assert call == {
        "depth": 1,
        "type": "CALL",
        "address": "0xa0b86991c6218b36c1d19d4a2e9eb0ce3606eb48",
        "functionName": "transfer",
        "fullSignature": "transfer(address,uint256)",
        "selector": "0xa9059cbb",
        "gas": "0x8fc",
        "params": "0x1111111111111111111111111111111111111111, 1000000000000000000 [1e18]",
    }


def test_non_ascii_digits_are_not_integers():
    line = TRANSFER_LINE.replace("1000000000000000000 [1e18]", "١٢٣")
    result = resolve_trace(line)

    assert result.total_calls == 0
    assert result.function_signatures == ()
