"""
Just enough of the Ethereum ABI for eth_call: uint256 arguments in,
bytes32 or string results out.
"""

WORD_DIGITS = 64
UINT256_LIMIT = 1 << 256

# keccak256(signature)[:4]
SCRIPT_SELECTOR = "ebe9eb9f"        # script()
TOKEN_TO_HASH_SELECTOR = "4c9fce48"  # tokenToHash(uint256)


class AbiDecodeError(ValueError):
    pass


def _strip(hex_data: str) -> str:
    if not isinstance(hex_data, str):
        raise AbiDecodeError(f"expected hex string, got {type(hex_data).__name__}")
    return hex_data[2:] if hex_data.startswith("0x") else hex_data


def encode_uint(value: int) -> str:
    value = int(value)
    if value < 0 or value >= UINT256_LIMIT:
        raise ValueError(f"uint256 out of range: {value}")
    return format(value, "x").zfill(WORD_DIGITS)


def encode_call(selector: str, *args: int) -> str:
    return "0x" + selector + "".join(encode_uint(a) for a in args)


def decode_bytes32(hex_data: str) -> str:
    data = _strip(hex_data)
    if len(data) < WORD_DIGITS:
        raise AbiDecodeError("result too short for bytes32")
    return "0x" + data[:WORD_DIGITS].lower()


def decode_string(hex_data: str) -> str:
    data = _strip(hex_data)
    try:
        offset = int(data[:WORD_DIGITS], 16) * 2
        length = int(data[offset:offset + WORD_DIGITS], 16)
        start = offset + WORD_DIGITS
        raw = bytes.fromhex(data[start:start + length * 2])
    except ValueError as e:
        raise AbiDecodeError(f"malformed string result: {e}") from e
    if len(raw) != length:
        raise AbiDecodeError("string result truncated")
    return raw.decode("utf-8")
