"""
Checksum algorithms for barcode symbologies.

Every verifier takes the full value (payload followed by its check
character(s)) and returns a bool. Verifiers never raise: a value that is too
short, or holds a symbol the algorithm has no value for, simply fails.
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType

from barcheck.config.logging import get_logger

logger = get_logger(__name__)


class ChecksumAlgorithm(str, Enum):
    """Checksum schemes a symbology rule can select."""

    NONE = "none"
    UNSUPPORTED = "unsupported"
    WEIGHTED_MOD10 = "weighted_mod10"
    ISSN = "issn"
    CODE39 = "code39"
    CODE93 = "code93"
    CODE128 = "code128"
    POSTNET = "postnet"
    ROYALMAIL = "royalmail"
    INTELLIGENTMAIL = "intelligentmail"


@dataclass(frozen=True)
class ChecksumSpec:
    """Algorithm selector with its parameters."""

    algorithm: ChecksumAlgorithm
    weights: tuple[int, ...] = ()
    from_right: bool = True


# Code39 alphabet; a symbol's value is its index.
CODE39_ALPHABET = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ-. $/+%"

# Code93 check characters may take the four shift symbols as values 43-46.
CODE93_ALPHABET = CODE39_ALPHABET + '!"§&'

CODE39_VALUES = MappingProxyType({char: i for i, char in enumerate(CODE39_ALPHABET)})
CODE93_VALUES = MappingProxyType({char: i for i, char in enumerate(CODE93_ALPHABET)})

# Code128 symbol values 96-106 (function, shift, code set, start and stop
# symbols) have no ASCII form and are written with these characters.
CODE128_SYMBOLS = "Çüéâäàå‡ˆ‰Š"
CODE128_SYMBOL_VALUES = MappingProxyType({char: 96 + i for i, char in enumerate(CODE128_SYMBOLS)})

CODE128_SHIFT = 98
CODE128_START = MappingProxyType({103: "A", 104: "B", 105: "C"})
CODE128_STOP = 106
CODE128_MODULUS = 103

# Symbol values that change the active code set, per code set.
CODE128_SWITCHES = MappingProxyType({
    "A": MappingProxyType({99: "C", 100: "B"}),
    "B": MappingProxyType({99: "C", 101: "A"}),
    "C": MappingProxyType({100: "B", 101: "A"}),
})

# Royal Mail 4-state symbols in table order: row = (i // 6 + 1) % 6,
# column = (i % 6 + 1) % 6.
ROYALMAIL_ALPHABET = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ"

ROYALMAIL_ROWS = MappingProxyType({
    "0": 1, "1": 1, "2": 1, "3": 1, "4": 1, "5": 1,
    "6": 2, "7": 2, "8": 2, "9": 2, "A": 2, "B": 2,
    "C": 3, "D": 3, "E": 3, "F": 3, "G": 3, "H": 3,
    "I": 4, "J": 4, "K": 4, "L": 4, "M": 4, "N": 4,
    "O": 5, "P": 5, "Q": 5, "R": 5, "S": 5, "T": 5,
    "U": 0, "V": 0, "W": 0, "X": 0, "Y": 0, "Z": 0,
})

ROYALMAIL_COLUMNS = MappingProxyType({
    "0": 1, "1": 2, "2": 3, "3": 4, "4": 5, "5": 0,
    "6": 1, "7": 2, "8": 3, "9": 4, "A": 5, "B": 0,
    "C": 1, "D": 2, "E": 3, "F": 4, "G": 5, "H": 0,
    "I": 1, "J": 2, "K": 3, "L": 4, "M": 5, "N": 0,
    "O": 1, "P": 2, "Q": 3, "R": 4, "S": 5, "T": 0,
    "U": 1, "V": 2, "W": 3, "X": 4, "Y": 5, "Z": 0,
})

ROYALMAIL_CHECK = MappingProxyType({
    (ROYALMAIL_ROWS[char], ROYALMAIL_COLUMNS[char]): char for char in ROYALMAIL_ALPHABET
})

# USPS-B-3200 frame check sequence parameters.
IMB_GENERATOR_POLYNOMIAL = 0x0F35
IMB_FCS_PRESET = 0x07FF
IMB_FCS_MASK = 0x07FF
IMB_ROUTING_OFFSETS = MappingProxyType({
    0: 0,
    5: 1,
    9: 1 + 100000,
    11: 1 + 100000 + 1000000000,
})


def _is_numeric(value: str) -> bool:
    # str.isdigit() alone also accepts non-ASCII digits such as "²"
    return value.isascii() and value.isdigit()


def calculate_weighted_mod10(
    payload: str,
    weights: Sequence[int] = (3, 1),
    from_right: bool = True,
) -> int:
    """
    Calculate a weighted modulo-10 check digit.

    Algorithm:
    1. Cycle ``weights`` over the payload digits, starting at the rightmost
       digit (``from_right``) or the leftmost one
    2. Sum the weighted digits
    3. Check digit = (10 - (sum mod 10)) mod 10

    GTIN/EAN/UPC use weights (3, 1) from the right, Identcode/Leitcode (4, 9)
    from the right, Code25 (3, 1) from the left.
    """
    if not _is_numeric(payload):
        raise ValueError(f"Payload must be numeric: {payload!r}")

    digits = reversed(payload) if from_right else iter(payload)
    total = sum(int(digit) * weights[i % len(weights)] for i, digit in enumerate(digits))
    return (10 - (total % 10)) % 10


def validate_weighted_mod10(
    value: str,
    weights: Sequence[int] = (3, 1),
    from_right: bool = True,
) -> bool:
    """Validate a value whose last digit is a weighted modulo-10 check digit."""
    if len(value) < 2 or not _is_numeric(value):
        return False
    return calculate_weighted_mod10(value[:-1], weights, from_right) == int(value[-1])


def calculate_issn_check(payload: str) -> str:
    """
    Calculate the ISSN check character for a 7-digit payload.

    Weights 8..2 left to right, check = (11 - (sum mod 11)) mod 11, where a
    result of 10 is written as ``X``.
    """
    if len(payload) != 7 or not _is_numeric(payload):
        raise ValueError(f"ISSN payload must be 7 digits: {payload!r}")

    total = sum(int(digit) * weight for digit, weight in zip(payload, range(8, 1, -1)))
    check = (11 - (total % 11)) % 11
    return "X" if check == 10 else str(check)


def validate_issn(value: str) -> bool:
    """Validate an 8-character ISSN."""
    if len(value) != 8 or not _is_numeric(value[:-1]):
        return False
    return calculate_issn_check(value[:-1]) == value[-1]


def calculate_code39_check(payload: str) -> str:
    """Calculate the modulo-43 Code39 check character."""
    total = sum(CODE39_VALUES[char] for char in payload)
    return CODE39_ALPHABET[total % 43]


def validate_code39(value: str) -> bool:
    """Validate a Code39 value with a trailing modulo-43 check character."""
    if len(value) < 2 or any(char not in CODE39_VALUES for char in value):
        return False
    return calculate_code39_check(value[:-1]) == value[-1]


def _code93_weighted_sum(values: list[int], max_weight: int) -> int:
    # Weights run 1, 2, ... from the right and wrap after max_weight.
    return sum(
        value * ((position % max_weight) + 1)
        for position, value in enumerate(reversed(values))
    )


def calculate_code93_check(payload: str) -> str:
    """
    Calculate the two Code93 check characters ("C" then "K").

    C uses weights 1..20 from the right, K uses weights 1..15 over the
    payload followed by C. Both are reduced modulo 47.
    """
    values = [CODE93_VALUES[char] for char in payload]
    c_value = _code93_weighted_sum(values, 20) % 47
    values.append(c_value)
    k_value = _code93_weighted_sum(values, 15) % 47
    return CODE93_ALPHABET[c_value] + CODE93_ALPHABET[k_value]


def validate_code93(value: str) -> bool:
    """Validate a Code93 value ending with its C and K check characters."""
    if len(value) < 3 or any(char not in CODE93_VALUES for char in value):
        return False
    return calculate_code93_check(value[:-2]) == value[-2:]


def _code128_data_value(char: str, code_set: str) -> int | None:
    code = ord(char)
    if code_set == "A":
        if 32 <= code < 96:
            return code - 32
        if code < 32:
            return code + 64
    elif code_set == "B" and 32 <= code < 128:
        return code - 32
    return None


def code128_values(value: str) -> list[int] | None:
    """
    Split a Code128 string into its symbol values.

    A leading start symbol selects code set A, B or C; without one the value
    is read in code set B. Code set C reads digits in pairs. The stop symbol
    may only be the last character.

    Returns:
        Symbol values, or None if the string cannot be encoded
    """
    if not value:
        return None

    values: list[int] = []
    code_set = "B"
    position = 0
    first = CODE128_SYMBOL_VALUES.get(value[0])
    if first in CODE128_START:
        code_set = CODE128_START[first]
        values.append(first)
        position = 1

    shifted = False
    while position < len(value):
        char = value[position]
        symbol = CODE128_SYMBOL_VALUES.get(char)

        if symbol is not None:
            if symbol == CODE128_STOP:
                if position != len(value) - 1:
                    return None
            elif symbol in CODE128_START:
                return None
            elif code_set == "C" and symbol < 100:
                return None
            elif symbol == CODE128_SHIFT:
                shifted = True
            else:
                code_set = CODE128_SWITCHES[code_set].get(symbol, code_set)
            values.append(symbol)
            position += 1
            continue

        if code_set == "C":
            pair = value[position:position + 2]
            if len(pair) != 2 or not _is_numeric(pair):
                return None
            values.append(int(pair))
            position += 2
            continue

        active = code_set
        if shifted:
            active = "B" if code_set == "A" else "A"
            shifted = False
        data = _code128_data_value(char, active)
        if data is None:
            return None
        values.append(data)
        position += 1

    return values


def calculate_code128_check(values: Sequence[int]) -> int:
    """
    Calculate the modulo-103 Code128 check value.

    ``values`` starts with the start symbol, which has weight 1; every data
    symbol after it is weighted by its position.
    """
    start, *data = values
    return (start + sum(position * symbol for position, symbol in enumerate(data, 1))) % CODE128_MODULUS


def validate_code128(value: str) -> bool:
    """Validate a framed Code128 value: start, data, check symbol, stop."""
    values = code128_values(value)
    if values is None or len(values) < 3:
        return False
    if values[0] not in CODE128_START or values[-1] != CODE128_STOP:
        return False
    return calculate_code128_check(values[:-2]) == values[-2]


def calculate_postnet_check(payload: str) -> int:
    """Calculate the POSTNET/PLANET check digit: (10 - digit sum mod 10) mod 10."""
    if not _is_numeric(payload):
        raise ValueError(f"Payload must be numeric: {payload!r}")
    return (10 - sum(int(digit) for digit in payload) % 10) % 10


def validate_postnet(value: str) -> bool:
    """Validate a POSTNET or PLANET value with its trailing check digit."""
    if len(value) < 2 or not _is_numeric(value):
        return False
    return calculate_postnet_check(value[:-1]) == int(value[-1])


def calculate_royalmail_check(payload: str) -> str:
    """
    Calculate the Royal Mail 4-state customer code check character.

    Row and column values of each symbol are summed separately, each sum is
    reduced modulo 6, and the symbol sitting at that (row, column) is the
    check character.
    """
    rows = sum(ROYALMAIL_ROWS[char] for char in payload) % 6
    columns = sum(ROYALMAIL_COLUMNS[char] for char in payload) % 6
    return ROYALMAIL_CHECK[(rows, columns)]


def validate_royalmail(value: str) -> bool:
    """Validate a Royal Mail value with its trailing check character."""
    if len(value) < 2 or any(char not in ROYALMAIL_ROWS for char in value):
        return False
    return calculate_royalmail_check(value[:-1]) == value[-1]


def intelligent_mail_to_int(value: str) -> int:
    """
    Convert an Intelligent Mail tracking + routing code to its binary value.

    The first 20 digits are the tracking code (barcode identifier, service
    type, mailer id and serial number); the rest is a 0, 5, 9 or 11 digit
    routing (ZIP) code.

    Raises:
        ValueError: If the value is not a well-formed Intelligent Mail code
    """
    if not _is_numeric(value):
        raise ValueError(f"Intelligent Mail code must be numeric: {value!r}")

    tracking, routing = value[:20], value[20:]
    if len(tracking) != 20 or len(routing) not in IMB_ROUTING_OFFSETS:
        raise ValueError(f"Unsupported Intelligent Mail length: {len(value)}")
    if int(tracking[1]) > 4:
        raise ValueError("Second barcode identifier digit must be 0-4")

    number = int(routing) + IMB_ROUTING_OFFSETS[len(routing)] if routing else 0
    number = number * 10 + int(tracking[0])
    number = number * 5 + int(tracking[1])
    for digit in tracking[2:]:
        number = number * 10 + int(digit)
    return number


def calculate_intelligent_mail_fcs(value: str) -> int:
    """
    Calculate the 11-bit Intelligent Mail frame check sequence.

    The 102-bit binary value is laid out as 13 big-endian bytes. The two
    unused high bits of the first byte are skipped, every remaining bit is
    shifted through an 11-bit CRC with generator 0x0F35 preset to 0x07FF.
    """
    data = intelligent_mail_to_int(value).to_bytes(13, "big")

    fcs = IMB_FCS_PRESET
    for index, byte in enumerate(data):
        first_bit = 2 if index == 0 else 0
        shifted = byte << 3
        for _ in range(first_bit):
            shifted <<= 1
        for _ in range(first_bit, 8):
            if (fcs ^ shifted) & 0x400:
                fcs = (fcs << 1) ^ IMB_GENERATOR_POLYNOMIAL
            else:
                fcs <<= 1
            fcs &= IMB_FCS_MASK
            shifted <<= 1
    return fcs


def validate_intelligent_mail(value: str) -> bool:
    """
    Validate that an Intelligent Mail code can carry a frame check sequence.

    The FCS is encoded in the bars, not in the digit string, so there is no
    check character to compare against: the value passes when it converts to
    the 102-bit payload the FCS is computed over.
    """
    try:
        calculate_intelligent_mail_fcs(value)
    except ValueError:
        return False
    return True


def _no_checksum(value: str, spec: ChecksumSpec) -> bool:
    return True


def _unsupported_checksum(value: str, spec: ChecksumSpec) -> bool:
    logger.debug("Checksum verification not available", length=len(value))
    return True


VERIFIERS: MappingProxyType[ChecksumAlgorithm, Callable[[str, ChecksumSpec], bool]] = MappingProxyType({
    ChecksumAlgorithm.NONE: _no_checksum,
    ChecksumAlgorithm.UNSUPPORTED: _unsupported_checksum,
    ChecksumAlgorithm.WEIGHTED_MOD10: lambda value, spec: validate_weighted_mod10(
        value, spec.weights, spec.from_right
    ),
    ChecksumAlgorithm.ISSN: lambda value, spec: validate_issn(value),
    ChecksumAlgorithm.CODE39: lambda value, spec: validate_code39(value),
    ChecksumAlgorithm.CODE93: lambda value, spec: validate_code93(value),
    ChecksumAlgorithm.CODE128: lambda value, spec: validate_code128(value),
    ChecksumAlgorithm.POSTNET: lambda value, spec: validate_postnet(value),
    ChecksumAlgorithm.ROYALMAIL: lambda value, spec: validate_royalmail(value),
    ChecksumAlgorithm.INTELLIGENTMAIL: lambda value, spec: validate_intelligent_mail(value),
})


def verify_checksum(value: str, spec: ChecksumSpec) -> bool:
    """
    Run the algorithm selected by ``spec`` over ``value``.

    Args:
        value: Payload followed by its check character(s)
        spec: Algorithm selector and parameters

    Returns:
        True if the check character(s) match
    """
    return VERIFIERS[spec.algorithm](value, spec)
