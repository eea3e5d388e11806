"""
Declarative symbology rules: allowed lengths, character sets and checksums.

Every rule here is an immutable module-level constant. Adapters wrap a rule;
nothing mutates one at runtime.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from barcheck.barcode.checksums import (
    CODE39_ALPHABET,
    ChecksumAlgorithm,
    ChecksumSpec,
    code128_values,
)
from barcheck.models.symbology import Symbology

DIGITS = "0123456789"
UPPER_ALPHANUMERIC = DIGITS + "ABCDEFGHIJKLMNOPQRSTUVWXYZ"


# -- Lengths -----------------------------------------------------------------


@dataclass(frozen=True)
class FixedLength:
    """One exact length, or one of several."""

    lengths: tuple[int, ...]

    def __post_init__(self) -> None:
        if not self.lengths:
            raise ValueError("FixedLength needs at least one length")
        if any(length < 1 for length in self.lengths):
            raise ValueError(f"Lengths must be positive: {self.lengths}")

    def matches(self, length: int) -> bool:
        return length in self.lengths

    def describe(self) -> str:
        return "/".join(str(length) for length in self.lengths)


@dataclass(frozen=True)
class AnyLength:
    """Any length from ``minimum`` up, optionally capped at ``maximum``."""

    minimum: int = 1
    maximum: int | None = None

    def matches(self, length: int) -> bool:
        if length < self.minimum:
            return False
        return self.maximum is None or length <= self.maximum

    def describe(self) -> str:
        if self.maximum is not None:
            return f"{self.minimum}-{self.maximum}"
        if self.minimum > 1:
            return f"{self.minimum}+"
        return "any"


@dataclass(frozen=True)
class ParityLength:
    """Only even (or only odd) lengths."""

    even: bool
    minimum: int = 1

    def matches(self, length: int) -> bool:
        return length >= self.minimum and (length % 2 == 0) == self.even

    def describe(self) -> str:
        return "even" if self.even else "odd"


LengthSpec = FixedLength | AnyLength | ParityLength


def exact(*lengths: int) -> FixedLength:
    return FixedLength(tuple(lengths))


# -- Character sets ----------------------------------------------------------


@dataclass(frozen=True)
class Alphabet:
    """A fixed, case-sensitive set of allowed symbols."""

    symbols: frozenset[str]

    @classmethod
    def of(cls, symbols: str) -> "Alphabet":
        return cls(frozenset(symbols))

    def accepts(self, value: str) -> bool:
        return bool(value) and all(char in self.symbols for char in value)

    def payload(self, value: str) -> str:
        return value

    def describe(self) -> str:
        return "".join(sorted(self.symbols))


@dataclass(frozen=True)
class AsciiRange:
    """Every character whose code point is below ``limit``."""

    limit: int = 128

    def accepts(self, value: str) -> bool:
        return bool(value) and all(ord(char) < self.limit for char in value)

    def payload(self, value: str) -> str:
        return value

    def describe(self) -> str:
        return f"ASCII 0-{self.limit - 1}"


@dataclass(frozen=True)
class FramedAlphabet:
    """
    Interior symbols optionally wrapped in a start/stop pair.

    When any frame symbol occurs, the value must start and end with symbols
    of the same frame group and contain no frame symbol in between. Start and
    stop are picked independently within that group.
    """

    interior: Alphabet
    frames: tuple[frozenset[str], ...]

    def accepts(self, value: str) -> bool:
        if not value:
            return False
        for group in self.frames:
            if any(char in group for char in value):
                if len(value) < 3 or value[0] not in group or value[-1] not in group:
                    return False
                return self.interior.accepts(value[1:-1])
        return self.interior.accepts(value)

    def payload(self, value: str) -> str:
        for group in self.frames:
            if value and value[0] in group:
                return value[1:-1]
        return value

    def describe(self) -> str:
        frames = " or ".join("".join(sorted(group)) for group in self.frames)
        return f"{self.interior.describe()} framed by {frames}"


@dataclass(frozen=True)
class TrailingSymbolAlphabet:
    """
    A body alphabet plus extra symbols allowed only in the last position.

    The trailing symbols are only accepted for the listed lengths.
    """

    body: Alphabet
    trailing: frozenset[str]
    lengths: frozenset[int]

    def accepts(self, value: str) -> bool:
        if not value:
            return False
        if len(value) in self.lengths and value[-1] in self.trailing:
            return len(value) > 1 and self.body.accepts(value[:-1])
        return self.body.accepts(value)

    def payload(self, value: str) -> str:
        return value

    def describe(self) -> str:
        return f"{self.body.describe()} (last: {''.join(sorted(self.trailing))})"


@dataclass(frozen=True)
class Bracketed:
    """An alphabet that may be wrapped in a single pair of brackets."""

    inner: Alphabet
    opening: str = "("
    closing: str = ")"

    def accepts(self, value: str) -> bool:
        if value.startswith(self.opening):
            if len(value) < 3 or not value.endswith(self.closing):
                return False
            value = value[1:-1]
        return self.inner.accepts(value)

    def payload(self, value: str) -> str:
        if value.startswith(self.opening) and value.endswith(self.closing):
            return value[1:-1]
        return value

    def describe(self) -> str:
        return f"{self.inner.describe()} (optionally in {self.opening}{self.closing})"


@dataclass(frozen=True)
class Code128Characters:
    """
    ASCII data read in code sets A, B and C, plus the Code128 function,
    shift, code set, start and stop symbols.
    """

    def accepts(self, value: str) -> bool:
        return code128_values(value) is not None

    def payload(self, value: str) -> str:
        return value

    def describe(self) -> str:
        return "ASCII in code sets A/B/C with Code128 control symbols"


CharacterSet = (
    Alphabet | AsciiRange | FramedAlphabet | TrailingSymbolAlphabet | Bracketed | Code128Characters
)


# -- Rules -------------------------------------------------------------------


@dataclass(frozen=True)
class SymbologyRule:
    """
    Everything needed to validate one barcode standard.

    ``checksum_by_length`` overrides ``checksum`` for specific lengths; a
    ``None`` entry marks a form that carries no check character at all
    (EAN-8 with 7 digits, UPC-E with 6 or 7).
    """

    name: str
    length: LengthSpec
    characters: CharacterSet
    checksum: ChecksumSpec
    use_checksum: bool = True
    checksum_by_length: Mapping[int, ChecksumSpec | None] = field(
        default_factory=lambda: MappingProxyType({})
    )

    def checksum_for(self, length: int) -> ChecksumSpec | None:
        """Checksum spec that applies to a value of ``length`` characters."""
        if length in self.checksum_by_length:
            return self.checksum_by_length[length]
        return self.checksum


NUMERIC = Alphabet.of(DIGITS)
CODE39_CHARACTERS = Alphabet.of(CODE39_ALPHABET)
ASCII = AsciiRange(128)

NO_CHECKSUM = ChecksumSpec(ChecksumAlgorithm.NONE)
UNSUPPORTED_CHECKSUM = ChecksumSpec(ChecksumAlgorithm.UNSUPPORTED)
GTIN_CHECKSUM = ChecksumSpec(ChecksumAlgorithm.WEIGHTED_MOD10, weights=(3, 1))
IDENTCODE_CHECKSUM = ChecksumSpec(ChecksumAlgorithm.WEIGHTED_MOD10, weights=(4, 9))
CODE25_CHECKSUM = ChecksumSpec(ChecksumAlgorithm.WEIGHTED_MOD10, weights=(3, 1), from_right=False)


def _gtin(symbology: Symbology, *lengths: int) -> SymbologyRule:
    return SymbologyRule(symbology.value, exact(*lengths), NUMERIC, GTIN_CHECKSUM)


EAN_2 = SymbologyRule(Symbology.EAN_2.value, exact(2), NUMERIC, NO_CHECKSUM, use_checksum=False)
EAN_5 = SymbologyRule(Symbology.EAN_5.value, exact(5), NUMERIC, NO_CHECKSUM, use_checksum=False)
EAN_8 = SymbologyRule(
    Symbology.EAN_8.value,
    exact(7, 8),
    NUMERIC,
    GTIN_CHECKSUM,
    checksum_by_length=MappingProxyType({7: None}),
)
EAN_12 = _gtin(Symbology.EAN_12, 12)
EAN_13 = _gtin(Symbology.EAN_13, 13)
EAN_14 = _gtin(Symbology.EAN_14, 14)
EAN_18 = _gtin(Symbology.EAN_18, 18)
GTIN_12 = _gtin(Symbology.GTIN_12, 12)
GTIN_13 = _gtin(Symbology.GTIN_13, 13)
GTIN_14 = _gtin(Symbology.GTIN_14, 14)
UPC_A = _gtin(Symbology.UPC_A, 12)
UPC_E = SymbologyRule(
    Symbology.UPC_E.value,
    exact(6, 7, 8),
    NUMERIC,
    GTIN_CHECKSUM,
    checksum_by_length=MappingProxyType({6: None, 7: None}),
)
ITF_14 = _gtin(Symbology.ITF_14, 14)
SSCC = _gtin(Symbology.SSCC, 18)

IDENTCODE = SymbologyRule(Symbology.IDENTCODE.value, exact(12), NUMERIC, IDENTCODE_CHECKSUM)
LEITCODE = SymbologyRule(Symbology.LEITCODE.value, exact(14), NUMERIC, IDENTCODE_CHECKSUM)

ISSN = SymbologyRule(
    Symbology.ISSN.value,
    exact(8, 13),
    TrailingSymbolAlphabet(NUMERIC, frozenset("X"), frozenset({8})),
    ChecksumSpec(ChecksumAlgorithm.ISSN),
    checksum_by_length=MappingProxyType({13: GTIN_CHECKSUM}),
)

CODE25 = SymbologyRule(
    Symbology.CODE25.value, AnyLength(), NUMERIC, CODE25_CHECKSUM, use_checksum=False
)
CODE25_INTERLEAVED = SymbologyRule(
    Symbology.CODE25_INTERLEAVED.value,
    ParityLength(even=True),
    NUMERIC,
    CODE25_CHECKSUM,
    use_checksum=False,
)

CODE39 = SymbologyRule(
    Symbology.CODE39.value,
    AnyLength(),
    CODE39_CHARACTERS,
    ChecksumSpec(ChecksumAlgorithm.CODE39),
    use_checksum=False,
)
CODE39_EXT = SymbologyRule(
    Symbology.CODE39_EXT.value, AnyLength(), ASCII, UNSUPPORTED_CHECKSUM, use_checksum=False
)
CODE93 = SymbologyRule(
    Symbology.CODE93.value,
    AnyLength(),
    CODE39_CHARACTERS,
    ChecksumSpec(ChecksumAlgorithm.CODE93),
    use_checksum=False,
)
CODE93_EXT = SymbologyRule(
    Symbology.CODE93_EXT.value, AnyLength(), ASCII, UNSUPPORTED_CHECKSUM, use_checksum=False
)

CODE128 = SymbologyRule(
    Symbology.CODE128.value,
    AnyLength(),
    Code128Characters(),
    ChecksumSpec(ChecksumAlgorithm.CODE128),
)

CODABAR = SymbologyRule(
    Symbology.CODABAR.value,
    AnyLength(),
    FramedAlphabet(
        interior=Alphabet.of(DIGITS + "-$:/.+"),
        frames=(frozenset("ABCD"), frozenset("TN*E")),
    ),
    NO_CHECKSUM,
    use_checksum=False,
)

POSTNET = SymbologyRule(
    Symbology.POSTNET.value,
    exact(6, 7, 10, 12),
    NUMERIC,
    ChecksumSpec(ChecksumAlgorithm.POSTNET),
)
PLANET = SymbologyRule(
    Symbology.PLANET.value,
    exact(12, 14),
    NUMERIC,
    ChecksumSpec(ChecksumAlgorithm.POSTNET),
)
ROYAL_MAIL = SymbologyRule(
    Symbology.ROYAL_MAIL.value,
    AnyLength(),
    Bracketed(Alphabet.of(UPPER_ALPHANUMERIC)),
    ChecksumSpec(ChecksumAlgorithm.ROYALMAIL),
)
INTELLIGENT_MAIL = SymbologyRule(
    Symbology.INTELLIGENT_MAIL.value,
    exact(20, 25, 29, 31),
    NUMERIC,
    ChecksumSpec(ChecksumAlgorithm.INTELLIGENTMAIL),
    use_checksum=False,
)


SYMBOLOGY_RULES: Mapping[Symbology, SymbologyRule] = MappingProxyType({
    Symbology.CODABAR: CODABAR,
    Symbology.CODE25: CODE25,
    Symbology.CODE25_INTERLEAVED: CODE25_INTERLEAVED,
    Symbology.CODE39: CODE39,
    Symbology.CODE39_EXT: CODE39_EXT,
    Symbology.CODE93: CODE93,
    Symbology.CODE93_EXT: CODE93_EXT,
    Symbology.CODE128: CODE128,
    Symbology.EAN_2: EAN_2,
    Symbology.EAN_5: EAN_5,
    Symbology.EAN_8: EAN_8,
    Symbology.EAN_12: EAN_12,
    Symbology.EAN_13: EAN_13,
    Symbology.EAN_14: EAN_14,
    Symbology.EAN_18: EAN_18,
    Symbology.GTIN_12: GTIN_12,
    Symbology.GTIN_13: GTIN_13,
    Symbology.GTIN_14: GTIN_14,
    Symbology.IDENTCODE: IDENTCODE,
    Symbology.INTELLIGENT_MAIL: INTELLIGENT_MAIL,
    Symbology.ISSN: ISSN,
    Symbology.ITF_14: ITF_14,
    Symbology.LEITCODE: LEITCODE,
    Symbology.PLANET: PLANET,
    Symbology.POSTNET: POSTNET,
    Symbology.ROYAL_MAIL: ROYAL_MAIL,
    Symbology.SSCC: SSCC,
    Symbology.UPC_A: UPC_A,
    Symbology.UPC_E: UPC_E,
})
