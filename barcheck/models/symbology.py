"""
Canonical symbology names.
"""

from enum import Enum


class Symbology(str, Enum):
    """Supported barcode symbologies."""

    CODABAR = "codabar"
    CODE25 = "code25"
    CODE25_INTERLEAVED = "code25interleaved"
    CODE39 = "code39"
    CODE39_EXT = "code39ext"
    CODE93 = "code93"
    CODE93_EXT = "code93ext"
    CODE128 = "code128"
    EAN_2 = "ean2"
    EAN_5 = "ean5"
    EAN_8 = "ean8"
    EAN_12 = "ean12"
    EAN_13 = "ean13"
    EAN_14 = "ean14"
    EAN_18 = "ean18"
    GTIN_12 = "gtin12"
    GTIN_13 = "gtin13"
    GTIN_14 = "gtin14"
    IDENTCODE = "identcode"
    INTELLIGENT_MAIL = "intelligentmail"
    ISSN = "issn"
    ITF_14 = "itf14"
    LEITCODE = "leitcode"
    PLANET = "planet"
    POSTNET = "postnet"
    ROYAL_MAIL = "royalmail"
    SSCC = "sscc"
    UPC_A = "upca"
    UPC_E = "upce"

    @classmethod
    def lookup(cls, name: str) -> "Symbology | None":
        """
        Find a symbology by name, ignoring case, dashes, underscores and spaces.

        ``"EAN-13"``, ``"ean_13"`` and ``"Ean13"`` all resolve to ``EAN_13``.
        """
        key = name.strip().lower()
        for char in "-_ ":
            key = key.replace(char, "")
        try:
            return cls(key)
        except ValueError:
            return None
