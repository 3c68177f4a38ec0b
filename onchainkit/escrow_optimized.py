"""Compact escrow layout read in place, and its make instruction."""

from __future__ import annotations

import enum
from typing import Sequence

from .accounts import PUBKEY_LEN, AccountInfo, ProgramError, ProgramErrorKind

_MAKER = 0
_MAKER_TA_B = _MAKER + PUBKEY_LEN
_MINT_A = _MAKER_TA_B + PUBKEY_LEN
_MINT_B = _MINT_A + PUBKEY_LEN
_AMOUNT_B = _MINT_B + PUBKEY_LEN


class OptimizedInstruction(enum.IntEnum):
    """Instruction discriminators of the compact escrow program."""

    MAKE = 0
    TAKE = 1
    REFUND = 2

    @classmethod
    def from_byte(cls, value: int) -> OptimizedInstruction:
        """Return the instruction for discriminator ``value``."""
        try:
            return cls(value)
        except ValueError:
            raise ProgramError(ProgramErrorKind.INVALID_INSTRUCTION_DATA) from None


class EscrowView:
    """Live view of an escrow account.

    Layout: maker, maker's token account for B, mint A, mint B
    (32 bytes each) and amount of B (u64, little endian).
    """

    LEN = _AMOUNT_B + 8

    def __init__(self, account: AccountInfo) -> None:
        self.account = account

    def _read(self, offset: int, size: int) -> bytes:
        data = self.account.data
        if len(data) < offset + size:
            raise ProgramError(ProgramErrorKind.ACCOUNT_DATA_TOO_SMALL)
        return bytes(data[offset : offset + size])

    @property
    def maker(self) -> bytes:
        """Key of the account that made the offer."""
        return self._read(_MAKER, PUBKEY_LEN)

    @property
    def maker_ta_b(self) -> bytes:
        """Maker's token account that receives token B."""
        return self._read(_MAKER_TA_B, PUBKEY_LEN)

    @property
    def mint_a(self) -> bytes:
        """Mint of the offered token."""
        return self._read(_MINT_A, PUBKEY_LEN)

    @property
    def mint_b(self) -> bytes:
        """Mint of the wanted token."""
        return self._read(_MINT_B, PUBKEY_LEN)

    @property
    def amount_b(self) -> int:
        """Amount of token B the maker wants."""
        return int.from_bytes(self._read(_AMOUNT_B, 8), "little")


def make(accounts: Sequence[AccountInfo], data: bytes) -> EscrowView:
    """Record the maker and the maker's B token account in a signing escrow account."""
    if len(accounts) != 3:
        raise ProgramError(ProgramErrorKind.NOT_ENOUGH_ACCOUNT_KEYS)
    maker, escrow, _system_program = accounts
    if not escrow.is_signer:
        raise ProgramError(ProgramErrorKind.MISSING_REQUIRED_SIGNATURE)
    if len(data) < PUBKEY_LEN:
        raise ProgramError(ProgramErrorKind.INVALID_INSTRUCTION_DATA)
    if len(escrow.data) < _MAKER_TA_B + PUBKEY_LEN:
        raise ProgramError(ProgramErrorKind.ACCOUNT_DATA_TOO_SMALL)
    escrow.data[_MAKER : _MAKER + PUBKEY_LEN] = maker.key
    escrow.data[_MAKER_TA_B : _MAKER_TA_B + PUBKEY_LEN] = bytes(data[:PUBKEY_LEN])
    return EscrowView(escrow)