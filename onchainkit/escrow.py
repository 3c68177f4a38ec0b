"""Escrow account state, instruction discriminators and errors."""

from __future__ import annotations

import enum
import struct
from dataclasses import dataclass

from .accounts import (
    PROGRAM_ID,
    PUBKEY_LEN,
    AccountInfo,
    ProgramError,
    ProgramErrorKind,
)

SEED_OFFSET = 8
AMOUNT_OFFSET = 16

U64_MAX = (1 << 64) - 1

ESCROW_PROGRAM_ID = PROGRAM_ID

_LAYOUT = struct.Struct(f"<Q{PUBKEY_LEN}s{PUBKEY_LEN}s{PUBKEY_LEN}sQ")


class EscrowError(enum.IntEnum):
    """Escrow-specific failures, reported as custom program errors."""

    ESCROW_ACCOUNT_MISMATCH = 0

    @property
    def message(self) -> str:
        """Human-readable description of the error."""
        return _MESSAGES[self]

    def to_program_error(self) -> ProgramError:
        """Return the custom program error carrying this error's code."""
        return ProgramError(ProgramErrorKind.CUSTOM, int(self))


_MESSAGES = {EscrowError.ESCROW_ACCOUNT_MISMATCH: "Escrow account mismatch"}


class EscrowInstruction(enum.IntEnum):
    """Instruction discriminators understood by the escrow program."""

    MAKE = 0
    TAKE = 1
    REFUND = 2

    @classmethod
    def from_byte(cls, value: int) -> EscrowInstruction:
        """Return the instruction for discriminator ``value``."""
        try:
            return cls(value)
        except ValueError:
            raise ValueError("Wrong Instruction") from None


def _check_u64(name: str, value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= U64_MAX:
        raise ValueError(f"{name} must be an integer between 0 and {U64_MAX}, got {value!r}")
    return value


def _check_key(name: str, value: bytes) -> bytes:
    value = bytes(value)
    if len(value) != PUBKEY_LEN:
        raise ValueError(f"{name} must be {PUBKEY_LEN} bytes, got {len(value)}")
    return value


@dataclass(frozen=True)
class Escrow:
    """An escrow offer: seed, maker, the two mints and the amount wanted."""

    seed: int
    maker: bytes
    mint_a: bytes
    mint_b: bytes
    amount: int

    LEN = _LAYOUT.size

    def __post_init__(self) -> None:
        _check_u64("seed", self.seed)
        _check_u64("amount", self.amount)
        for name in ("maker", "mint_a", "mint_b"):
            object.__setattr__(self, name, _check_key(name, getattr(self, name)))

    def to_bytes(self) -> bytes:
        """Serialize to the fixed little-endian account layout."""
        return _LAYOUT.pack(self.seed, self.maker, self.mint_a, self.mint_b, self.amount)

    @classmethod
    def from_bytes(cls, data: bytes) -> Escrow:
        """Deserialize from account data of exactly ``LEN`` bytes."""
        if len(data) != cls.LEN:
            raise ProgramError(ProgramErrorKind.INVALID_INSTRUCTION_DATA)
        return cls(*_LAYOUT.unpack(bytes(data)))


def init_escrow(
    account: AccountInfo,
    seed: int,
    maker: bytes,
    mint_a: bytes,
    mint_b: bytes,
    amount: int,
) -> Escrow:
    """Write a new escrow record into ``account`` and return it."""
    escrow = Escrow(seed, maker, mint_a, mint_b, amount)
    if len(account.data) != Escrow.LEN:
        raise ProgramError(ProgramErrorKind.INVALID_INSTRUCTION_DATA)
    account.data[:] = escrow.to_bytes()
    return escrow


def check_program_id(program_id: bytes) -> None:
    """Raise unless ``program_id`` is the escrow program's address."""
    if bytes(program_id) != ESCROW_PROGRAM_ID:
        raise ProgramError(ProgramErrorKind.INCORRECT_PROGRAM_ID)


def add(left: int, right: int) -> int:
    """Return the sum of two numbers."""
    return left + right