"""Account model, program errors, public keys and a token ledger."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

PUBKEY_LEN = 32
U64_MAX = (1 << 64) - 1

_ALPHABET = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"
_INDEX = {char: value for value, char in enumerate(_ALPHABET)}


def decode_pubkey(text: str) -> bytes:
    """Decode a base58 string into a 32-byte public key."""
    number = 0
    for char in text:
        try:
            number = number * 58 + _INDEX[char]
        except KeyError:
            raise ValueError(f"invalid base58 character {char!r}") from None
    leading_zeros = len(text) - len(text.lstrip("1"))
    body = number.to_bytes((number.bit_length() + 7) // 8, "big") if number else b""
    raw = bytes(leading_zeros) + body
    if len(raw) != PUBKEY_LEN:
        raise ValueError(f"decoded key is {len(raw)} bytes, expected {PUBKEY_LEN}")
    return raw


PDA_MARKER = b"ProgramDerivedAddress"
PROGRAM_ID = decode_pubkey("2" * 44)
SYSTEM_PROGRAM_ID = bytes(PUBKEY_LEN)


class ProgramErrorKind(enum.Enum):
    """Categories of failure a program can report."""

    INVALID_ARGUMENT = "invalid argument"
    INVALID_INSTRUCTION_DATA = "invalid instruction data"
    INVALID_ACCOUNT_DATA = "invalid account data"
    ACCOUNT_DATA_TOO_SMALL = "account data too small"
    INSUFFICIENT_FUNDS = "insufficient funds"
    INCORRECT_PROGRAM_ID = "incorrect program id"
    MISSING_REQUIRED_SIGNATURE = "missing required signature"
    NOT_ENOUGH_ACCOUNT_KEYS = "not enough account keys"
    ILLEGAL_OWNER = "illegal owner"
    ARITHMETIC_OVERFLOW = "arithmetic overflow"
    CUSTOM = "custom program error"


class ProgramError(Exception):
    """A failure reported by a program; ``code`` is set for custom errors."""

    def __init__(self, kind: ProgramErrorKind, code: int = 0) -> None:
        self.kind = kind
        self.code = code
        message = kind.value if kind is not ProgramErrorKind.CUSTOM else f"{kind.value}: {code:#x}"
        super().__init__(message)


def _check_key(name: str, value: bytes) -> bytes:
    value = bytes(value)
    if len(value) != PUBKEY_LEN:
        raise ValueError(f"{name} must be {PUBKEY_LEN} bytes, got {len(value)}")
    return value


@dataclass
class AccountInfo:
    """An account handed to a program: address, owner, data and flags."""

    key: bytes
    owner: bytes = SYSTEM_PROGRAM_ID
    data: bytearray = field(default_factory=bytearray)
    is_signer: bool = False
    is_writable: bool = True
    lamports: int = 0

    def __post_init__(self) -> None:
        self.key = _check_key("key", self.key)
        self.owner = _check_key("owner", self.owner)
        self.data = bytearray(self.data)


@dataclass
class TokenLedger:
    """In-memory token balances and mint supplies, keyed by account address."""

    supplies: dict[bytes, int] = field(default_factory=dict)
    balances: dict[bytes, int] = field(default_factory=dict)
    owners: dict[bytes, bytes] = field(default_factory=dict)
    account_mints: dict[bytes, bytes] = field(default_factory=dict)

    @staticmethod
    def _check_amount(amount: int) -> int:
        if isinstance(amount, bool) or not isinstance(amount, int) or not 0 <= amount <= U64_MAX:
            raise ProgramError(ProgramErrorKind.INVALID_ARGUMENT)
        return amount

    def _check_mint(self, token: bytes, mint: bytes) -> None:
        if self.account_mints.get(token, mint) != mint:
            raise ProgramError(ProgramErrorKind.INVALID_ACCOUNT_DATA)

    def supply(self, mint: bytes) -> int:
        """Return the total supply of ``mint``."""
        try:
            return self.supplies[mint]
        except KeyError:
            raise ProgramError(ProgramErrorKind.INVALID_ACCOUNT_DATA) from None

    def balance(self, account: bytes) -> int:
        """Return the token balance held by ``account``."""
        try:
            return self.balances[account]
        except KeyError:
            raise ProgramError(ProgramErrorKind.INVALID_ACCOUNT_DATA) from None

    def transfer(self, source: bytes, destination: bytes, authority: bytes, amount: int) -> None:
        """Move ``amount`` tokens from ``source`` to ``destination``."""
        self._check_amount(amount)
        source_balance = self.balance(source)
        destination_balance = self.balance(destination)
        owner = self.owners.get(source)
        if owner is not None and owner != authority:
            raise ProgramError(ProgramErrorKind.ILLEGAL_OWNER)
        source_mint = self.account_mints.get(source)
        if source_mint is not None:
            self._check_mint(destination, source_mint)
        if amount > source_balance:
            raise ProgramError(ProgramErrorKind.INSUFFICIENT_FUNDS)
        if source == destination:
            return
        if destination_balance + amount > U64_MAX:
            raise ProgramError(ProgramErrorKind.ARITHMETIC_OVERFLOW)
        self.balances[source] = source_balance - amount
        self.balances[destination] = destination_balance + amount

    def mint_to(self, mint: bytes, token: bytes, amount: int) -> None:
        """Create ``amount`` new tokens of ``mint`` in ``token``."""
        self._check_amount(amount)
        supply = self.supply(mint)
        balance = self.balance(token)
        self._check_mint(token, mint)
        if supply + amount > U64_MAX or balance + amount > U64_MAX:
            raise ProgramError(ProgramErrorKind.ARITHMETIC_OVERFLOW)
        self.supplies[mint] = supply + amount
        self.balances[token] = balance + amount

    def burn(self, mint: bytes, token: bytes, amount: int) -> None:
        """Destroy ``amount`` tokens of ``mint`` held in ``token``."""
        self._check_amount(amount)
        supply = self.supply(mint)
        balance = self.balance(token)
        self._check_mint(token, mint)
        if amount > balance or amount > supply:
            raise ProgramError(ProgramErrorKind.INSUFFICIENT_FUNDS)
        self.supplies[mint] = supply - amount
        self.balances[token] = balance - amount