"""Layout of the AMM pool configuration account."""

from __future__ import annotations

from .accounts import PROGRAM_ID, PUBKEY_LEN, AccountInfo, ProgramError, ProgramErrorKind

_STATUS = 0
_UPDATE_AUTHORITY = 1
_MINT_X = _UPDATE_AUTHORITY + PUBKEY_LEN
_MINT_Y = _MINT_X + PUBKEY_LEN
_MINT_LP = _MINT_Y + PUBKEY_LEN
_VAULT_X = _MINT_LP + PUBKEY_LEN
_VAULT_Y = _VAULT_X + PUBKEY_LEN
_FEE = _VAULT_Y + PUBKEY_LEN
_AUTHORITY_BUMP = _FEE + 2


class Config:
    """Live view of a pool configuration account.

    Layout: status (u8), update authority, mint X, mint Y, mint LP,
    vault X, vault Y (32 bytes each), fee (u16, little endian) and
    authority bump (u8).
    """

    LEN = 1 + PUBKEY_LEN * 6 + 2 + 1
    OWNER = PROGRAM_ID

    def __init__(self, account: AccountInfo) -> None:
        self.account = account

    @classmethod
    def from_account_info_unchecked(cls, account: AccountInfo) -> Config:
        """Wrap ``account`` without checking its length or owner."""
        return cls(account)

    @classmethod
    def from_account_info(cls, account: AccountInfo) -> Config:
        """Wrap ``account`` after checking its data length and owner."""
        if len(account.data) != cls.LEN:
            raise ProgramError(ProgramErrorKind.INVALID_ACCOUNT_DATA)
        if account.owner != cls.OWNER:
            raise ProgramError(ProgramErrorKind.ILLEGAL_OWNER)
        return cls.from_account_info_unchecked(account)

    def _read(self, offset: int, size: int) -> bytes:
        data = self.account.data
        if len(data) < offset + size:
            raise ProgramError(ProgramErrorKind.ACCOUNT_DATA_TOO_SMALL)
        return bytes(data[offset : offset + size])

    @property
    def status(self) -> int:
        """Pool status: 0 when open, 1 when locked."""
        return self._read(_STATUS, 1)[0]

    @status.setter
    def status(self, value: int) -> None:
        if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= 0xFF:
            raise ValueError(f"status must fit in a byte, got {value!r}")
        if len(self.account.data) <= _STATUS:
            raise ProgramError(ProgramErrorKind.ACCOUNT_DATA_TOO_SMALL)
        self.account.data[_STATUS] = value

    @property
    def update_authority(self) -> bytes:
        """Key allowed to lock and unlock the pool."""
        return self._read(_UPDATE_AUTHORITY, PUBKEY_LEN)

    @property
    def mint_x(self) -> bytes:
        """Mint of token X."""
        return self._read(_MINT_X, PUBKEY_LEN)

    @property
    def mint_y(self) -> bytes:
        """Mint of token Y."""
        return self._read(_MINT_Y, PUBKEY_LEN)

    @property
    def mint_lp(self) -> bytes:
        """Mint of the liquidity-provider token."""
        return self._read(_MINT_LP, PUBKEY_LEN)

    @property
    def vault_x(self) -> bytes:
        """Token account holding the pool's X reserve."""
        return self._read(_VAULT_X, PUBKEY_LEN)

    @property
    def vault_y(self) -> bytes:
        """Token account holding the pool's Y reserve."""
        return self._read(_VAULT_Y, PUBKEY_LEN)

    @property
    def fee(self) -> int:
        """Swap fee in basis points."""
        return int.from_bytes(self._read(_FEE, 2), "little")

    @property
    def authority_bump(self) -> int:
        """Bump seed of the pool authority address."""
        return self._read(_AUTHORITY_BUMP, 1)[0]