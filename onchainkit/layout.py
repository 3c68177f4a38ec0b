"""Declarative fixed-offset views over account data."""

from __future__ import annotations

import logging
import struct
from dataclasses import dataclass
from typing import Any, ClassVar, Sequence

from .accounts import PROGRAM_ID, AccountInfo, ProgramError, ProgramErrorKind

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Field:
    """A named value stored at a fixed offset, packed with a struct format."""

    name: str
    fmt: str
    offset: int


class AccountView:
    """A live view of an account's data laid out by ``FIELDS``."""

    FIELDS: ClassVar[tuple[Field, ...]] = ()
    OWNER: ClassVar[bytes] = PROGRAM_ID
    LEN: ClassVar[int] = 0
    _by_name: ClassVar[dict[str, Field]] = {}

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        cls._by_name = {f.name: f for f in cls.FIELDS}
        # Each field contributes its size plus its offset.
        cls.LEN = sum(struct.calcsize(f.fmt) + f.offset for f in cls.FIELDS)

    def __init__(self, account: AccountInfo) -> None:
        self.account = account

    @classmethod
    def from_account_info_unchecked(cls, account: AccountInfo) -> AccountView:
        """Wrap ``account`` without checking its length or owner."""
        return cls(account)

    @classmethod
    def from_account_info(cls, account: AccountInfo) -> AccountView:
        """Wrap ``account`` after checking its data length and owner."""
        if len(account.data) != cls.LEN:
            raise ProgramError(ProgramErrorKind.INVALID_ACCOUNT_DATA)
        if account.owner != cls.OWNER:
            raise ProgramError(ProgramErrorKind.ILLEGAL_OWNER)
        return cls.from_account_info_unchecked(account)

    def _field(self, name: str) -> Field:
        try:
            return self._by_name[name]
        except KeyError:
            raise KeyError(f"{type(self).__name__} has no field {name!r}") from None

    def get(self, name: str) -> Any:
        """Read the field ``name`` from the account data."""
        spec = self._field(name)
        try:
            return struct.unpack_from(spec.fmt, self.account.data, spec.offset)[0]
        except struct.error:
            raise ProgramError(ProgramErrorKind.ACCOUNT_DATA_TOO_SMALL) from None

    def set(self, name: str, value: Any) -> None:
        """Write ``value`` into the field ``name`` of the account data."""
        spec = self._field(name)
        if len(self.account.data) < spec.offset + struct.calcsize(spec.fmt):
            raise ProgramError(ProgramErrorKind.ACCOUNT_DATA_TOO_SMALL)
        if spec.fmt.endswith("s") and len(value) != struct.calcsize(spec.fmt):
            raise ValueError(f"{name} must be {struct.calcsize(spec.fmt)} bytes")
        try:
            struct.pack_into(spec.fmt, self.account.data, spec.offset, value)
        except struct.error as exc:
            raise ValueError(f"cannot store {value!r} in {name}: {exc}") from None


class MyAccount(AccountView):
    """Account holding a maker key, an amount and a bump seed."""

    FIELDS = (
        Field("maker", "32s", 0),
        Field("amount", "<Q", 32),
        Field("bump", "B", 40),
    )


def process_instruction(
    program_id: bytes, accounts: Sequence[AccountInfo], instruction_data: bytes
) -> MyAccount:
    """Load the first account as ``MyAccount`` and log its maker."""
    logger.info("Hello World program entrypoint")
    try:
        account = next(iter(accounts))
    except StopIteration:
        raise ProgramError(ProgramErrorKind.NOT_ENOUGH_ACCOUNT_KEYS) from None
    view = MyAccount.from_account_info(account)
    logger.info("Maker Pubkey: %s", list(view.get("maker")))
    return view