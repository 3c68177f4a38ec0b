"""Constant-product AMM instructions: initialize, deposit, withdraw and lock."""

from __future__ import annotations

import enum
import struct
import time
from contextlib import contextmanager
from typing import Iterator, NamedTuple, Sequence

from .accounts import AccountInfo, ProgramError, ProgramErrorKind, TokenLedger
from .amm_state import Config
from .curve import CurveError, xy_deposit_amounts_from_l, xy_withdraw_amounts_from_l

PRECISION = 1_000_000_000

_AMOUNTS = struct.Struct("<QQQq")

STATUS_OPEN = 0
STATUS_LOCKED = 1


class AmmInstruction(enum.IntEnum):
    """Instruction discriminators understood by the AMM."""

    INITIALIZE = 0
    DEPOSIT = 1
    WITHDRAW = 2
    SWAP = 3
    LOCK = 4

    @classmethod
    def from_byte(cls, value: int) -> AmmInstruction:
        """Return the instruction for discriminator ``value``."""
        try:
            return cls(value)
        except ValueError:
            raise ProgramError(ProgramErrorKind.INVALID_INSTRUCTION_DATA) from None


class _Amounts(NamedTuple):
    amount: int
    limit_x: int
    limit_y: int
    expiration: int


def _require(condition: bool, kind: ProgramErrorKind) -> None:
    if not condition:
        raise ProgramError(kind)


def _unpack(accounts: Sequence[AccountInfo], count: int) -> tuple[AccountInfo, ...]:
    if len(accounts) != count:
        raise ProgramError(ProgramErrorKind.NOT_ENOUGH_ACCOUNT_KEYS)
    return tuple(accounts)


def _parse_amounts(data: bytes) -> _Amounts:
    try:
        return _Amounts(*_AMOUNTS.unpack_from(bytes(data)))
    except struct.error:
        raise ProgramError(ProgramErrorKind.INVALID_INSTRUCTION_DATA) from None


def _checked_pool(
    config: AccountInfo,
    mint_lp: AccountInfo,
    vault_x: AccountInfo,
    vault_y: AccountInfo,
    expiration: int,
    now: int,
) -> Config:
    pool = Config.from_account_info(config)
    _require(pool.status != STATUS_LOCKED, ProgramErrorKind.INVALID_ACCOUNT_DATA)
    _require(mint_lp.key == pool.mint_lp, ProgramErrorKind.INVALID_ARGUMENT)
    _require(vault_x.key == pool.vault_x, ProgramErrorKind.INVALID_ARGUMENT)
    _require(vault_y.key == pool.vault_y, ProgramErrorKind.INVALID_ARGUMENT)
    _require(expiration < now, ProgramErrorKind.INVALID_ARGUMENT)
    return pool


@contextmanager
def _atomic(ledger: TokenLedger) -> Iterator[None]:
    """Roll the ledger back if any step inside fails."""
    supplies = dict(ledger.supplies)
    balances = dict(ledger.balances)
    try:
        yield
    except BaseException:
        ledger.supplies.clear()
        ledger.supplies.update(supplies)
        ledger.balances.clear()
        ledger.balances.update(balances)
        raise


def initialize(accounts: Sequence[AccountInfo], data: bytes) -> None:
    """Populate a signing config account with the given pool layout."""
    (config,) = _unpack(accounts, 1)
    _require(config.is_signer, ProgramErrorKind.MISSING_REQUIRED_SIGNATURE)
    if len(data) < Config.LEN:
        raise ProgramError(ProgramErrorKind.INVALID_INSTRUCTION_DATA)
    if len(config.data) < Config.LEN:
        raise ProgramError(ProgramErrorKind.ACCOUNT_DATA_TOO_SMALL)
    config.data[: Config.LEN] = bytes(data[: Config.LEN])


def lock(accounts: Sequence[AccountInfo]) -> None:
    """Toggle the pool between open and locked; only the update authority may."""
    authority, config = _unpack(accounts, 2)
    _require(authority.is_signer, ProgramErrorKind.MISSING_REQUIRED_SIGNATURE)
    pool = Config.from_account_info(config)
    status = pool.status
    if status not in (STATUS_OPEN, STATUS_LOCKED):
        raise ProgramError(ProgramErrorKind.INVALID_ACCOUNT_DATA)
    _require(authority.key == pool.update_authority, ProgramErrorKind.INVALID_ARGUMENT)
    pool.status = STATUS_LOCKED if status == STATUS_OPEN else STATUS_OPEN


def deposit(
    accounts: Sequence[AccountInfo], data: bytes, ledger: TokenLedger, now: int
) -> None:
    """Deposit X and Y into the pool and mint LP tokens to the user."""
    (
        user,
        _authority,
        mint_lp,
        user_x,
        user_y,
        user_lp,
        vault_x,
        vault_y,
        config,
        _token_program,
    ) = _unpack(accounts, 10)
    amounts = _parse_amounts(data)
    _checked_pool(config, mint_lp, vault_x, vault_y, amounts.expiration, now)

    supply = ledger.supply(mint_lp.key)
    reserve_x = ledger.balance(vault_x.key)
    reserve_y = ledger.balance(vault_y.key)

    if supply == 0 and reserve_x == 0 and reserve_y == 0:
        x, y = amounts.limit_x, amounts.limit_y
    else:
        try:
            x, y = xy_deposit_amounts_from_l(reserve_x, reserve_y, supply, amounts.amount, PRECISION)
        except CurveError:
            raise ProgramError(ProgramErrorKind.ARITHMETIC_OVERFLOW) from None

    _require(x <= amounts.limit_x, ProgramErrorKind.INVALID_ARGUMENT)
    _require(y <= amounts.limit_y, ProgramErrorKind.INVALID_ARGUMENT)

    with _atomic(ledger):
        ledger.transfer(user_x.key, vault_x.key, user.key, x)
        ledger.transfer(user_y.key, vault_y.key, user.key, y)
        ledger.mint_to(mint_lp.key, user_lp.key, amounts.amount)


def withdraw(
    accounts: Sequence[AccountInfo], data: bytes, ledger: TokenLedger, now: int
) -> None:
    """Burn the user's LP tokens and pay out their share of X and Y."""
    (
        _user,
        authority,
        mint_lp,
        user_x,
        user_y,
        user_lp,
        vault_x,
        vault_y,
        config,
        _token_program,
    ) = _unpack(accounts, 10)
    amounts = _parse_amounts(data)
    _checked_pool(config, mint_lp, vault_x, vault_y, amounts.expiration, now)

    supply = ledger.supply(mint_lp.key)
    reserve_x = ledger.balance(vault_x.key)
    reserve_y = ledger.balance(vault_y.key)

    if supply == 0 and reserve_x == 0 and reserve_y == 0:
        x, y = amounts.limit_x, amounts.limit_y
    else:
        try:
            x, y = xy_withdraw_amounts_from_l(reserve_x, reserve_y, supply, amounts.amount, PRECISION)
        except CurveError:
            raise ProgramError(ProgramErrorKind.ARITHMETIC_OVERFLOW) from None

    _require(x <= amounts.limit_x, ProgramErrorKind.INVALID_ARGUMENT)
    _require(y <= amounts.limit_y, ProgramErrorKind.INVALID_ARGUMENT)

    with _atomic(ledger):
        ledger.transfer(vault_x.key, user_x.key, authority.key, x)
        ledger.transfer(vault_y.key, user_y.key, authority.key, y)
        ledger.burn(mint_lp.key, user_lp.key, amounts.amount)


def process_instruction(
    program_id: bytes,
    accounts: Sequence[AccountInfo],
    instruction_data: bytes,
    ledger: TokenLedger | None = None,
    now: int | None = None,
) -> None:
    """Decode the discriminator byte and run the matching instruction."""
    if not instruction_data:
        raise ProgramError(ProgramErrorKind.INVALID_INSTRUCTION_DATA)
    instruction = AmmInstruction.from_byte(instruction_data[0])
    data = bytes(instruction_data[1:])

    if instruction is AmmInstruction.INITIALIZE:
        initialize(accounts, data)
    elif instruction is AmmInstruction.LOCK:
        lock(accounts)
    elif instruction in (AmmInstruction.DEPOSIT, AmmInstruction.WITHDRAW):
        if ledger is None:
            raise ValueError(f"{instruction.name.lower()} needs a token ledger")
        timestamp = int(time.time()) if now is None else now
        handler = deposit if instruction is AmmInstruction.DEPOSIT else withdraw
        handler(accounts, data, ledger, timestamp)
    else:
        # This processor carries no swap handler.
        raise ProgramError(ProgramErrorKind.INVALID_INSTRUCTION_DATA)