import pytest

from onchainkit.accounts import (
    PROGRAM_ID,
    AccountInfo,
    ProgramError,
    ProgramErrorKind,
    TokenLedger,
    decode_pubkey,
)

MINT = bytes([1]) * 32
ALICE = bytes([2]) * 32
BOB = bytes([3]) * 32
ALICE_TA = bytes([4]) * 32
BOB_TA = bytes([5]) * 32
OTHER_MINT = bytes([6]) * 32


def make_ledger():
    return TokenLedger(
        supplies={MINT: 150},
        balances={ALICE_TA: 100, BOB_TA: 50},
        owners={ALICE_TA: ALICE, BOB_TA: BOB},
        account_mints={ALICE_TA: MINT, BOB_TA: MINT},
    )


def test_decode_default_pubkey():
    assert decode_pubkey("1" * 32) == bytes(32)


def test_decode_leading_ones_are_zero_bytes():
    assert decode_pubkey("1" * 31 + "2") == bytes(31) + b"\x01"


def test_program_id_is_decoded_from_twos():
    assert PROGRAM_ID == decode_pubkey("2" * 44)
    assert len(PROGRAM_ID) == 32
    assert PROGRAM_ID[0] != 0


@pytest.mark.parametrize("text", ["0" * 32, "O" * 44, "l" * 44, "I" * 44])
def test_decode_rejects_invalid_characters(text):
    with pytest.raises(ValueError):
        decode_pubkey(text)


@pytest.mark.parametrize("text", ["", "1" * 31, "1" * 33, "2" * 41])
def test_decode_rejects_wrong_length(text):
    with pytest.raises(ValueError):
        decode_pubkey(text)


def test_program_error_carries_kind_and_code():
    error = ProgramError(ProgramErrorKind.CUSTOM, 7)
    assert error.kind is ProgramErrorKind.CUSTOM
    assert error.code == 7
    plain = ProgramError(ProgramErrorKind.NOT_ENOUGH_ACCOUNT_KEYS)
    assert str(plain) == ProgramErrorKind.NOT_ENOUGH_ACCOUNT_KEYS.value


def test_account_info_normalises_data():
    account = AccountInfo(key=ALICE, owner=PROGRAM_ID, data=b"\x01\x02")
    assert isinstance(account.data, bytearray)
    account.data[0] = 9
    assert bytes(account.data) == b"\x09\x02"
    assert account.is_signer is False


def test_account_info_rejects_short_key():
    with pytest.raises(ValueError):
        AccountInfo(key=b"\x00" * 31)


def test_transfer_moves_tokens_and_conserves_total():
    ledger = make_ledger()
    ledger.transfer(ALICE_TA, BOB_TA, ALICE, 30)
    assert ledger.balance(ALICE_TA) == 70
    assert ledger.balance(BOB_TA) == 80
    assert ledger.balance(ALICE_TA) + ledger.balance(BOB_TA) == ledger.supply(MINT)


def test_transfer_requires_owner():
    ledger = make_ledger()
    with pytest.raises(ProgramError) as info:
        ledger.transfer(ALICE_TA, BOB_TA, BOB, 1)
    assert info.value.kind is ProgramErrorKind.ILLEGAL_OWNER
    assert ledger.balance(ALICE_TA) == 100


def test_transfer_insufficient_funds():
    ledger = make_ledger()
    with pytest.raises(ProgramError) as info:
        ledger.transfer(BOB_TA, ALICE_TA, BOB, 51)
    assert info.value.kind is ProgramErrorKind.INSUFFICIENT_FUNDS


def test_transfer_between_mints_rejected():
    ledger = make_ledger()
    ledger.balances[BOB] = 0
    ledger.account_mints[BOB] = OTHER_MINT
    with pytest.raises(ProgramError) as info:
        ledger.transfer(ALICE_TA, BOB, ALICE, 1)
    assert info.value.kind is ProgramErrorKind.INVALID_ACCOUNT_DATA


def test_unknown_account():
    ledger = make_ledger()
    with pytest.raises(ProgramError) as info:
        ledger.balance(OTHER_MINT)
    assert info.value.kind is ProgramErrorKind.INVALID_ACCOUNT_DATA


def test_mint_then_burn_round_trip():
    ledger = make_ledger()
    ledger.mint_to(MINT, BOB_TA, 25)
    assert ledger.supply(MINT) == 175
    assert ledger.balance(BOB_TA) == 75
    ledger.burn(MINT, BOB_TA, 25)
    assert ledger.supply(MINT) == 150
    assert ledger.balance(BOB_TA) == 50


def test_burn_more_than_held():
    ledger = make_ledger()
    with pytest.raises(ProgramError) as info:
        ledger.burn(MINT, BOB_TA, 51)
    assert info.value.kind is ProgramErrorKind.INSUFFICIENT_FUNDS


def test_mint_overflow():
    ledger = make_ledger()
    with pytest.raises(ProgramError) as info:
        ledger.mint_to(MINT, ALICE_TA, (1 << 64) - 1)
    assert info.value.kind is ProgramErrorKind.ARITHMETIC_OVERFLOW


def test_negative_amount_rejected():
    ledger = make_ledger()
    with pytest.raises(ProgramError) as info:
        ledger.transfer(ALICE_TA, BOB_TA, ALICE, -1)
    assert info.value.kind is ProgramErrorKind.INVALID_ARGUMENT