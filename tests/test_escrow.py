import struct

import pytest

from onchainkit.accounts import PROGRAM_ID, AccountInfo, ProgramError, ProgramErrorKind
from onchainkit.escrow import (
    Escrow,
    EscrowError,
    EscrowInstruction,
    add,
    check_program_id,
    init_escrow,
)

MAKER = bytes(range(32))
MINT_A = bytes([7] * 32)
MINT_B = bytes([9] * 32)


def test_add_works():
    assert add(2, 2) == 4


def test_round_trip():
    escrow = Escrow(42, MAKER, MINT_A, MINT_B, 1_000)
    assert Escrow.from_bytes(escrow.to_bytes()) == escrow


def test_wire_layout():
    raw = Escrow(42, MAKER, MINT_A, MINT_B, 1_000).to_bytes()
    assert struct.unpack_from("<Q", raw, 0)[0] == 42
    assert raw[8:40] == MAKER
    assert raw[40:72] == MINT_A
    assert raw[72:104] == MINT_B
    assert struct.unpack_from("<Q", raw, 104)[0] == 1_000


def test_from_bytes_wrong_length():
    with pytest.raises(ProgramError) as info:
        Escrow.from_bytes(bytes(Escrow.LEN - 1))
    assert info.value.kind is ProgramErrorKind.INVALID_INSTRUCTION_DATA


def test_bad_key_length_rejected():
    with pytest.raises(ValueError):
        Escrow(1, bytes(31), MINT_A, MINT_B, 1)


def test_amount_out_of_range_rejected():
    with pytest.raises(ValueError):
        Escrow(1, MAKER, MINT_A, MINT_B, 1 << 64)


def test_init_escrow_writes_account():
    account = AccountInfo(key=bytes([1] * 32), owner=PROGRAM_ID, data=bytearray(Escrow.LEN))
    escrow = init_escrow(account, 5, MAKER, MINT_A, MINT_B, 77)
    assert bytes(account.data) == escrow.to_bytes()
    assert Escrow.from_bytes(account.data).amount == 77


def test_init_escrow_wrong_size():
    account = AccountInfo(key=bytes([1] * 32), data=bytearray(10))
    with pytest.raises(ProgramError) as info:
        init_escrow(account, 5, MAKER, MINT_A, MINT_B, 77)
    assert info.value.kind is ProgramErrorKind.INVALID_INSTRUCTION_DATA
    assert bytes(account.data) == bytes(10)


def test_check_program_id():
    check_program_id(PROGRAM_ID)
    with pytest.raises(ProgramError) as info:
        check_program_id(bytes(32))
    assert info.value.kind is ProgramErrorKind.INCORRECT_PROGRAM_ID


@pytest.mark.parametrize(
    "value, expected",
    [(0, EscrowInstruction.MAKE), (1, EscrowInstruction.TAKE), (2, EscrowInstruction.REFUND)],
)
def test_instruction_from_byte(value, expected):
    assert EscrowInstruction.from_byte(value) is expected


def test_instruction_from_bad_byte():
    with pytest.raises(ValueError, match="Wrong Instruction"):
        EscrowInstruction.from_byte(3)


def test_error_converts_to_custom():
    error = EscrowError.ESCROW_ACCOUNT_MISMATCH.to_program_error()
    assert error.kind is ProgramErrorKind.CUSTOM
    assert error.code == 0
    assert EscrowError.ESCROW_ACCOUNT_MISMATCH.message == "Escrow account mismatch"